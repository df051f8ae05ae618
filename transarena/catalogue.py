"""Supported target languages and their linguistic metadata.

The registry is built once at import time and exposed as a read-only mapping.
Its iteration order is significant: comparison runs and every per-language
output follow it.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from transarena.schemas import LanguageEntry, LanguageProfile

_PROFILES = [
    LanguageProfile(
        name="Chinese (Simplified)",
        native_name="简体中文",
        script="Simplified Chinese (简体字)",
        conventions="Use 普通话 standard. Never mix Traditional characters.",
    ),
    LanguageProfile(
        name="Chinese (Traditional)",
        native_name="繁體中文",
        script="Traditional Chinese (繁體字)",
        conventions="Use Taiwan/HK standard. Never mix Simplified characters.",
    ),
    LanguageProfile(
        name="Czech",
        native_name="Čeština",
        script="Latin + diacritics (á,č,ě,š,ž)",
        conventions="Preserve grammatical cases. Formal 'vy' unless clearly informal.",
    ),
    LanguageProfile(
        name="English",
        native_name="English",
        script="Latin",
        conventions="Natural modern English. Match British/American spelling from source.",
    ),
    LanguageProfile(
        name="French",
        native_name="Français",
        script="Latin + accents (é,è,ê,à,ç)",
        conventions="'vous' formal / 'tu' informal. Always include accents.",
    ),
    LanguageProfile(
        name="German",
        native_name="Deutsch",
        script="Latin + umlauts (ä,ö,ü,ß)",
        conventions="Capitalize all nouns. Correct gender articles (der/die/das).",
    ),
    LanguageProfile(
        name="Italian",
        native_name="Italiano",
        script="Latin + accents (à,è,ì,ò,ù)",
        conventions="Match formal (Lei) or informal (tu) from source.",
    ),
    LanguageProfile(
        name="Japanese",
        native_name="日本語",
        script="Hiragana + Katakana + Kanji",
        conventions="Polite です/ます for formal; plain form for casual. Loanwords in Katakana.",
    ),
    LanguageProfile(
        name="Korean",
        native_name="한국어",
        script="Hangul (한글)",
        conventions="합쇼체 for professional; 해요체 general. Loanwords phonetically in Hangul.",
    ),
    LanguageProfile(
        name="Polish",
        native_name="Polski",
        script="Latin + diacritics (ą,ć,ę,ł,ń,ó,ś,ź,ż)",
        conventions="Preserve grammatical gender and cases. Never drop diacritics.",
    ),
    LanguageProfile(
        name="Portuguese (Brazilian)",
        native_name="Português (Brasil)",
        script="Latin + accents (á,â,ã,é,ê,í,ó,ô,õ,ú,ç)",
        conventions="Brazilian vocab/spelling only. 'você' over 'tu'.",
    ),
    LanguageProfile(
        name="Russian",
        native_name="Русский",
        script="Cyrillic (Кириллица)",
        conventions="Always Cyrillic, never romanized. Preserve grammatical cases and verbal aspect.",
    ),
    LanguageProfile(
        name="Spanish",
        native_name="Español",
        script="Latin + accents (á,é,í,ó,ú,ñ,¿,¡)",
        conventions="Neutral Latin American Spanish. Include ¿ ¡. 'usted' for formal.",
    ),
    LanguageProfile(
        name="Ukrainian",
        native_name="Українська",
        script="Ukrainian Cyrillic (і,ї,є,ґ)",
        conventions="Ukrainian Cyrillic only. Never substitute Russian letters (і not и, ї not й).",
    ),
    LanguageProfile(
        name="Hindi",
        native_name="हिन्दी",
        script="Devanagari (देवनागरी)",
        conventions=(
            "Always Devanagari, never romanized. Correct gender agreement. "
            "'आप' formal / 'तुम/तू' casual."
        ),
    ),
    LanguageProfile(
        name="Marathi",
        native_name="मराठी",
        script="Devanagari (देवनागरी)",
        conventions=(
            "Always Devanagari, never romanized. Correct verb tense: 'आहे' (present) "
            "vs 'येईन' (future). 'आपण' formal / 'तू/तुम्ही' casual. Never substitute Hindi words."
        ),
    ),
]

SUPPORTED_LANGUAGES: Mapping[str, LanguageProfile] = MappingProxyType(
    {profile.name: profile for profile in _PROFILES}
)

UNKNOWN = "Unknown"


def is_supported(name: str | None) -> bool:
    return name is not None and name in SUPPORTED_LANGUAGES


def get_profile(name: str) -> LanguageProfile:
    """Return the profile for ``name``. Raises KeyError if unsupported."""
    return SUPPORTED_LANGUAGES[name]


def supported_language_list() -> str:
    return ", ".join(SUPPORTED_LANGUAGES)


def list_languages() -> list[LanguageEntry]:
    return [
        LanguageEntry(code=name, native_name=profile.native_name)
        for name, profile in SUPPORTED_LANGUAGES.items()
    ]
