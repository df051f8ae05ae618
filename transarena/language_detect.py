"""Language detection against the supported-language catalogue.

Two interchangeable strategies share the ``Detector`` interface:
``StatisticalDetector`` (langdetect n-gram profiles) and ``ModelDetector``
(an LLM told to answer with a catalogue name or "Unknown").  Both return a
plain language name; ``Detector.detect`` turns it into a DetectionResult.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Mapping

from langdetect import DetectorFactory, LangDetectException, detect

from transarena.catalogue import SUPPORTED_LANGUAGES, UNKNOWN
from transarena.config import GenerationConfig
from transarena.errors import ValidationError
from transarena.prompts import build_detection_prompt
from transarena.providers.base import BaseProvider
from transarena.schemas import DetectionResult, LanguageProfile

logger = logging.getLogger(__name__)

# langdetect is randomized by default; a fixed seed makes results repeatable
DetectorFactory.seed = 0

# langdetect codes -> language names.  Catalogue variants are mapped onto
# their catalogue keys; everything else keeps its plain English name.
LANGDETECT_NAMES: dict[str, str] = {
    "af": "Afrikaans",
    "ar": "Arabic",
    "bg": "Bulgarian",
    "bn": "Bengali",
    "ca": "Catalan",
    "cs": "Czech",
    "cy": "Welsh",
    "da": "Danish",
    "de": "German",
    "el": "Greek",
    "en": "English",
    "es": "Spanish",
    "et": "Estonian",
    "fa": "Persian",
    "fi": "Finnish",
    "fr": "French",
    "gu": "Gujarati",
    "he": "Hebrew",
    "hi": "Hindi",
    "hr": "Croatian",
    "hu": "Hungarian",
    "id": "Indonesian",
    "it": "Italian",
    "ja": "Japanese",
    "kn": "Kannada",
    "ko": "Korean",
    "lt": "Lithuanian",
    "lv": "Latvian",
    "mk": "Macedonian",
    "ml": "Malayalam",
    "mr": "Marathi",
    "ne": "Nepali",
    "nl": "Dutch",
    "no": "Norwegian",
    "pa": "Punjabi",
    "pl": "Polish",
    "pt": "Portuguese (Brazilian)",
    "ro": "Romanian",
    "ru": "Russian",
    "sk": "Slovak",
    "sl": "Slovenian",
    "so": "Somali",
    "sq": "Albanian",
    "sv": "Swedish",
    "sw": "Swahili",
    "ta": "Tamil",
    "te": "Telugu",
    "th": "Thai",
    "tl": "Tagalog",
    "tr": "Turkish",
    "uk": "Ukrainian",
    "ur": "Urdu",
    "vi": "Vietnamese",
    "zh-cn": "Chinese (Simplified)",
    "zh-tw": "Chinese (Traditional)",
}

# Longest plausible language name a model could answer with
_MAX_ANSWER_LENGTH = 40


def to_detection_result(
    name: str | None,
    languages: Mapping[str, LanguageProfile] = SUPPORTED_LANGUAGES,
) -> DetectionResult:
    """Build a DetectionResult; only catalogue languages get a native name."""
    if not name or name == UNKNOWN:
        return DetectionResult(language=UNKNOWN, supported=False, native_name=None)
    profile = languages.get(name)
    if profile is None:
        return DetectionResult(language=name, supported=False, native_name=None)
    return DetectionResult(language=name, supported=True, native_name=profile.native_name)


class Detector(ABC):
    def __init__(self, languages: Mapping[str, LanguageProfile] = SUPPORTED_LANGUAGES):
        self.languages = languages

    @abstractmethod
    async def classify(self, text: str) -> str:
        """Return a language name, or "Unknown"."""

    async def detect(self, text: str | None) -> DetectionResult:
        """Classify ``text`` against the catalogue.

        Raises:
            ValidationError: If ``text`` is missing or blank.
        """
        if not text or not text.strip():
            raise ValidationError("Text is required")
        name = await self.classify(text)
        result = to_detection_result(name, self.languages)
        logger.debug("Detected %s (supported=%s)", result.language, result.supported)
        return result


class StatisticalDetector(Detector):
    async def classify(self, text: str) -> str:
        try:
            # n-gram scoring is CPU-bound; keep it off the event loop
            code = await asyncio.to_thread(detect, text)
        except LangDetectException:
            # No usable features, e.g. digits or punctuation only
            return UNKNOWN
        return LANGDETECT_NAMES.get(code, UNKNOWN)


def normalize_model_answer(
    answer: str,
    languages: Mapping[str, LanguageProfile] = SUPPORTED_LANGUAGES,
) -> str:
    """Map a free-text model answer onto a catalogue key or "Unknown".

    Matching ignores case, surrounding quotes and trailing punctuation, and
    also accepts native names ("Français" -> "French").  An unrecognised short
    answer is returned cleaned up, so it is reported as unsupported.
    """
    lines = answer.strip().splitlines()
    cleaned = lines[0].strip().strip("`\"'*").rstrip(".").strip() if lines else ""
    if not cleaned or len(cleaned) > _MAX_ANSWER_LENGTH:
        return UNKNOWN

    folded = cleaned.casefold()
    if folded == UNKNOWN.casefold():
        return UNKNOWN
    for name, profile in languages.items():
        if folded in (name.casefold(), profile.native_name.casefold()):
            return name
    return cleaned


class ModelDetector(Detector):
    def __init__(
        self,
        provider: BaseProvider,
        generation: GenerationConfig | None = None,
        languages: Mapping[str, LanguageProfile] = SUPPORTED_LANGUAGES,
    ):
        super().__init__(languages)
        self.provider = provider
        self.generation = generation or GenerationConfig(max_tokens=20)

    async def classify(self, text: str) -> str:
        response = await self.provider.complete(
            system_prompt=build_detection_prompt(list(self.languages)),
            user_message=text,
            temperature=self.generation.temperature,
            max_tokens=self.generation.max_tokens,
            seed=self.generation.seed,
        )
        name = normalize_model_answer(response.text, self.languages)
        if name not in self.languages and name != UNKNOWN:
            logger.info("Model detector answered outside the catalogue: %r", name)
        return name
