"""Pydantic data contracts for the TransArena service.

Internal records (provider responses, verdicts) use plain snake_case models.
Everything that crosses the HTTP boundary derives from ``CamelModel`` so the
JSON bodies use camelCase keys while Python code keeps snake_case attributes.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProviderId(str, Enum):
    FAST = "fast"
    CAPABLE = "capable"


class Winner(str, Enum):
    FAST = "Fast"
    CAPABLE = "Capable"
    TIE = "Tie"


class Slot(str, Enum):
    A = "A"
    B = "B"
    TIE = "Tie"


# --- Catalogue ---

class LanguageProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    native_name: str
    script: str
    conventions: str


# --- Provider layer (internal, not persisted) ---

class ProviderResponse(BaseModel):
    text: str
    finish_reason: str


class ProviderResult(BaseModel):
    """Outcome of one translation call: text on success, error marker otherwise."""

    model_config = ConfigDict(frozen=True)

    provider: ProviderId
    text: str | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None and self.text is not None


# --- Judging ---

class AnonymizedPair(BaseModel):
    """Two candidate texts in judge slots.

    ``swapped`` is False when Fast sits in slot A and Capable in slot B.
    It stays on our side of the judge call and is never serialized into a prompt.
    """

    model_config = ConfigDict(frozen=True)

    slot_a: str
    slot_b: str
    swapped: bool


class Verdict(BaseModel):
    model_config = ConfigDict(frozen=True)

    score_a: float
    score_b: float
    semantic_similarity: float | None = None
    winning_slot: Slot = Slot.TIE
    reasoning: str = ""
    back_translation_a: str | None = None
    back_translation_b: str | None = None


# --- Comparison output ---

class LanguageComparisonRecord(CamelModel):
    language: str
    fast_translation: str | None = None
    capable_translation: str | None = None
    fast_score: float | None = None
    capable_score: float | None = None
    semantic_similarity: float | None = None
    winner: Winner | None = None
    reasoning: str | None = None
    fast_back_translation: str | None = None
    capable_back_translation: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ScoreCard(CamelModel):
    evaluated_count: int
    fast_average_score: float
    capable_average_score: float
    fast_wins: int
    capable_wins: int
    fast_win_rate: float
    capable_win_rate: float
    winner: Winner


class SimilarityReport(CamelModel):
    source_language: str
    models: dict[str, str]
    score_card: ScoreCard
    results: dict[str, LanguageComparisonRecord]


class DetectionResult(CamelModel):
    language: str
    supported: bool
    native_name: str | None = None


class CheckEvaluation(CamelModel):
    back_translations: dict[str, str | None]
    fast_score: float
    capable_score: float
    semantic_similarity: float | None = None
    winner: Winner
    reasoning: str | None = None


class CheckReport(CamelModel):
    source_language: DetectionResult
    target_language: str
    target_native_name: str
    translations: dict[str, str | None]
    evaluation: CheckEvaluation
    models: dict[str, str]


# --- HTTP request / response bodies ---

class TranslationRequest(CamelModel):
    """Inbound translation body. Fields are validated by the service, not pydantic,
    so a missing field yields a 400 with our own error body."""

    text: str | None = None
    target_language: str | None = None
    source_language: str | None = None


class DetectRequest(CamelModel):
    text: str | None = None


class SimilarityRequest(CamelModel):
    text: str | None = None
    source_language: str | None = None


class TranslateResponse(CamelModel):
    translated: str
    source_language: str
    target_language: str
    target_native_name: str


class LanguageEntry(CamelModel):
    code: str
    native_name: str


class LanguagesResponse(CamelModel):
    languages: list[LanguageEntry]


class HealthResponse(CamelModel):
    status: str
    models: dict[str, str]
