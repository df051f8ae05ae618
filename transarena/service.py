"""Service facade wiring providers, translators, judge and detector together.

One ArenaService is built at startup and shared by every request; it holds
no per-request state, only the provider clients and their connection pools.
"""

from __future__ import annotations

import logging
import random
from typing import Mapping

from transarena.aggregator import DEFAULT_SOURCE_LANGUAGE, Aggregator
from transarena.catalogue import SUPPORTED_LANGUAGES, list_languages, supported_language_list
from transarena.comparator import Comparator
from transarena.config import ArenaConfig, GenerationConfig, load_api_keys
from transarena.errors import (
    ProviderError,
    UnsupportedLanguageError,
    UpstreamError,
    ValidationError,
)
from transarena.judge import Judge
from transarena.language_detect import Detector, ModelDetector, StatisticalDetector, to_detection_result
from transarena.providers import create_provider
from transarena.providers.base import BaseProvider
from transarena.schemas import (
    CheckEvaluation,
    CheckReport,
    DetectionResult,
    LanguageProfile,
    LanguagesResponse,
    SimilarityReport,
    SimilarityRequest,
    TranslateResponse,
    TranslationRequest,
)
from transarena.translation import Translator

logger = logging.getLogger(__name__)

AUTO_DETECTED = "auto-detected"


class ArenaService:
    def __init__(
        self,
        fast: Translator,
        capable: Translator,
        judge: Judge,
        detector: Detector,
        rng: random.Random | None = None,
        concurrency: int = 4,
        languages: Mapping[str, LanguageProfile] = SUPPORTED_LANGUAGES,
    ):
        self.fast = fast
        self.capable = capable
        self.judge = judge
        self.detector = detector
        self.languages = languages
        self.comparator = Comparator(fast, capable, judge, rng=rng)
        self.aggregator = Aggregator(self.comparator, languages=languages, concurrency=concurrency)

    @classmethod
    def from_config(
        cls,
        config: ArenaConfig,
        api_keys: dict[str, str] | None = None,
    ) -> ArenaService:
        """Build the service from config.

        Raises:
            ValueError: If a configured provider is unknown or its API key is missing.
        """
        if api_keys is None:
            api_keys = load_api_keys()
        timeout = config.http.timeout_seconds

        fast = Translator(
            create_provider(config.providers.fast, api_keys, timeout), config.translation
        )
        capable = Translator(
            create_provider(config.providers.capable, api_keys, timeout), config.translation
        )
        judge = Judge(create_provider(config.judge, api_keys, timeout), config.judging)

        detector: Detector
        if config.detection.strategy == "model":
            detector_model = config.detection.model or config.judge
            detector = ModelDetector(
                create_provider(detector_model, api_keys, timeout),
                GenerationConfig(temperature=0.0, max_tokens=20, seed=config.judging.seed),
            )
        else:
            detector = StatisticalDetector()

        rng = None
        if config.comparison.random_seed is not None:
            rng = random.Random(config.comparison.random_seed)

        logger.info(
            "Service ready: fast=%s capable=%s judge=%s detection=%s",
            fast.model_id,
            capable.model_id,
            judge.model_id,
            config.detection.strategy,
        )
        return cls(
            fast,
            capable,
            judge,
            detector,
            rng=rng,
            concurrency=config.comparison.concurrency,
        )

    @property
    def models(self) -> dict[str, str]:
        return self.aggregator.models

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def list_languages(self) -> LanguagesResponse:
        return LanguagesResponse(languages=list_languages())

    async def detect(self, text: str | None) -> DetectionResult:
        return await self.detector.detect(text)

    async def translate(self, request: TranslationRequest) -> TranslateResponse:
        text = self._require_text(request.text)
        profile = self._resolve_target(request.target_language)

        try:
            translated = await self.fast.translate(text, profile, style="localization")
        except ProviderError as e:
            logger.error("Translation into %s failed: %s", profile.name, e)
            raise UpstreamError("Translation failed", extra={"detail": str(e)}) from e

        return TranslateResponse(
            translated=translated,
            source_language=request.source_language or AUTO_DETECTED,
            target_language=profile.name,
            target_native_name=profile.native_name,
        )

    async def similarity_index(self, request: SimilarityRequest) -> SimilarityReport:
        return await self.aggregator.run(request.text, request.source_language)

    async def translate_to_check(self, request: TranslationRequest) -> CheckReport:
        """Translate with both providers and judge them, with back-translations."""
        text = self._require_text(request.text)
        profile = self._resolve_target(request.target_language)

        try:
            detected = await self.detector.detect(text)
        except ProviderError as e:
            logger.warning("Source detection failed, continuing as Unknown: %s", e)
            detected = to_detection_result(None)
        back_translate_to = detected.language if detected.supported else DEFAULT_SOURCE_LANGUAGE

        record = await self.comparator.compare(text, profile, back_translate_to=back_translate_to)
        if not record.ok:
            raise UpstreamError("Translation check failed", extra={"detail": record.error})

        return CheckReport(
            source_language=detected,
            target_language=profile.name,
            target_native_name=profile.native_name,
            translations={
                "fast": record.fast_translation,
                "capable": record.capable_translation,
            },
            evaluation=CheckEvaluation(
                back_translations={
                    "fast": record.fast_back_translation,
                    "capable": record.capable_back_translation,
                },
                fast_score=record.fast_score,
                capable_score=record.capable_score,
                semantic_similarity=record.semantic_similarity,
                winner=record.winner,
                reasoning=record.reasoning,
            ),
            models=self.models,
        )

    async def close(self) -> None:
        providers: list[BaseProvider] = []
        candidates = [self.fast.provider, self.capable.provider, self.judge.provider]
        if isinstance(self.detector, ModelDetector):
            candidates.append(self.detector.provider)
        for provider in candidates:
            if all(provider is not p for p in providers):
                providers.append(provider)
        for provider in providers:
            await provider.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _require_text(text: str | None) -> str:
        if not text or not text.strip():
            raise ValidationError("Text is required")
        return text

    def _resolve_target(self, name: str | None) -> LanguageProfile:
        if not name:
            raise ValidationError("targetLanguage is required")
        profile = self.languages.get(name)
        if profile is None:
            raise UnsupportedLanguageError(name, supported_language_list())
        return profile
