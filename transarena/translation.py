"""Translation provider adapter.

Wraps one LLM provider behind ``translate(text, profile)``: builds the
instruction payload from the language profile, pins sampling parameters so
identical input gives identical output, and makes exactly one call.
"""

from __future__ import annotations

import logging

from transarena.config import GenerationConfig
from transarena.errors import ErrorKind, ProviderError
from transarena.prompts import PromptStyle, build_translation_prompt
from transarena.providers.base import BaseProvider
from transarena.schemas import LanguageProfile

logger = logging.getLogger(__name__)


class Translator:
    def __init__(
        self,
        provider: BaseProvider,
        generation: GenerationConfig | None = None,
        style: PromptStyle = "comparison",
    ):
        self.provider = provider
        self.generation = generation or GenerationConfig()
        self.style = style

    @property
    def model_id(self) -> str:
        return self.provider.model_id

    async def translate(
        self,
        text: str,
        profile: LanguageProfile,
        style: PromptStyle | None = None,
    ) -> str:
        """Translate ``text`` into ``profile``'s language.

        The caller guarantees ``text`` is non-empty and ``profile`` comes from
        the catalogue.

        Raises:
            ProviderError: NETWORK or MALFORMED from the provider, EMPTY if the
                model answered with no text.
        """
        system_prompt, user_message = build_translation_prompt(
            profile, text, style or self.style
        )
        response = await self.provider.complete(
            system_prompt=system_prompt,
            user_message=user_message,
            temperature=self.generation.temperature,
            max_tokens=self.generation.max_tokens,
            seed=self.generation.seed,
        )

        translated = response.text.strip()
        if not translated:
            raise ProviderError(
                ErrorKind.EMPTY,
                f"empty translation into {profile.name} (finish_reason={response.finish_reason})",
                provider=self.model_id,
            )
        logger.debug(
            "%s translated %d chars into %s", self.model_id, len(text), profile.name
        )
        return translated
