"""Groq provider, using the OpenAI-compatible API."""

from __future__ import annotations

import httpx

from transarena.providers.base import DEFAULT_TIMEOUT_SECONDS
from transarena.providers.openai_compat import OpenAICompatibleProvider

GROQ_API_BASE = "https://api.groq.com/openai/v1"


class GroqProvider(OpenAICompatibleProvider):
    def __init__(
        self,
        model_id: str,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(
            model_id=model_id,
            api_key=api_key,
            base_url=GROQ_API_BASE,
            name="groq",
            timeout=timeout,
            transport=transport,
        )
