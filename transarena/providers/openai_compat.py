"""OpenAI-compatible provider adapter.

Works with any API that follows the OpenAI chat completions format
(OpenAI itself, Groq, and other hosted Llama endpoints).
"""

from __future__ import annotations

import logging

import httpx

from transarena.providers.base import DEFAULT_TIMEOUT_SECONDS, BaseProvider
from transarena.schemas import ProviderResponse

logger = logging.getLogger(__name__)


class OpenAICompatibleProvider(BaseProvider):
    def __init__(
        self,
        model_id: str,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        name: str = "openai",
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(name=name, model_id=model_id, timeout=timeout, transport=transport)
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    def _build_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    def _build_messages(self, system_prompt: str, user_message: str) -> list[dict]:
        return [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ]

    def _build_payload(
        self,
        system_prompt: str,
        user_message: str,
        temperature: float,
        max_tokens: int,
        seed: int | None,
    ) -> dict:
        payload = {
            "model": self.model_id,
            "messages": self._build_messages(system_prompt, user_message),
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if seed is not None:
            payload["seed"] = seed
        return payload

    async def _chat(self, payload: dict) -> ProviderResponse:
        data = await self._post_json(
            f"{self._base_url}/chat/completions",
            payload,
            headers=self._build_headers(),
        )

        try:
            choice = data["choices"][0]
            content = choice["message"].get("content")
            finish_reason = choice.get("finish_reason")
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise self._malformed(f"unexpected chat completion shape: {e!r}") from e
        if content is not None and not isinstance(content, str):
            raise self._malformed(f"message content is {type(content).__name__}, not text")

        return ProviderResponse(
            text=content or "",
            finish_reason=finish_reason if isinstance(finish_reason, str) else "unknown",
        )

    async def complete(
        self,
        system_prompt: str,
        user_message: str,
        temperature: float,
        max_tokens: int,
        seed: int | None = None,
    ) -> ProviderResponse:
        payload = self._build_payload(
            system_prompt, user_message, temperature, max_tokens, seed
        )
        return await self._chat(payload)

    async def complete_structured(
        self,
        system_prompt: str,
        user_message: str,
        output_schema: dict,
        temperature: float,
        max_tokens: int,
        seed: int | None = None,
    ) -> ProviderResponse:
        """Call with JSON response format. Uses json_schema response_format."""
        payload = self._build_payload(
            system_prompt, user_message, temperature, max_tokens, seed
        )
        payload["response_format"] = {
            "type": "json_schema",
            "json_schema": {
                "name": "judge_output",
                "schema": output_schema,
            },
        }
        return await self._chat(payload)
