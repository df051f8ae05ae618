"""Google Gemini provider adapter."""

from __future__ import annotations

import logging

import httpx

from transarena.providers.base import DEFAULT_TIMEOUT_SECONDS, BaseProvider
from transarena.schemas import ProviderResponse

logger = logging.getLogger(__name__)

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"


class GoogleProvider(BaseProvider):
    def __init__(
        self,
        model_id: str,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(name="google", model_id=model_id, timeout=timeout, transport=transport)
        self._api_key = api_key

    def _url(self, action: str = "generateContent") -> str:
        return f"{GEMINI_API_BASE}/{self.model_id}:{action}"

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-goog-api-key": self._api_key,
        }

    def _build_payload(
        self,
        system_prompt: str,
        user_message: str,
        temperature: float,
        max_tokens: int,
        seed: int | None,
    ) -> dict:
        generation_config = {
            "temperature": temperature,
            "maxOutputTokens": max_tokens,
        }
        if seed is not None:
            generation_config["seed"] = seed
        return {
            "system_instruction": {
                "parts": [{"text": system_prompt}],
            },
            "contents": [
                {"role": "user", "parts": [{"text": user_message}]},
            ],
            "generationConfig": generation_config,
        }

    async def _generate(self, payload: dict) -> ProviderResponse:
        data = await self._post_json(self._url(), payload, headers=self._headers())

        # A blocked prompt comes back without candidates; that is an empty
        # answer, not a malformed one.
        candidates = data.get("candidates") or []
        text = ""
        finish_reason = None
        if candidates:
            try:
                candidate = candidates[0]
                parts = candidate.get("content", {}).get("parts", [])
                # join() rejects parts whose text is not a string
                text = "".join(p.get("text", "") for p in parts)
                finish_reason = candidate.get("finishReason")
            except (KeyError, IndexError, AttributeError, TypeError) as e:
                raise self._malformed(f"unexpected candidate shape: {e!r}") from e

        return ProviderResponse(
            text=text,
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
        return await self._generate(payload)

    async def complete_structured(
        self,
        system_prompt: str,
        user_message: str,
        output_schema: dict,
        temperature: float,
        max_tokens: int,
        seed: int | None = None,
    ) -> ProviderResponse:
        """Use Gemini's native JSON mode with response_mime_type and response_schema."""
        payload = self._build_payload(
            system_prompt, user_message, temperature, max_tokens, seed
        )
        payload["generationConfig"]["responseMimeType"] = "application/json"
        payload["generationConfig"]["responseSchema"] = to_gemini_schema(output_schema)
        return await self._generate(payload)


def to_gemini_schema(schema: dict) -> dict:
    """Convert a JSON schema into Gemini's OpenAPI subset.

    Gemini spells types in upper case and rejects ``additionalProperties``.
    """
    converted = {}
    for key, value in schema.items():
        if key == "additionalProperties":
            continue
        if key == "type" and isinstance(value, str):
            converted[key] = value.upper()
        elif key == "properties" and isinstance(value, dict):
            converted[key] = {name: to_gemini_schema(sub) for name, sub in value.items()}
        elif key == "items" and isinstance(value, dict):
            converted[key] = to_gemini_schema(value)
        else:
            converted[key] = value
    return converted
