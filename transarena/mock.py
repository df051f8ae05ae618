"""Mock provider for exercising the service without real API calls."""

from __future__ import annotations

import hashlib
import json

from transarena.providers.base import BaseProvider
from transarena.schemas import ProviderResponse


class MockProvider(BaseProvider):
    def __init__(self, model_id: str = "mock-1.0"):
        super().__init__(name="mock", model_id=model_id)

    def _response(self, text: str) -> ProviderResponse:
        return ProviderResponse(
            text=text,
            finish_reason="stop",
        )

    async def complete(
        self,
        system_prompt: str,
        user_message: str,
        temperature: float,
        max_tokens: int,
        seed: int | None = None,
    ) -> ProviderResponse:
        # Deterministic mock response based on model and input hash
        h = hashlib.md5(f"{self.model_id}{system_prompt}{user_message}".encode()).hexdigest()

        # Detection calls carry the language identification instruction
        if "language identification" in system_prompt.lower():
            text = "English"
        else:
            source = user_message.split("\n\n", 1)[-1]
            text = f"[MOCK-{h[:8]}] {source}"

        return self._response(text)

    async def complete_structured(
        self,
        system_prompt: str,
        user_message: str,
        output_schema: dict,
        temperature: float,
        max_tokens: int,
        seed: int | None = None,
    ) -> ProviderResponse:
        # Deterministic mock verdict based on input hash
        h = hashlib.md5(f"{self.model_id}{system_prompt}{user_message}".encode()).hexdigest()
        score_a = int(h[:2], 16) % 101
        score_b = int(h[2:4], 16) % 101
        verdict = {
            "scoreA": score_a,
            "scoreB": score_b,
            "semanticSimilarity": int(h[4:6], 16) % 101,
            "winner": "A" if score_a > score_b else "B" if score_b > score_a else "Tie",
            "reasoning": "Mock evaluation of both candidate translations.",
        }
        properties = output_schema.get("properties", {})
        if "backTranslationA" in properties:
            verdict["backTranslationA"] = "[MOCK back-translation A]"
            verdict["backTranslationB"] = "[MOCK back-translation B]"
        text = json.dumps(verdict)

        return self._response(text)
