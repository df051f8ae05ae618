import json

import httpx
import pytest

from transarena.errors import ErrorKind, ProviderError
from transarena.providers.google import GEMINI_API_BASE, GoogleProvider, to_gemini_schema


def _gemini_body(text="Hallo"):
    return {
        "candidates": [
            {"content": {"parts": [{"text": text}]}, "finishReason": "STOP"},
        ],
        "usageMetadata": {"promptTokenCount": 9, "candidatesTokenCount": 2},
        "modelVersion": "gemini-2.0-flash-001",
    }


def _provider(handler):
    return GoogleProvider(
        model_id="gemini-2.0-flash", api_key="fake", transport=httpx.MockTransport(handler)
    )


class TestGoogleProvider:
    def test_url_and_headers(self):
        p = GoogleProvider(model_id="gemini-2.0-flash", api_key="fake")
        assert p._url() == f"{GEMINI_API_BASE}/gemini-2.0-flash:generateContent"
        # key travels in a header, never in the URL
        assert "fake" not in p._url()
        assert p._headers()["x-goog-api-key"] == "fake"

    @pytest.mark.asyncio
    async def test_complete(self):
        seen = {}

        def handler(request):
            seen["payload"] = json.loads(request.content)
            return httpx.Response(200, json=_gemini_body())

        p = _provider(handler)
        result = await p.complete("system", "user", temperature=0.0, max_tokens=32, seed=42)
        await p.close()

        config = seen["payload"]["generationConfig"]
        assert config == {"temperature": 0.0, "maxOutputTokens": 32, "seed": 42}
        assert seen["payload"]["system_instruction"]["parts"][0]["text"] == "system"
        assert result.text == "Hallo"
        assert result.finish_reason == "STOP"

    @pytest.mark.asyncio
    async def test_structured_uses_json_mode(self):
        seen = {}

        def handler(request):
            seen["payload"] = json.loads(request.content)
            return httpx.Response(200, json=_gemini_body('{"scoreA": 50}'))

        p = _provider(handler)
        schema = {
            "type": "object",
            "properties": {"scoreA": {"type": "number"}},
            "additionalProperties": False,
        }
        result = await p.complete_structured("system", "user", schema, 0.0, 32)
        config = seen["payload"]["generationConfig"]
        assert config["responseMimeType"] == "application/json"
        assert config["responseSchema"] == {
            "type": "OBJECT",
            "properties": {"scoreA": {"type": "NUMBER"}},
        }
        assert json.loads(result.text) == {"scoreA": 50}

    @pytest.mark.asyncio
    async def test_no_candidates_is_empty_text(self):
        p = _provider(lambda request: httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}}))
        result = await p.complete("system", "user", 0.0, 32)
        assert result.text == ""
        assert result.finish_reason == "unknown"

    @pytest.mark.asyncio
    async def test_bad_candidate_shape_is_malformed(self):
        p = _provider(lambda request: httpx.Response(200, json={"candidates": [{"content": "oops"}]}))
        with pytest.raises(ProviderError) as exc_info:
            await p.complete("system", "user", 0.0, 32)
        assert exc_info.value.kind is ErrorKind.MALFORMED

    @pytest.mark.asyncio
    async def test_server_error_is_network(self):
        p = _provider(lambda request: httpx.Response(500))
        with pytest.raises(ProviderError) as exc_info:
            await p.complete("system", "user", 0.0, 32)
        assert exc_info.value.kind is ErrorKind.NETWORK

    @pytest.mark.asyncio
    @pytest.mark.parametrize("candidates", [
        [{"content": {"parts": [{"text": ["Hallo"]}]}}],
        [{"content": {"parts": ["Hallo"]}}],
        [{"content": {"parts": None}}],
        {"text": "Hallo"},
    ])
    async def test_wrong_typed_candidates_are_malformed(self, candidates):
        p = _provider(lambda request: httpx.Response(200, json={"candidates": candidates}))
        with pytest.raises(ProviderError) as exc_info:
            await p.complete("system", "user", 0.0, 32)
        assert exc_info.value.kind is ErrorKind.MALFORMED

    @pytest.mark.asyncio
    async def test_null_usage_metadata_is_ignored(self):
        body = _gemini_body()
        body["usageMetadata"] = {"promptTokenCount": None}
        body["modelVersion"] = None
        body["candidates"][0]["finishReason"] = None
        p = _provider(lambda request: httpx.Response(200, json=body))
        result = await p.complete("system", "user", 0.0, 32)
        assert result.text == "Hallo"
        assert result.finish_reason == "unknown"


class TestToGeminiSchema:
    def test_nested_items(self):
        schema = {
            "type": "object",
            "properties": {
                "tags": {"type": "array", "items": {"type": "string"}},
                "winner": {"type": "string", "enum": ["A", "B"]},
            },
            "required": ["tags"],
        }
        assert to_gemini_schema(schema) == {
            "type": "OBJECT",
            "properties": {
                "tags": {"type": "ARRAY", "items": {"type": "STRING"}},
                "winner": {"type": "STRING", "enum": ["A", "B"]},
            },
            "required": ["tags"],
        }
