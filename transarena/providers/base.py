"""Abstract base class for all LLM provider adapters."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx

from transarena.errors import ErrorKind, ProviderError
from transarena.schemas import ProviderResponse

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 60.0


class BaseProvider(ABC):
    def __init__(
        self,
        name: str,
        model_id: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.name = name
        self.model_id = model_id
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_message: str,
        temperature: float,
        max_tokens: int,
        seed: int | None = None,
    ) -> ProviderResponse: ...

    @abstractmethod
    async def complete_structured(
        self,
        system_prompt: str,
        user_message: str,
        output_schema: dict,
        temperature: float,
        max_tokens: int,
        seed: int | None = None,
    ) -> ProviderResponse: ...

    def _get_client(self) -> httpx.AsyncClient:
        """Lazily create the pooled client shared by every call on this provider."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            )
        return self._client

    async def _post_json(
        self,
        url: str,
        payload: dict,
        headers: dict[str, str] | None = None,
    ) -> dict:
        """POST ``payload`` and return the decoded JSON object.

        Transport failures, timeouts and non-2xx statuses raise
        ProviderError(NETWORK); a body that is not a JSON object raises
        ProviderError(MALFORMED).
        """
        try:
            response = await self._get_client().post(url, headers=headers, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                ErrorKind.NETWORK,
                f"HTTP {e.response.status_code} from {self.name}",
                provider=self.model_id,
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(
                ErrorKind.NETWORK,
                f"{type(e).__name__}: {e}",
                provider=self.model_id,
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(
                ErrorKind.MALFORMED, "response body is not JSON", provider=self.model_id
            ) from e
        if not isinstance(data, dict):
            raise ProviderError(
                ErrorKind.MALFORMED, "response body is not a JSON object", provider=self.model_id
            )
        return data

    def _malformed(self, message: str) -> ProviderError:
        return ProviderError(ErrorKind.MALFORMED, message, provider=self.model_id)

    async def close(self) -> None:
        """Close the pooled HTTP client, if one was opened."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
