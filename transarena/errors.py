"""Exception taxonomy for the TransArena service.

Every error carries the HTTP status it maps to, so the FastAPI layer can
render it without a lookup table.  Per-language comparison failures are
caught inside the comparator and never reach the HTTP layer.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    NETWORK = "network"
    MALFORMED = "malformed"
    EMPTY = "empty"


class TransArenaError(Exception):
    """Base exception for all TransArena errors."""

    status_code = 500

    def __init__(self, message: str, extra: dict[str, Any] | None = None) -> None:
        self.message = message
        self.extra = extra or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, **self.extra}


class ValidationError(TransArenaError):
    """Bad or missing client input."""

    status_code = 400


class UnsupportedLanguageError(ValidationError):
    def __init__(self, language: str, supported: str) -> None:
        super().__init__(
            f'Unsupported target language: "{language}".',
            extra={"supported": supported},
        )
        self.language = language


class ProviderError(TransArenaError):
    """A translation backend failed to produce a usable translation."""

    def __init__(self, kind: ErrorKind, message: str, provider: str = "") -> None:
        super().__init__(message)
        self.kind = kind
        self.provider = provider

    def __str__(self) -> str:
        prefix = f"{self.provider} " if self.provider else ""
        return f"{prefix}{self.kind.value} error: {self.message}"


class JudgeError(TransArenaError):
    """The comparison judge failed or returned unparseable output."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        if kind is ErrorKind.EMPTY:
            kind = ErrorKind.MALFORMED
        super().__init__(message)
        self.kind = kind

    def __str__(self) -> str:
        return f"judge {self.kind.value} error: {self.message}"


class UpstreamError(TransArenaError):
    """Upstream failures left nothing to build a response from."""


class AggregationFault(TransArenaError):
    """The catalogue-wide evaluation could not start."""
