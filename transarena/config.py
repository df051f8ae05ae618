"""Configuration loading and validation for TransArena.

Loads service parameters from YAML, validates via Pydantic.
API keys come from environment variables.
"""

from __future__ import annotations

import os
from typing import Literal

import yaml
from pydantic import BaseModel

DEFAULT_CONFIG_PATH = "config/arena.yaml"
CONFIG_PATH_ENV_VAR = "TRANSARENA_CONFIG"

# Environment variables holding provider credentials
API_KEY_ENV_VARS = ("GROQ_API_KEY", "GEMINI_API_KEY", "OPENAI_API_KEY")


class ModelConfig(BaseModel):
    provider: str
    model_id: str


class ProvidersConfig(BaseModel):
    fast: ModelConfig
    capable: ModelConfig


class GenerationConfig(BaseModel):
    temperature: float = 0.0
    max_tokens: int = 4096
    seed: int | None = 42


class ComparisonConfig(BaseModel):
    concurrency: int = 4
    # None draws slot assignments from system entropy
    random_seed: int | None = None


class DetectionConfig(BaseModel):
    strategy: Literal["statistical", "model"] = "statistical"
    # Model used by the "model" strategy; falls back to the judge model
    model: ModelConfig | None = None


class HttpConfig(BaseModel):
    timeout_seconds: float = 60.0


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"


class ArenaConfig(BaseModel):
    providers: ProvidersConfig
    judge: ModelConfig
    detection: DetectionConfig = DetectionConfig()
    translation: GenerationConfig = GenerationConfig()
    judging: GenerationConfig = GenerationConfig(max_tokens=2048)
    comparison: ComparisonConfig = ComparisonConfig()
    http: HttpConfig = HttpConfig()
    server: ServerConfig = ServerConfig()


def load_config(yaml_path: str | None = None) -> ArenaConfig:
    if yaml_path is None:
        yaml_path = os.environ.get(CONFIG_PATH_ENV_VAR, DEFAULT_CONFIG_PATH)
    with open(yaml_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return ArenaConfig.model_validate(data)


def load_api_keys() -> dict[str, str]:
    """Collect provider API keys present in the environment."""
    return {
        name: os.environ[name]
        for name in API_KEY_ENV_VARS
        if os.environ.get(name)
    }


def as_dry_run(config: ArenaConfig) -> ArenaConfig:
    """Return a copy of ``config`` with every model routed to the mock provider."""

    def mock(model: ModelConfig) -> ModelConfig:
        return model.model_copy(update={"provider": "mock"})

    detection = config.detection
    if detection.model is not None:
        detection = detection.model_copy(update={"model": mock(detection.model)})
    return config.model_copy(update={
        "providers": ProvidersConfig(
            fast=mock(config.providers.fast),
            capable=mock(config.providers.capable),
        ),
        "judge": mock(config.judge),
        "detection": detection,
    })
