"""Provider registry: factory for creating provider instances from config."""

from __future__ import annotations

from transarena.config import ModelConfig
from transarena.providers.base import DEFAULT_TIMEOUT_SECONDS, BaseProvider


# Map provider names to (env var name for API key, constructor function)
_PROVIDER_REGISTRY: dict[str, tuple[str, type]] = {}


def _register_providers() -> None:
    """Lazily populate the registry to avoid circular imports."""
    global _PROVIDER_REGISTRY
    if _PROVIDER_REGISTRY:
        return

    from transarena.mock import MockProvider
    from transarena.providers.google import GoogleProvider
    from transarena.providers.groq import GroqProvider
    from transarena.providers.openai_compat import OpenAICompatibleProvider

    _PROVIDER_REGISTRY = {
        "mock": ("", MockProvider),
        "openai": ("OPENAI_API_KEY", OpenAICompatibleProvider),
        "groq": ("GROQ_API_KEY", GroqProvider),
        "google": ("GEMINI_API_KEY", GoogleProvider),
    }


def create_provider(
    model_config: ModelConfig,
    api_keys: dict[str, str],
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> BaseProvider:
    """Create a provider instance from config.

    Args:
        model_config: ModelConfig from arena.yaml
        api_keys: Dict of env var name -> API key value
        timeout: Per-request timeout in seconds

    Returns:
        A BaseProvider instance ready to make API calls

    Raises:
        ValueError: If provider is unknown or API key is missing
    """
    _register_providers()

    provider_name = model_config.provider
    if provider_name not in _PROVIDER_REGISTRY:
        raise ValueError(f"Unknown provider: {provider_name}")

    env_var, provider_class = _PROVIDER_REGISTRY[provider_name]

    # Mock provider needs no API key
    if provider_name == "mock":
        return provider_class(model_id=model_config.model_id)

    api_key = api_keys.get(env_var)
    if not api_key:
        raise ValueError(f"API key not found for {provider_name} (expected {env_var})")

    return provider_class(model_id=model_config.model_id, api_key=api_key, timeout=timeout)
