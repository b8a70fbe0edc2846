# src/errata/configuration/selector.py
"""Provider selection: build the adapter for a provider name."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Any

from errata.configuration.base import ProviderConfig
from errata.errors import ConfigurationError

if TYPE_CHECKING:
    from errata.adapters import ProviderAdapter

# Adapter classes by provider name, as dotted paths so that importing the
# configuration package does not import every adapter.
PROVIDERS: dict[str, str] = {
    "gemini": "errata.adapters.gemini.GeminiAdapter",
    "openai": "errata.adapters.openai.OpenAIAdapter",
}


def available_providers() -> list[str]:
    """Return the registered provider names, sorted."""
    return sorted(PROVIDERS)


def register_provider(name: str, class_path: str) -> None:
    """Register an adapter class under ``name``.

    Args:
        name: Provider name (case-insensitive).
        class_path: Dotted path like "my_package.adapters.MyAdapter".
    """
    PROVIDERS[name.strip().lower()] = class_path


def _import_adapter(class_path: str) -> type[ProviderAdapter]:
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    adapter_class: type[ProviderAdapter] = getattr(module, class_name)
    return adapter_class


def create_adapter(
    provider: str,
    config: ProviderConfig,
    **kwargs: Any,
) -> ProviderAdapter:
    """Instantiate the adapter registered for ``provider``.

    Args:
        provider: Provider name, e.g. "gemini" or "openai" (case-insensitive).
        config: API key, model and base URL for that provider.
        **kwargs: Passed to the adapter (recoverer, llm_client, settings, prompts).

    Returns:
        The constructed ProviderAdapter.

    Raises:
        ConfigurationError: If the provider is unknown or the config has no
            API key.

    Example:
        adapter = create_adapter("openai", ProviderConfig(api_key="sk-..."))
    """
    name = (provider or "").strip().lower()
    class_path = PROVIDERS.get(name)
    if class_path is None:
        raise ConfigurationError(
            f"Unknown provider '{provider}'. Available providers: {available_providers()}"
        )

    if not config.has_api_key:
        raise ConfigurationError(f"API key is required for {name} provider")

    return _import_adapter(class_path)(config, **kwargs)
