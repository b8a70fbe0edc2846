# src/errata/configuration/__init__.py
"""Configuration objects for errata.

Instead of constructing adapters directly, pass a provider name and a
ProviderConfig to create_adapter():

- ProviderConfig: API key, model id, base URL (frozen dataclass)
- create_adapter: Provider selector
- available_providers / register_provider: Registry helpers

Example:
    from errata.configuration import ProviderConfig, create_adapter

    adapter = create_adapter("gemini", ProviderConfig(api_key="AIza..."))
"""

from errata.configuration.base import ProviderConfig
from errata.configuration.selector import (
    PROVIDERS,
    available_providers,
    create_adapter,
    register_provider,
)

__all__ = [
    "PROVIDERS",
    "ProviderConfig",
    "available_providers",
    "create_adapter",
    "register_provider",
]
