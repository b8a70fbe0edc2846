# src/errata/configuration/base.py
"""Provider configuration object."""

from __future__ import annotations

from dataclasses import dataclass

from errata.errors import ConfigurationError


@dataclass(frozen=True)
class ProviderConfig:
    """Credentials and endpoint for one vendor.

    Args:
        api_key: Vendor API key. Required; adapters refuse to build without it.
        model: Vendor model id (e.g. "gpt-4o"). None uses the adapter default.
        base_url: Alternate endpoint for self-hosted or proxy deployments.

    Example:
        config = ProviderConfig(api_key="sk-...", model="gpt-4o-mini")
    """

    api_key: str | None = None
    model: str | None = None
    base_url: str | None = None

    def __repr__(self) -> str:
        masked = "***" if self.api_key else None
        return (
            f"ProviderConfig(api_key={masked!r}, model={self.model!r}, "
            f"base_url={self.base_url!r})"
        )

    @property
    def has_api_key(self) -> bool:
        """True if a non-blank API key is set."""
        return bool(self.api_key and self.api_key.strip())

    def require_api_key(self, provider: str) -> str:
        """Return the stripped API key.

        Raises:
            ConfigurationError: If the key is missing or blank.
        """
        if not self.has_api_key:
            raise ConfigurationError(f"API key is required for {provider} provider")
        return (self.api_key or "").strip()
