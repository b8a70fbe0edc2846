# src/errata/config.py
"""Configuration loading utilities for errata.

This module is the application layer used by the CLI (and by applications
that want the same behavior). The library itself never reads the
environment. It handles:
- Finding and loading errata.yaml config files
- Loading .env files for API keys
- Building Settings objects from YAML and ERRATA_* environment variables
- Resolving the provider name and its ProviderConfig
- Building the adapter for the resolved provider
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

try:
    import yaml  # type: ignore[import-untyped]

    YAML_AVAILABLE = True
except ImportError:
    YAML_AVAILABLE = False

from errata.configuration import ProviderConfig, available_providers, create_adapter
from errata.errors import ConfigurationError

if TYPE_CHECKING:
    from errata.adapters import ProviderAdapter
    from errata.settings import Settings

DEFAULT_PROVIDER = "gemini"
CONFIG_FILES = ["errata.yaml", "errata.yml", ".erratarc"]
ENV_FILE = ".env"

# Environment variables per provider, first match wins.
PROVIDER_ENV: dict[str, dict[str, tuple[str, ...]]] = {
    "gemini": {
        "api_key": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
        "model": ("GEMINI_MODEL",),
        "base_url": ("GEMINI_BASE_URL",),
    },
    "openai": {
        "api_key": ("OPENAI_API_KEY",),
        "model": ("OPENAI_MODEL",),
        "base_url": ("OPENAI_BASE_URL",),
    },
}


@dataclass
class ConfigIssue:
    """Problem found while resolving configuration."""

    message: str
    suggestion: str | None = None


@dataclass
class AppConfig:
    """Everything needed to build an adapter."""

    provider: str
    provider_config: ProviderConfig
    settings: Settings


def load_env_file(env_path: str | Path = ENV_FILE) -> None:
    """Load environment variables from a .env file if it exists.

    Existing environment variables are never overridden.

    Args:
        env_path: Path to .env file (default: .env in current directory)
    """
    path = Path(env_path)
    if not path.exists():
        return

    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip().strip('"').strip("'")
                if key not in os.environ:
                    os.environ[key] = value


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find a configuration file in the current directory or its parents.

    Args:
        start_dir: Directory to start searching from (default: cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir or Path.cwd()
    for _ in range(10):  # Limit search depth
        for config_name in CONFIG_FILES:
            config_path = current / config_name
            if config_path.exists():
                return config_path
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


VALID_ROOT_KEYS = {"provider", "providers", "settings"}

VALID_PROVIDER_KEYS = {"model", "base_url"}

VALID_SETTINGS_KEYS = {
    "temperature",
    "max_tokens",
    "timeout",
    "num_retries",
    "normalize_escapes",
    "default_language",
    "default_difficulty",
}


def validate_config(config: dict[str, Any], config_path: Path | None = None) -> list[str]:
    """Validate config and return warnings about unknown keys.

    API keys are deliberately not accepted in the config file; they come from
    the environment (or .env).

    Args:
        config: The loaded configuration dictionary
        config_path: Path to config file (for error messages)

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []
    path_str = str(config_path) if config_path else "config"

    unknown_root = set(config.keys()) - VALID_ROOT_KEYS
    if unknown_root:
        warnings.append(f"Unknown config keys in {path_str}: {', '.join(sorted(unknown_root))}")

    providers = config.get("providers", {})
    if isinstance(providers, dict):
        for name, section in providers.items():
            if name not in PROVIDER_ENV:
                warnings.append(f"Unknown provider section: {name}")
                continue
            if isinstance(section, dict):
                unknown = set(section.keys()) - VALID_PROVIDER_KEYS
                if "api_key" in unknown:
                    warnings.append(
                        f"api_key in {path_str} is ignored; set "
                        f"{PROVIDER_ENV[name]['api_key'][0]} in the environment or .env"
                    )
                    unknown.discard("api_key")
                if unknown:
                    warnings.append(
                        f"Unknown keys for provider {name}: {', '.join(sorted(unknown))}"
                    )

    settings = config.get("settings", {})
    if isinstance(settings, dict):
        unknown_settings = set(settings.keys()) - VALID_SETTINGS_KEYS
        if unknown_settings:
            warnings.append(f"Unknown settings keys: {', '.join(sorted(unknown_settings))}")

    return warnings


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file.

    Args:
        config_path: Explicit path to config file, or None to search

    Returns:
        Configuration dictionary (empty if no config found)
    """
    config_path = Path(config_path) if config_path is not None else find_config_file()

    if config_path is None:
        return {}

    if not YAML_AVAILABLE:
        # Can't load YAML without pyyaml
        return {}

    with open(config_path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    return config


def _safe_int(value: str | None) -> int | None:
    """Parse int from string, returning None on invalid value."""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _safe_float(value: str | None) -> float | None:
    """Parse float from string, returning None on empty or invalid value."""
    if value is None or value.strip() == "":
        return None
    try:
        return float(value)
    except ValueError:
        return None


def get_settings_from_env() -> dict[str, Any]:
    """Read behavioral settings from ERRATA_* environment variables.

    Only explicitly set variables are returned, so YAML values survive unless
    overridden.

    Returns:
        Dictionary of setting name -> value for explicitly set env vars
    """
    result: dict[str, Any] = {}

    if (val := _safe_float(os.environ.get("ERRATA_TEMPERATURE"))) is not None:
        result["temperature"] = val
    if (val := _safe_int(os.environ.get("ERRATA_MAX_TOKENS"))) is not None:
        result["max_tokens"] = val
    if (val := _safe_float(os.environ.get("ERRATA_TIMEOUT"))) is not None:
        result["timeout"] = val
    if (val := _safe_int(os.environ.get("ERRATA_NUM_RETRIES"))) is not None:
        result["num_retries"] = val
    if "ERRATA_NORMALIZE_ESCAPES" in os.environ:
        result["normalize_escapes"] = os.environ["ERRATA_NORMALIZE_ESCAPES"].lower() in (
            "true",
            "1",
            "yes",
        )
    if os.environ.get("ERRATA_LANGUAGE"):
        result["default_language"] = os.environ["ERRATA_LANGUAGE"].lower()
    if os.environ.get("ERRATA_DIFFICULTY"):
        result["default_difficulty"] = os.environ["ERRATA_DIFFICULTY"].lower()

    return result


def get_settings_from_yaml(config: dict[str, Any]) -> dict[str, Any]:
    """Extract the 'settings:' section of a YAML config."""
    yaml_settings = config.get("settings", {}) or {}
    return {key: value for key, value in yaml_settings.items() if key in VALID_SETTINGS_KEYS}


def build_settings(
    config: dict[str, Any] | None = None,
    env_settings: dict[str, Any] | None = None,
) -> Settings:
    """Build a Settings object from YAML config and env vars.

    Precedence (highest to lowest):
    1. Environment variables
    2. YAML settings: section
    3. Settings class defaults

    Args:
        config: YAML configuration dictionary
        env_settings: Environment variable overrides (if None, reads from env)

    Returns:
        Configured Settings instance
    """
    from errata.settings import Settings

    config = config or {}
    yaml_settings = get_settings_from_yaml(config)
    env_settings = env_settings if env_settings is not None else get_settings_from_env()

    return Settings(**{**yaml_settings, **env_settings})


def _first_env(names: tuple[str, ...]) -> str | None:
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return None


def get_provider_name(config: dict[str, Any] | None = None) -> str:
    """Resolve the provider name: ERRATA_PROVIDER, then YAML, then the default."""
    config = config or {}
    name = os.environ.get("ERRATA_PROVIDER") or config.get("provider") or DEFAULT_PROVIDER
    return str(name).strip().lower()


def get_provider_config(provider: str, config: dict[str, Any] | None = None) -> ProviderConfig:
    """Build the ProviderConfig for ``provider`` from env vars and YAML.

    The API key only comes from the environment. Model and base URL come
    from the environment first, then from ``providers.<name>`` in YAML.
    Unknown providers yield an empty ProviderConfig.
    """
    config = config or {}
    env_names = PROVIDER_ENV.get(provider, {})
    section = (config.get("providers") or {}).get(provider) or {}

    return ProviderConfig(
        api_key=_first_env(env_names.get("api_key", ())),
        model=_first_env(env_names.get("model", ())) or section.get("model"),
        base_url=_first_env(env_names.get("base_url", ())) or section.get("base_url"),
    )


def get_app_config(
    config_path: str | Path | None = None,
    provider: str | None = None,
    model: str | None = None,
) -> AppConfig | ConfigIssue:
    """Resolve provider, ProviderConfig and Settings.

    Args:
        config_path: Override config file path
        provider: Override provider name
        model: Override model id

    Returns:
        AppConfig, or ConfigIssue if the provider is unknown
    """
    config = load_config(config_path)
    name = (provider or get_provider_name(config)).strip().lower()

    if name not in available_providers():
        return ConfigIssue(
            message=f"Unknown provider '{name}'",
            suggestion=f"Supported providers: {', '.join(available_providers())}",
        )

    provider_config = get_provider_config(name, config)
    if model:
        provider_config = ProviderConfig(
            api_key=provider_config.api_key,
            model=model,
            base_url=provider_config.base_url,
        )

    return AppConfig(
        provider=name,
        provider_config=provider_config,
        settings=build_settings(config),
    )


def get_adapter(
    config_path: str | Path | None = None,
    provider: str | None = None,
    model: str | None = None,
) -> ProviderAdapter | ConfigIssue:
    """Build the adapter described by the configuration.

    Returns:
        ProviderAdapter, or ConfigIssue if the provider is unknown or has no key
    """
    app_config = get_app_config(config_path, provider, model)
    if isinstance(app_config, ConfigIssue):
        return app_config

    try:
        return create_adapter(
            app_config.provider,
            app_config.provider_config,
            settings=app_config.settings,
        )
    except ConfigurationError as e:
        env_name = PROVIDER_ENV[app_config.provider]["api_key"][0]
        return ConfigIssue(
            message=str(e),
            suggestion=f"Set {env_name} in the environment or in {ENV_FILE}",
        )
