"""errata - structured exam questions from noisy model output.

Turns the text a multimodal LLM returns for a photographed exam question into
a validated StructuredQuestion, or fails with one of four stable error codes.

Quick Start:
    from errata import ProviderConfig, create_adapter

    adapter = create_adapter("openai", ProviderConfig(api_key="sk-..."))
    question = adapter.analyze_image(image_bytes, "image/jpeg", language="zh")
    print(question.question_text, question.knowledge_points)

Recovery only (e.g. for captured payloads):
    from errata import JsonRecoveryPipeline

    question = JsonRecoveryPipeline().recover(raw_text)
"""

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("errata-ai")
except PackageNotFoundError:
    # Development / source-tree fallback (e.g. running tests without installing the wheel).
    try:
        import tomllib
        from pathlib import Path

        def _read_version_from_pyproject() -> str | None:
            for parent in Path(__file__).resolve().parents:
                pyproject = parent / "pyproject.toml"
                if pyproject.exists():
                    data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
                    version = data.get("project", {}).get("version")
                    return str(version) if version is not None else None
            return None

        __version__ = _read_version_from_pyproject() or "unknown"
    except (OSError, ValueError):
        __version__ = "unknown"

# Provider adapters
from errata.adapters import GeminiAdapter, OpenAIAdapter, ProviderAdapter

# Configuration
from errata.configuration import ProviderConfig, available_providers, create_adapter

# Errors
from errata.errors import (
    AIServiceError,
    ConfigurationError,
    EmptyResponseError,
    ErrataError,
    ErrorCode,
    MalformedResponseError,
    NetworkError,
    SchemaValidationError,
    classify_error,
)

# Models
from errata.models import Difficulty, Language, StructuredQuestion

# Prompts
from errata.prompts import PromptBuilder

# Client ABC
from errata.providers import LLMClient

# Recovery
from errata.recovery import (
    FileSink,
    JsonRecoveryPipeline,
    LoggingSink,
    RecoveryReport,
    ResponseRecoverer,
)
from errata.settings import Settings

__all__ = [
    # Version
    "__version__",
    # Models
    "Difficulty",
    "Language",
    "StructuredQuestion",
    # Settings / configuration
    "Settings",
    "ProviderConfig",
    "available_providers",
    "create_adapter",
    # Adapters
    "ProviderAdapter",
    "GeminiAdapter",
    "OpenAIAdapter",
    # Recovery
    "ResponseRecoverer",
    "JsonRecoveryPipeline",
    "RecoveryReport",
    "LoggingSink",
    "FileSink",
    # Collaborators
    "LLMClient",
    "PromptBuilder",
    # Errors
    "ErrataError",
    "ErrorCode",
    "AIServiceError",
    "ConfigurationError",
    "EmptyResponseError",
    "MalformedResponseError",
    "NetworkError",
    "SchemaValidationError",
    "classify_error",
]
