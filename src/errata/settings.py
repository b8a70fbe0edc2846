# src/errata/settings.py
"""Behavioral settings for errata.

These settings apply regardless of which vendor is used. They are passed
programmatically - the library does not read environment variables. The
CLI reads ERRATA_* variables at the application layer (see errata.config)
and passes values explicitly.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from errata.models import Difficulty, Language


class Settings(BaseModel):
    """Behavioral settings shared by every provider adapter.

    Example:
        settings = Settings(max_tokens=2048, timeout=60)
        adapter = create_adapter("openai", config, settings=settings)
    """

    # Request shaping
    temperature: float | None = None
    max_tokens: int = Field(default=4096, gt=0)
    timeout: float | None = None

    # Transport retries inside LiteLLM. 0 = exactly one call per operation.
    num_retries: int = Field(default=0, ge=0)

    # Recovery
    normalize_escapes: bool = True

    # Defaults used by the CLI when no option is given
    default_language: Language = "zh"
    default_difficulty: Difficulty = "medium"
