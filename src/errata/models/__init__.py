# src/errata/models/__init__.py
"""Data models for errata."""

from errata.models.question import (
    DIFFICULTIES,
    LANGUAGES,
    MAX_KNOWLEDGE_POINTS,
    SUBJECTS,
    Difficulty,
    Language,
    StructuredQuestion,
    validate_question,
)

__all__ = [
    "DIFFICULTIES",
    "Difficulty",
    "LANGUAGES",
    "Language",
    "MAX_KNOWLEDGE_POINTS",
    "SUBJECTS",
    "StructuredQuestion",
    "validate_question",
]
