# src/errata/recovery/events.py
"""Diagnostic records produced while recovering a model response."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from errata.models import StructuredQuestion


class Strategy(Enum):
    """Stages of the recovery chain, in the order they run."""

    DIRECT = "direct"
    EXTRACT = "extract"
    CANDIDATE = "candidate"
    REPAIR = "repair"
    ESCAPES = "escapes"


@dataclass(frozen=True)
class RecoveryEvent:
    """One strategy attempt.

    Attributes:
        strategy: Which stage ran
        succeeded: True if the stage produced a valid question (or, for
            EXTRACT, a non-empty candidate)
        detail: Short description (extraction method, parser or schema message)
        candidate_length: Length of the text the stage worked on
    """

    strategy: Strategy
    succeeded: bool
    detail: str = ""
    candidate_length: int = 0


@dataclass
class RecoveryReport:
    """Successful recovery plus the attempts that led to it."""

    question: StructuredQuestion
    strategy: Strategy
    events: list[RecoveryEvent] = field(default_factory=list)

    @property
    def attempts(self) -> int:
        """Number of parse attempts made (extraction is not counted)."""
        return sum(1 for event in self.events if event.strategy is not Strategy.EXTRACT)
