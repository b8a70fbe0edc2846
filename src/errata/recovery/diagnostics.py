# src/errata/recovery/diagnostics.py
"""Diagnostic sinks for the recovery pipeline.

The pipeline never logs or writes files by itself. It hands every
RecoveryEvent, and the final MalformedResponseError on exhaustion, to the
sinks it was configured with.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from errata.errors import MalformedResponseError
    from errata.recovery.events import RecoveryEvent

logger = logging.getLogger(__name__)

PREVIEW_CHARS = 500


@runtime_checkable
class DiagnosticSink(Protocol):
    """Receives recovery diagnostics.

    Example implementation:
        class ListSink:
            def __init__(self):
                self.events = []

            def emit(self, event): self.events.append(event)
            def on_failure(self, error): ...
    """

    def emit(self, event: RecoveryEvent) -> None:
        """Called once per strategy attempt."""
        ...

    def on_failure(self, error: MalformedResponseError) -> None:
        """Called once when every strategy has failed."""
        ...


class LoggingSink:
    """Forward diagnostics to the stdlib logger of this module."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def emit(self, event: RecoveryEvent) -> None:
        self._log.debug(
            "recovery %s %s (len=%d): %s",
            event.strategy.value,
            "ok" if event.succeeded else "failed",
            event.candidate_length,
            event.detail,
        )

    def on_failure(self, error: MalformedResponseError) -> None:
        self._log.warning(
            "recovery exhausted after %d attempts; original=%r extracted=%r",
            len(error.events),
            error.raw_text[:PREVIEW_CHARS],
            error.candidate[:PREVIEW_CHARS],
        )


class FileSink:
    """Append failing payloads to a debug log file.

    Only failures are written; successful recoveries leave the file alone.

    Args:
        path: Log file path. Parent directories are created on first write.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def emit(self, event: RecoveryEvent) -> None:
        return None

    def on_failure(self, error: MalformedResponseError) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now(timezone.utc).isoformat()
        entry = (
            f"\n\n--- {stamp} ---\n"
            f"Error: {error}\n"
            f"Attempts: {', '.join(event.strategy.value for event in error.events)}\n"
            f"Original: {error.raw_text}\n"
            f"Extracted: {error.candidate}\n"
        )
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(entry)
