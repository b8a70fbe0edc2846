# src/errata/recovery/__init__.py
"""Recovery of structured questions from raw model output.

This module contains the JSON recovery pipeline and its building blocks:
- ResponseRecoverer: Abstract base class (recover(text) -> StructuredQuestion)
- JsonRecoveryPipeline: The shared multi-stage implementation
- extract_candidates / normalize_escapes: Individual stages, usable on their own
- LoggingSink / FileSink: Diagnostic sinks

Usage:
    from errata.recovery import JsonRecoveryPipeline, LoggingSink

    pipeline = JsonRecoveryPipeline(sinks=[LoggingSink()])
    question = pipeline.recover(raw_text)
"""

from errata.recovery.base import ResponseRecoverer
from errata.recovery.diagnostics import DiagnosticSink, FileSink, LoggingSink
from errata.recovery.escapes import has_eaten_latex, normalize_escapes
from errata.recovery.events import RecoveryEvent, RecoveryReport, Strategy
from errata.recovery.extraction import (
    Extraction,
    extract_candidate,
    extract_candidates,
    extract_fenced_block,
    find_matching_brace,
)
from errata.recovery.pipeline import JsonRecoveryPipeline

__all__ = [
    # ABC
    "ResponseRecoverer",
    # Pipeline
    "JsonRecoveryPipeline",
    "RecoveryEvent",
    "RecoveryReport",
    "Strategy",
    # Stages
    "Extraction",
    "extract_candidate",
    "extract_candidates",
    "extract_fenced_block",
    "find_matching_brace",
    "has_eaten_latex",
    "normalize_escapes",
    # Diagnostics
    "DiagnosticSink",
    "FileSink",
    "LoggingSink",
]
