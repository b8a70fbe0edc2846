# src/errata/recovery/pipeline.py
"""Multi-stage JSON recovery for model responses."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable

from json_repair import repair_json

from errata.errors import MalformedResponseError, SchemaValidationError
from errata.models import StructuredQuestion, validate_question
from errata.recovery.base import ResponseRecoverer
from errata.recovery.diagnostics import DiagnosticSink
from errata.recovery.escapes import has_eaten_latex, normalize_escapes
from errata.recovery.events import RecoveryEvent, RecoveryReport, Strategy
from errata.recovery.extraction import extract_candidates

RepairFunction = Callable[[str], str]



class JsonRecoveryPipeline(ResponseRecoverer):
    """Vendor-agnostic recovery chain shared by every provider adapter.

    Strategies, each tried only if the previous ones failed:

    1. Parse the whole response as JSON.
    2. Extract candidates (fenced block interior, then the object found in
       the whole text: brace-matched, first ``{`` to last ``}``, first ``{``
       to end) and parse each in turn.
    3. Run each candidate through ``json_repair`` and parse the result.
    4. Normalize escapes inside string literals and parse again.

    Every parsed value goes through ``validate_question``; a schema mismatch
    counts as a failed strategy. While the escape stage is enabled, a result
    whose strings show LaTeX commands consumed as JSON escapes (``\\frac``
    read as a form feed) is held back until that stage has run, and is only
    returned if the escape stage fails too.

    Example:
        pipeline = JsonRecoveryPipeline(sinks=[LoggingSink()])
        question = pipeline.recover(response_text)

        report = pipeline.recover_with_report(response_text)
        print(report.strategy, [e.detail for e in report.events])
    """

    def __init__(
        self,
        *,
        repair: RepairFunction | None = None,
        normalize_escapes: bool = True,
        sinks: Iterable[DiagnosticSink] = (),
    ) -> None:
        """Initialize the pipeline.

        Args:
            repair: Syntactic repair routine (str -> str). Defaults to
                ``json_repair.repair_json``.
            normalize_escapes: Run the escape-normalization stage last.
            sinks: Diagnostic sinks receiving every event and the final failure.
        """
        self._repair = repair or repair_json
        self.normalize_escapes = normalize_escapes
        self._sinks = list(sinks)

    def recover(self, raw_text: str) -> StructuredQuestion:
        """Recover a StructuredQuestion or raise MalformedResponseError."""
        return self.recover_with_report(raw_text).question

    def recover_with_report(self, raw_text: str) -> RecoveryReport:
        """Recover a StructuredQuestion and return the attempts made.

        Raises:
            MalformedResponseError: If every strategy failed. The error carries
                the original text, the first extracted candidate and all events.
        """
        raw_text = raw_text or ""
        events: list[RecoveryEvent] = []
        held: list[RecoveryReport] = []
        text = raw_text.strip()

        question = self._attempt(Strategy.DIRECT, text, events, held)
        if question is not None:
            return RecoveryReport(question, Strategy.DIRECT, events)

        extractions = extract_candidates(text)
        candidates = [extraction.candidate for extraction in extractions]
        self._record(
            events,
            RecoveryEvent(
                Strategy.EXTRACT,
                any(candidates),
                ", ".join(extraction.method for extraction in extractions),
                len(candidates[0]),
            ),
        )

        for candidate in candidates:
            if candidate == text:
                continue
            question = self._attempt(Strategy.CANDIDATE, candidate, events, held)
            if question is not None:
                return RecoveryReport(question, Strategy.CANDIDATE, events)

        for candidate in candidates:
            repaired = self._run_repair(candidate, events)
            if repaired is None:
                continue
            question = self._attempt(Strategy.REPAIR, repaired, events, held)
            if question is not None:
                return RecoveryReport(question, Strategy.REPAIR, events)

        if self.normalize_escapes:
            for candidate in candidates:
                normalized = normalize_escapes(candidate)
                question = self._attempt(Strategy.ESCAPES, normalized, events, held)
                if question is not None:
                    return RecoveryReport(question, Strategy.ESCAPES, events)

        if held:
            return held[0]

        error = MalformedResponseError(raw_text=raw_text, candidate=candidates[0], events=events)
        for sink in self._sinks:
            sink.on_failure(error)
        raise error

    def _record(self, events: list[RecoveryEvent], event: RecoveryEvent) -> None:
        events.append(event)
        for sink in self._sinks:
            sink.emit(event)

    def _run_repair(self, candidate: str, events: list[RecoveryEvent]) -> str | None:
        if not candidate:
            self._record(events, RecoveryEvent(Strategy.REPAIR, False, "empty candidate"))
            return None
        # A repair failure ends this attempt only.
        try:
            return self._repair(candidate)
        except Exception as e:
            self._record(
                events,
                RecoveryEvent(Strategy.REPAIR, False, f"repair: {e}", len(candidate)),
            )
            return None

    def _attempt(
        self,
        strategy: Strategy,
        text: str,
        events: list[RecoveryEvent],
        held: list[RecoveryReport],
    ) -> StructuredQuestion | None:
        """Parse and validate ``text``; record the outcome."""
        try:
            parsed = json.loads(text)
        except (ValueError, RecursionError) as e:
            self._record(events, RecoveryEvent(strategy, False, f"parse: {e}", len(text)))
            return None

        try:
            question = validate_question(parsed)
        except SchemaValidationError as e:
            detail = str(e).splitlines()[0] if str(e) else "schema mismatch"
            self._record(events, RecoveryEvent(strategy, False, f"schema: {detail}", len(text)))
            return None

        if self.normalize_escapes and strategy is not Strategy.ESCAPES and _eaten_latex(question):
            self._record(
                events,
                RecoveryEvent(strategy, False, "latex: commands read as JSON escapes", len(text)),
            )
            held.append(RecoveryReport(question, strategy, events))
            return None

        self._record(events, RecoveryEvent(strategy, True, "ok", len(text)))
        return question


def _eaten_latex(question: StructuredQuestion) -> bool:
    texts = [question.question_text, question.answer_text, question.analysis]
    return any(has_eaten_latex(value) for value in texts + question.knowledge_points)
