# src/errata/recovery/extraction.py
"""Locate the JSON object inside free-form model output."""

from __future__ import annotations

import re
from typing import NamedTuple

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)
_OPEN_FENCE = re.compile(r"```(?:json)?\s*(.*)", re.DOTALL | re.IGNORECASE)


class Extraction(NamedTuple):
    """A JSON candidate and how it was found."""

    candidate: str
    method: str


def extract_fenced_block(text: str) -> str | None:
    """Return the interior of the first fenced code block.

    An opening fence without a closing one (truncated output) yields
    everything after the opening fence. Returns None if there is no fence.
    """
    match = _FENCED_BLOCK.search(text)
    if match:
        return match.group(1).strip()
    match = _OPEN_FENCE.search(text)
    if match:
        return match.group(1).strip()
    return None


def find_matching_brace(text: str, start: int) -> int | None:
    """Return the index of the ``}`` closing the ``{`` at ``start``.

    Braces inside double-quoted strings are ignored and backslash escapes
    inside strings are honored. Returns None if the object never closes.
    """
    depth = 0
    in_string = False
    escaped = False

    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return None


def _brace_candidate(source: str, prefix: str) -> Extraction | None:
    first_open = source.find("{")
    if first_open == -1:
        return None

    closing = find_matching_brace(source, first_open)
    if closing is not None:
        return Extraction(source[first_open : closing + 1], f"{prefix}brace-matched")

    last_close = source.rfind("}")
    if last_close > first_open:
        return Extraction(source[first_open : last_close + 1], f"{prefix}last-brace")

    return Extraction(source[first_open:], f"{prefix}open-ended")


def extract_candidates(text: str) -> list[Extraction]:
    """List the plausible JSON object substrings of ``text``, best first.

    The fenced block interior comes first (brace-scanned so prose inside the
    fence is dropped), then the object found by scanning the whole text.
    Within each source the scan tries a brace-matched object, then first
    ``{`` to last ``}``, then first ``{`` to the end. Duplicates are dropped.

    Returns a single no-brace entry (the fenced interior or the stripped
    text) when there is no ``{`` anywhere.
    """
    source = text.strip()
    candidates: list[Extraction] = []

    fenced = extract_fenced_block(source)
    if fenced is not None:
        candidates.append(_brace_candidate(fenced, "fenced+") or Extraction(fenced, "fenced"))

    whole = _brace_candidate(source, "")
    if whole is not None and all(whole.candidate != c.candidate for c in candidates):
        candidates.append(whole)

    if not any(c.candidate.startswith("{") for c in candidates):
        return [Extraction(fenced if fenced is not None else source, "no-brace")]
    return candidates


def extract_candidate(text: str) -> Extraction:
    """Pick the most plausible JSON object substring of ``text``.

    Tries, in order: the fenced block interior, a brace-matched object, first
    ``{`` to last ``}``, and first ``{`` to the end of the text. The brace
    scan runs inside the fenced interior when there is one.
    """
    return extract_candidates(text)[0]
