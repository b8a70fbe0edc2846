# src/errata/errors.py
"""Error taxonomy and failure classification.

Internally the package distinguishes configuration, transport, empty-response
and malformed-response failures. Callers only ever see one of the four
``ErrorCode`` values, carried by ``AIServiceError``.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

import litellm

if TYPE_CHECKING:
    from errata.recovery.events import RecoveryEvent


class ErrorCode(str, Enum):
    """Caller-visible failure categories."""

    CONNECTION_FAILED = "AI_CONNECTION_FAILED"
    RESPONSE_ERROR = "AI_RESPONSE_ERROR"
    AUTH_ERROR = "AI_AUTH_ERROR"
    UNKNOWN_ERROR = "AI_UNKNOWN_ERROR"


class ErrataError(Exception):
    """Base class for all errata errors."""


class ConfigurationError(ErrataError):
    """Missing or invalid credentials, or an unknown provider."""


class NetworkError(ErrataError):
    """Transport-level failure reaching the vendor."""


class EmptyResponseError(ErrataError):
    """The vendor returned no usable text."""

    def __init__(self, message: str = "Empty response from AI") -> None:
        super().__init__(message)


class SchemaValidationError(ErrataError):
    """A parsed candidate does not match the StructuredQuestion schema."""


class MalformedResponseError(ErrataError):
    """Every recovery strategy was exhausted.

    Attributes:
        raw_text: The original model output.
        candidate: The last extracted JSON candidate.
        events: Every strategy attempt, in order.
    """

    def __init__(
        self,
        message: str = "Invalid JSON response from AI",
        *,
        raw_text: str = "",
        candidate: str = "",
        events: list[RecoveryEvent] | None = None,
    ) -> None:
        super().__init__(message)
        self.raw_text = raw_text
        self.candidate = candidate
        self.events = list(events or [])


class AIServiceError(ErrataError):
    """Classified failure surfaced by a provider adapter.

    The message is always the code value; the underlying exception is kept
    on ``cause`` (and chained as ``__cause__``) for logging only.
    """

    def __init__(self, code: ErrorCode, cause: BaseException | None = None) -> None:
        super().__init__(code.value)
        self.code = code
        self.cause = cause


_CONNECTION_MARKERS = ("fetch failed", "network", "connect")
_RESPONSE_MARKERS = ("invalid json", "parse")
_AUTH_MARKERS = ("api key", "unauthorized", "401")


def _litellm_code(exc: BaseException) -> ErrorCode | None:
    """Map LiteLLM's typed exceptions."""
    if isinstance(exc, litellm.AuthenticationError):
        return ErrorCode.AUTH_ERROR
    if isinstance(exc, (litellm.APIConnectionError, litellm.Timeout)):
        return ErrorCode.CONNECTION_FAILED
    return None


def classify_error(exc: BaseException) -> ErrorCode:
    """Map any failure to exactly one ErrorCode.

    Typed checks run first; otherwise the lower-cased description is matched
    against connection, response and auth markers in that order.
    """
    if isinstance(exc, AIServiceError):
        return exc.code
    if isinstance(exc, ConfigurationError):
        return ErrorCode.AUTH_ERROR
    if isinstance(exc, NetworkError):
        return ErrorCode.CONNECTION_FAILED
    if isinstance(exc, (EmptyResponseError, MalformedResponseError, SchemaValidationError)):
        return ErrorCode.RESPONSE_ERROR

    code = _litellm_code(exc)
    if code is not None:
        return code

    message = str(exc).lower()
    if any(marker in message for marker in _CONNECTION_MARKERS):
        return ErrorCode.CONNECTION_FAILED
    if any(marker in message for marker in _RESPONSE_MARKERS):
        return ErrorCode.RESPONSE_ERROR
    if any(marker in message for marker in _AUTH_MARKERS):
        return ErrorCode.AUTH_ERROR
    return ErrorCode.UNKNOWN_ERROR


def to_service_error(exc: BaseException) -> AIServiceError:
    """Wrap ``exc`` in an AIServiceError (returned as-is if already one)."""
    if isinstance(exc, AIServiceError):
        return exc
    return AIServiceError(classify_error(exc), cause=exc)
