# src/errata/recovery/base.py
"""ResponseRecoverer abstract base class."""

from abc import ABC, abstractmethod

from errata.models import StructuredQuestion


class ResponseRecoverer(ABC):
    """Turns raw model text into a validated StructuredQuestion.

    Implementations must either return a fully valid question or raise
    MalformedResponseError. They must not perform network I/O.

    Example:
        class FixedRecoverer(ResponseRecoverer):
            def recover(self, raw_text):
                return StructuredQuestion(questionText="", answerText="", analysis="")
    """

    @abstractmethod
    def recover(self, raw_text: str) -> StructuredQuestion:
        """Recover a StructuredQuestion from ``raw_text``.

        Raises:
            MalformedResponseError: If no valid question can be recovered.
        """
        ...
