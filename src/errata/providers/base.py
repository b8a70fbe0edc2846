# src/errata/providers/base.py
"""Abstract base class for multimodal completion clients."""

from abc import ABC, abstractmethod
from typing import Any


class LLMClient(ABC):
    """Abstract base class for chat completion providers.

    Implementations send one request and return the raw text of the first
    choice. They do not parse or validate it.

    Example:
        class MyLLMClient(LLMClient):
            def complete(self, messages, temperature=None, response_format=None,
                         max_tokens=None):
                return my_api.chat(messages, temp=temperature)
    """

    @abstractmethod
    def complete(
        self,
        messages: list[dict[str, Any]],
        temperature: float | None = None,
        response_format: dict[str, Any] | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a completion for the given messages.

        Args:
            messages: List of message dicts with 'role' and 'content' keys.
                      Content may be a string or a list of text/image_url parts.
            temperature: Optional temperature. If None, use provider default.
            response_format: Optional response format, e.g. {"type": "json_object"}.
            max_tokens: Optional output token limit.

        Returns:
            The generated text, possibly empty.
        """
        ...

    async def acomplete(
        self,
        messages: list[dict[str, Any]],
        temperature: float | None = None,
        response_format: dict[str, Any] | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a completion for the given messages (async).

        Default implementation calls sync complete().
        Override in subclasses for true async behavior.
        """
        return self.complete(messages, temperature, response_format, max_tokens)
