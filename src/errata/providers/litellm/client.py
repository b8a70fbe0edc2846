# src/errata/providers/litellm/client.py
"""LiteLLM client implementation for multimodal completions."""

from typing import Any

import litellm

from errata.errors import EmptyResponseError
from errata.providers.base import LLMClient
from errata.providers.litellm.models import ChatModels


class LiteLLMClient(LLMClient):
    """LiteLLM-based client for text and image+text completions.

    Supports any model available through LiteLLM. Vendor routing comes from
    the model prefix ("gemini/...", "openai/...").

    Example:
        from errata.providers.litellm import LiteLLMClient, ChatModels

        client = LiteLLMClient(model=ChatModels.GPT_4O, api_key="sk-...")
        text = client.complete([{"role": "user", "content": "Hello"}])

        # OpenAI-compatible proxy
        client = LiteLLMClient(model="openai/gpt-4o", api_key="...",
                               api_base="https://proxy.example.com/v1")
    """

    def __init__(
        self,
        model: str = ChatModels.GEMINI_15_FLASH,
        api_key: str | None = None,
        api_base: str | None = None,
        num_retries: int = 0,
        timeout: float | None = None,
    ) -> None:
        """Initialize the LiteLLM client.

        Args:
            model: LiteLLM model identifier.
                   Examples: "gemini/gemini-1.5-flash", "openai/gpt-4o"
            api_key: Vendor API key. None lets LiteLLM read its own env vars.
            api_base: Alternate base URL for self-hosted or proxy endpoints.
            num_retries: Transport retries inside LiteLLM. Default 0: one call
                         per request, retry policy belongs to the caller.
            timeout: Request timeout in seconds. None uses LiteLLM's default.
        """
        self.model = model
        self.api_key = api_key
        self.api_base = api_base
        self.num_retries = num_retries
        self.timeout = timeout

    def _completion_kwargs(
        self,
        messages: list[dict[str, Any]],
        temperature: float | None,
        response_format: dict[str, Any] | None,
        max_tokens: int | None,
    ) -> dict[str, Any]:
        completion_kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "drop_params": True,
            "num_retries": self.num_retries,
        }
        if self.api_key is not None:
            completion_kwargs["api_key"] = self.api_key
        if self.api_base:
            completion_kwargs["api_base"] = self.api_base
        if self.timeout is not None:
            completion_kwargs["timeout"] = self.timeout
        if temperature is not None:
            completion_kwargs["temperature"] = temperature
        if response_format is not None:
            completion_kwargs["response_format"] = response_format
        if max_tokens is not None:
            completion_kwargs["max_tokens"] = max_tokens
        return completion_kwargs

    def _extract_text(self, response: Any) -> str:
        if not response.choices:
            raise EmptyResponseError(f"LLM returned no choices for model {self.model}")
        content = response.choices[0].message.content
        if content is None:
            return ""
        return str(content)

    def complete(
        self,
        messages: list[dict[str, Any]],
        temperature: float | None = None,
        response_format: dict[str, Any] | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a completion using LiteLLM."""
        response = litellm.completion(
            **self._completion_kwargs(messages, temperature, response_format, max_tokens)
        )
        return self._extract_text(response)

    async def acomplete(
        self,
        messages: list[dict[str, Any]],
        temperature: float | None = None,
        response_format: dict[str, Any] | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a completion using LiteLLM (async)."""
        response = await litellm.acompletion(
            **self._completion_kwargs(messages, temperature, response_format, max_tokens)
        )
        return self._extract_text(response)
