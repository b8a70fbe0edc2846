# src/errata/adapters/openai.py
"""OpenAI (and OpenAI-compatible) provider adapter."""

from __future__ import annotations

from typing import Any

from errata.adapters.base import Messages, ProviderAdapter

JSON_OBJECT_FORMAT = {"type": "json_object"}


class OpenAIAdapter(ProviderAdapter):
    """Adapter for OpenAI chat completions (LiteLLM ``openai/`` provider).

    The prompt goes in the system message and JSON response mode is
    requested, so the direct-parse stage normally succeeds. Set
    ``ProviderConfig.base_url`` to target an OpenAI-compatible proxy.

    Example:
        adapter = OpenAIAdapter(ProviderConfig(api_key="sk-...", base_url="https://proxy/v1"))
        question = adapter.generate_similar_question("1 + 1 = ?", ["有理数"], "en", "hard")
    """

    provider_name = "openai"
    default_model = "gpt-4o"
    litellm_prefix = "openai"

    def _options(self, max_tokens: int | None = None) -> dict[str, Any]:
        options: dict[str, Any] = {"response_format": JSON_OBJECT_FORMAT}
        if self.settings.temperature is not None:
            options["temperature"] = self.settings.temperature
        if max_tokens is not None:
            options["max_tokens"] = max_tokens
        return options

    def _analyze_request(
        self, prompt: str, image_data: str, mime_type: str
    ) -> tuple[Messages, dict[str, Any]]:
        messages: Messages = [
            {"role": "system", "content": prompt},
            {
                "role": "user",
                "content": [
                    {
                        "type": "image_url",
                        "image_url": {"url": f"data:{mime_type};base64,{image_data}"},
                    }
                ],
            },
        ]
        return messages, self._options(max_tokens=self.settings.max_tokens)

    def _similar_request(
        self, prompt: str, original_question: str, knowledge_points: list[str]
    ) -> tuple[Messages, dict[str, Any]]:
        user_prompt = (
            f'Original Question: "{original_question}"\n'
            f"Knowledge Points: {', '.join(knowledge_points)}"
        )
        messages: Messages = [
            {"role": "system", "content": prompt},
            {"role": "user", "content": user_prompt},
        ]
        return messages, self._options()
