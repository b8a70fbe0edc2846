# src/errata/adapters/gemini.py
"""Gemini provider adapter."""

from __future__ import annotations

from typing import Any

from errata.adapters.base import Messages, ProviderAdapter


class GeminiAdapter(ProviderAdapter):
    """Adapter for Google Gemini (routed through LiteLLM's ``gemini/`` provider).

    Gemini gets a single user turn: the prompt text followed by the inline
    image. No JSON response mode is requested, so the recovery pipeline
    usually has to strip prose or fences.

    Example:
        adapter = GeminiAdapter(ProviderConfig(api_key="AIza...", model="gemini-2.0-flash"))
        question = adapter.analyze_image(image_bytes, "image/png")
    """

    provider_name = "gemini"
    default_model = "gemini-1.5-flash"
    litellm_prefix = "gemini"

    def _options(self) -> dict[str, Any]:
        options: dict[str, Any] = {}
        if self.settings.temperature is not None:
            options["temperature"] = self.settings.temperature
        return options

    def _analyze_request(
        self, prompt: str, image_data: str, mime_type: str
    ) -> tuple[Messages, dict[str, Any]]:
        messages: Messages = [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt},
                    {
                        "type": "image_url",
                        "image_url": {"url": f"data:{mime_type};base64,{image_data}"},
                    },
                ],
            }
        ]
        return messages, self._options()

    def _similar_request(
        self, prompt: str, original_question: str, knowledge_points: list[str]
    ) -> tuple[Messages, dict[str, Any]]:
        return [{"role": "user", "content": prompt}], self._options()
