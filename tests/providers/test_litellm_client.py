# tests/providers/test_litellm_client.py
"""Tests for the LiteLLM completion client."""

from unittest.mock import MagicMock, patch

import pytest

pytest.importorskip("litellm", reason="Tests require litellm package")

from errata.errors import EmptyResponseError
from errata.providers import LLMClient
from errata.providers.litellm import ChatModels, LiteLLMClient

MESSAGES = [{"role": "user", "content": "Hello"}]


def mock_completion_response(content):
    """Create a mock LiteLLM completion response."""
    mock_response = MagicMock()
    mock_response.choices = [MagicMock()]
    mock_response.choices[0].message.content = content
    return mock_response


class TestLiteLLMClient:
    def test_is_llm_client(self):
        assert isinstance(LiteLLMClient(), LLMClient)

    def test_default_model(self):
        assert LiteLLMClient().model == ChatModels.GEMINI_15_FLASH

    @patch("errata.providers.litellm.client.litellm.completion")
    def test_complete_returns_text(self, mock_completion):
        mock_completion.return_value = mock_completion_response('{"a": 1}')

        client = LiteLLMClient(model=ChatModels.GPT_4O, api_key="sk-test")
        assert client.complete(MESSAGES) == '{"a": 1}'
        mock_completion.assert_called_once()

    @patch("errata.providers.litellm.client.litellm.completion")
    def test_minimal_kwargs(self, mock_completion):
        mock_completion.return_value = mock_completion_response("x")

        LiteLLMClient(model="openai/gpt-4o").complete(MESSAGES)

        assert mock_completion.call_args.kwargs == {
            "model": "openai/gpt-4o",
            "messages": MESSAGES,
            "drop_params": True,
            "num_retries": 0,
        }

    @patch("errata.providers.litellm.client.litellm.completion")
    def test_all_kwargs(self, mock_completion):
        mock_completion.return_value = mock_completion_response("x")
        client = LiteLLMClient(
            model="openai/gpt-4o",
            api_key="sk-test",
            api_base="https://proxy.example.com/v1",
            num_retries=2,
            timeout=30.0,
        )

        client.complete(
            MESSAGES,
            temperature=0.2,
            response_format={"type": "json_object"},
            max_tokens=4096,
        )

        kwargs = mock_completion.call_args.kwargs
        assert kwargs["api_key"] == "sk-test"
        assert kwargs["api_base"] == "https://proxy.example.com/v1"
        assert kwargs["num_retries"] == 2
        assert kwargs["timeout"] == 30.0
        assert kwargs["temperature"] == 0.2
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["max_tokens"] == 4096

    @patch("errata.providers.litellm.client.litellm.completion")
    def test_none_content_is_empty_string(self, mock_completion):
        mock_completion.return_value = mock_completion_response(None)
        assert LiteLLMClient().complete(MESSAGES) == ""

    @patch("errata.providers.litellm.client.litellm.completion")
    def test_no_choices(self, mock_completion):
        response = MagicMock()
        response.choices = []
        mock_completion.return_value = response

        with pytest.raises(EmptyResponseError):
            LiteLLMClient().complete(MESSAGES)

    @patch("errata.providers.litellm.client.litellm.completion")
    def test_errors_propagate(self, mock_completion):
        mock_completion.side_effect = RuntimeError("fetch failed")

        with pytest.raises(RuntimeError, match="fetch failed"):
            LiteLLMClient().complete(MESSAGES)


class TestAsyncLiteLLMClient:
    @pytest.mark.asyncio
    @patch("errata.providers.litellm.client.litellm.acompletion")
    async def test_acomplete(self, mock_acompletion):
        mock_acompletion.return_value = mock_completion_response('{"a": 1}')

        result = await LiteLLMClient(api_key="key").acomplete(MESSAGES, temperature=0.5)

        assert result == '{"a": 1}'
        assert mock_acompletion.call_args.kwargs["temperature"] == 0.5
        assert mock_acompletion.call_args.kwargs["api_key"] == "key"


class TestDefaultAsync:
    @pytest.mark.asyncio
    async def test_base_acomplete_calls_complete(self):
        class EchoClient(LLMClient):
            def complete(self, messages, temperature=None, response_format=None, max_tokens=None):
                return messages[0]["content"]

        assert await EchoClient().acomplete(MESSAGES) == "Hello"
