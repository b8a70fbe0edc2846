"""Shared pytest fixtures."""

import json
import os
from typing import Any

import pytest

# Use litellm's bundled model cost map instead of fetching it over the network on import.
os.environ.setdefault("LITELLM_LOCAL_MODEL_COST_MAP", "True")

from errata.providers.base import LLMClient


class ScriptedClient(LLMClient):
    """LLMClient returning (or raising) a fixed result and recording calls."""

    def __init__(self, result: str | Exception | None = "") -> None:
        self.result = result
        self.calls: list[dict[str, Any]] = []

    def complete(self, messages, temperature=None, response_format=None, max_tokens=None):
        self.calls.append(
            {
                "messages": messages,
                "temperature": temperature,
                "response_format": response_format,
                "max_tokens": max_tokens,
            }
        )
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


@pytest.fixture
def question_payload() -> dict[str, Any]:
    """A schema-valid analyze result, as the model emits it."""
    return {
        "questionText": "解方程 $x^2 - 5x + 6 = 0$",
        "answerText": "$x_1 = 2, x_2 = 3$",
        "analysis": "因式分解得 $(x-2)(x-3)=0$",
        "subject": "数学",
        "knowledgePoints": ["一元二次方程"],
    }


@pytest.fixture
def question_json(question_payload) -> str:
    return json.dumps(question_payload, ensure_ascii=False)


@pytest.fixture
def scripted_client(question_json) -> ScriptedClient:
    return ScriptedClient(question_json)


@pytest.fixture
def make_client():
    """Factory for ScriptedClient instances."""
    return ScriptedClient
