# src/errata/providers/__init__.py
"""Completion client implementations for errata.

This module contains the client abstraction the provider adapters call:
- LLMClient: Abstract base class for chat completion providers
- LiteLLMClient: LiteLLM implementation (Gemini, OpenAI and compatibles)

Usage:
    from errata.providers import LLMClient
    from errata.providers.litellm import LiteLLMClient, ChatModels
"""

from errata.providers.base import LLMClient
from errata.providers.litellm import ChatModels, LiteLLMClient

__all__ = [
    # ABC
    "LLMClient",
    # Model constants
    "ChatModels",
    # LiteLLM client
    "LiteLLMClient",
]
