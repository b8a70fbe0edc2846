# src/errata/providers/litellm/__init__.py
"""LiteLLM provider client for errata.

This module contains the LiteLLM-based client implementation:
- LiteLLMClient: Multimodal chat completion using LiteLLM
- ChatModels: Curated vision-capable model constants

Usage:
    from errata.providers.litellm import LiteLLMClient, ChatModels

    client = LiteLLMClient(model=ChatModels.GPT_4O, api_key="sk-...")
"""

from errata.providers.litellm.client import LiteLLMClient
from errata.providers.litellm.models import ChatModels

__all__ = [
    "ChatModels",
    "LiteLLMClient",
]
