# src/errata/providers/litellm/models.py
"""Curated vision-capable model constants for the LiteLLM client.

These are convenience constants for IDE autocomplete. Any valid LiteLLM
model string works too.

Example:
    from errata.providers.litellm import ChatModels, LiteLLMClient

    client = LiteLLMClient(model=ChatModels.GEMINI_25_FLASH, api_key="...")
    client = LiteLLMClient(model="openai/my-proxy-model", api_key="...")
"""


class ChatModels:
    """Multimodal chat models usable by the provider adapters."""

    # Google Gemini
    GEMINI_15_FLASH = "gemini/gemini-1.5-flash"
    GEMINI_15_PRO = "gemini/gemini-1.5-pro"
    GEMINI_20_FLASH = "gemini/gemini-2.0-flash"
    GEMINI_25_FLASH = "gemini/gemini-2.5-flash"
    GEMINI_25_PRO = "gemini/gemini-2.5-pro"

    # OpenAI
    GPT_4O = "openai/gpt-4o"
    GPT_4O_MINI = "openai/gpt-4o-mini"
    GPT_41 = "openai/gpt-4.1"
    GPT_41_MINI = "openai/gpt-4.1-mini"
