# src/errata/adapters/__init__.py
"""Provider adapters for errata.

Each adapter wraps one vendor's multimodal completion call around the shared
JsonRecoveryPipeline and converts failures into AIServiceError codes:
- ProviderAdapter: Abstract base class
- GeminiAdapter: Google Gemini
- OpenAIAdapter: OpenAI and OpenAI-compatible endpoints

Usage:
    from errata.adapters import OpenAIAdapter
    from errata.configuration import ProviderConfig

    adapter = OpenAIAdapter(ProviderConfig(api_key="sk-..."))
    question = adapter.analyze_image(image_bytes, "image/jpeg", language="zh")
"""

from errata.adapters.base import ProviderAdapter, encode_image
from errata.adapters.gemini import GeminiAdapter
from errata.adapters.openai import OpenAIAdapter

__all__ = [
    "ProviderAdapter",
    "GeminiAdapter",
    "OpenAIAdapter",
    "encode_image",
]
