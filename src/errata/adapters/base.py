# src/errata/adapters/base.py
"""ProviderAdapter abstract base class."""

from __future__ import annotations

import base64
import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from errata.configuration.base import ProviderConfig
from errata.errors import AIServiceError, EmptyResponseError, ErrorCode, to_service_error
from errata.models import Difficulty, Language, StructuredQuestion
from errata.prompts import PromptBuilder
from errata.providers.base import LLMClient
from errata.providers.litellm import LiteLLMClient
from errata.recovery import JsonRecoveryPipeline, LoggingSink, ResponseRecoverer
from errata.settings import Settings

logger = logging.getLogger(__name__)

Messages = list[dict[str, Any]]


def encode_image(image: bytes | str, mime_type: str) -> tuple[str, str]:
    """Return ``(base64_data, mime_type)`` for raw bytes, base64 text or a data URL."""
    if isinstance(image, bytes):
        return base64.b64encode(image).decode("ascii"), mime_type

    if image.startswith("data:") and ";base64," in image:
        header, _, data = image.partition(";base64,")
        return data, header[len("data:") :] or mime_type
    return image, mime_type


class ProviderAdapter(ABC):
    """Wraps one vendor's completion call around the shared recovery pipeline.

    Subclasses only describe the vendor request; the base class issues exactly
    one call per operation, rejects empty output, runs the recoverer, and
    converts every failure into an AIServiceError carrying one ErrorCode.

    Example:
        adapter = OpenAIAdapter(ProviderConfig(api_key="sk-..."))
        question = adapter.analyze_image(image_bytes, "image/png", language="en")
    """

    provider_name: ClassVar[str]
    default_model: ClassVar[str]
    litellm_prefix: ClassVar[str]

    def __init__(
        self,
        config: ProviderConfig,
        *,
        recoverer: ResponseRecoverer | None = None,
        llm_client: LLMClient | None = None,
        settings: Settings | None = None,
        prompts: PromptBuilder | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            config: Credentials, model and base URL.
            recoverer: Recovery implementation. Default: JsonRecoveryPipeline
                       with a LoggingSink.
            llm_client: Completion client. Default: LiteLLMClient built from config.
            settings: Behavioral settings. Default: Settings().
            prompts: Prompt collaborator. Default: PromptBuilder().

        Raises:
            ConfigurationError: If the config has no API key. Nothing is built
                and no call is made.
        """
        api_key = config.require_api_key(self.provider_name)

        self.config = config
        self.settings = settings or Settings()
        self.model = config.model or self.default_model
        self._prompts = prompts or PromptBuilder()
        self._recoverer = recoverer or JsonRecoveryPipeline(
            normalize_escapes=self.settings.normalize_escapes,
            sinks=[LoggingSink()],
        )
        self._client = llm_client or self._build_client(api_key)

    @property
    def litellm_model(self) -> str:
        """Model id routed through LiteLLM (vendor prefix added if missing)."""
        if self.model.startswith(f"{self.litellm_prefix}/"):
            return self.model
        return f"{self.litellm_prefix}/{self.model}"

    def _build_client(self, api_key: str) -> LLMClient:
        return LiteLLMClient(
            model=self.litellm_model,
            api_key=api_key,
            api_base=self.config.base_url,
            num_retries=self.settings.num_retries,
            timeout=self.settings.timeout,
        )

    @abstractmethod
    def _analyze_request(
        self, prompt: str, image_data: str, mime_type: str
    ) -> tuple[Messages, dict[str, Any]]:
        """Build messages and completion options for image analysis."""
        ...

    @abstractmethod
    def _similar_request(
        self, prompt: str, original_question: str, knowledge_points: list[str]
    ) -> tuple[Messages, dict[str, Any]]:
        """Build messages and completion options for similar-question generation."""
        ...

    def _prepare_analyze(
        self, image: bytes | str, mime_type: str, language: Language
    ) -> tuple[Messages, dict[str, Any]]:
        image_data, mime_type = encode_image(image, mime_type)
        prompt = self._prompts.analyze(language)
        return self._analyze_request(prompt, image_data, mime_type)

    def _prepare_similar(
        self,
        original_question: str,
        knowledge_points: list[str],
        language: Language,
        difficulty: Difficulty,
    ) -> tuple[Messages, dict[str, Any]]:
        knowledge_points = list(knowledge_points)
        prompt = self._prompts.similar_question(
            language, original_question, knowledge_points, difficulty
        )
        return self._similar_request(prompt, original_question, knowledge_points)

    def _parse(self, text: str | None) -> StructuredQuestion:
        if not text or not text.strip():
            raise EmptyResponseError()
        return self._recoverer.recover(text)

    def _classify(self, operation: str, exc: Exception) -> AIServiceError:
        error = to_service_error(exc)
        logger.warning(
            "%s %s failed with %s: %s",
            self.provider_name,
            operation,
            error.code.value,
            exc,
            exc_info=exc if error.code is ErrorCode.UNKNOWN_ERROR else None,
        )
        return error

    def analyze_image(
        self,
        image: bytes | str,
        mime_type: str = "image/jpeg",
        language: Language = "zh",
    ) -> StructuredQuestion:
        """Transcribe and analyze a question image.

        Args:
            image: Raw image bytes, base64 text, or a base64 data URL.
            mime_type: Image MIME type (ignored for data URLs, which carry one).
            language: "zh" or "en".

        Raises:
            AIServiceError: With one of the four ErrorCode values.
        """
        try:
            messages, options = self._prepare_analyze(image, mime_type, language)
            text = self._client.complete(messages, **options)
            return self._parse(text)
        except AIServiceError:
            raise
        except Exception as e:
            raise self._classify("analyze_image", e) from e

    async def aanalyze_image(
        self,
        image: bytes | str,
        mime_type: str = "image/jpeg",
        language: Language = "zh",
    ) -> StructuredQuestion:
        """Async variant of analyze_image()."""
        try:
            messages, options = self._prepare_analyze(image, mime_type, language)
            text = await self._client.acomplete(messages, **options)
            return self._parse(text)
        except AIServiceError:
            raise
        except Exception as e:
            raise self._classify("analyze_image", e) from e

    def generate_similar_question(
        self,
        original_question: str,
        knowledge_points: list[str],
        language: Language = "zh",
        difficulty: Difficulty = "medium",
    ) -> StructuredQuestion:
        """Generate a new practice question testing the same knowledge points.

        Raises:
            AIServiceError: With one of the four ErrorCode values.
        """
        try:
            messages, options = self._prepare_similar(
                original_question, knowledge_points, language, difficulty
            )
            text = self._client.complete(messages, **options)
            return self._parse(text)
        except AIServiceError:
            raise
        except Exception as e:
            raise self._classify("generate_similar_question", e) from e

    async def agenerate_similar_question(
        self,
        original_question: str,
        knowledge_points: list[str],
        language: Language = "zh",
        difficulty: Difficulty = "medium",
    ) -> StructuredQuestion:
        """Async variant of generate_similar_question()."""
        try:
            messages, options = self._prepare_similar(
                original_question, knowledge_points, language, difficulty
            )
            text = await self._client.acomplete(messages, **options)
            return self._parse(text)
        except AIServiceError:
            raise
        except Exception as e:
            raise self._classify("generate_similar_question", e) from e
