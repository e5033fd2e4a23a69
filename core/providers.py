# core/providers.py
import json
import logging
from fastapi import status
from abc import ABC, abstractmethod
from typing import List, Optional
from config.settings import Settings, settings as default_settings
from core.pattern_extractor import generate_pattern_extractions
from model.api import ExtractionRequest
from model.extraction import AnnotatedDocument
from util.enums import ModelProvider
from util.errors import ProviderError
from util.functions import generate_id
from util.timing import timed

logger = logging.getLogger(__name__)


class BaseExtractionProvider(ABC):
    """
    One extraction back-end. Every variant returns an AnnotatedDocument over the
    request text; callers never depend on which variant produced it.
    """

    provider: ModelProvider
    default_model: str
    document_prefix: str

    def __init__(self, api_key: str, model_id: Optional[str] = None) -> None:
        self._api_key = api_key
        self.model_id = model_id or self.default_model

    @abstractmethod
    async def extract(self, request: ExtractionRequest) -> AnnotatedDocument: ...

    def build_prompt(self, request: ExtractionRequest) -> str:
        parts = [request.prompt_description.strip(), ""]
        if request.additional_context:
            parts += [f"Additional context: {request.additional_context}", ""]
        parts.append("Examples:")
        for i, example in enumerate(request.examples, start=1):
            parts.append(f"Example {i}:")
            parts.append(f"Text: {example.text}")
            extractions = [
                e.model_dump(exclude_none=True) for e in example.extractions
            ]
            parts.append(
                f"Extractions: {json.dumps(extractions, ensure_ascii=False, indent=2)}"
            )
            parts.append("")
        parts.append(f"Extract information from the following text:\n{request.text}")
        parts.append("")
        parts.append(f"Return the extractions as {request.format_type.value.upper()}.")
        return "\n".join(parts)

    async def _pattern_document(self, request: ExtractionRequest) -> AnnotatedDocument:
        prompt = self.build_prompt(request)
        logger.debug(
            "provider.call provider=%s model=%s prompt_chars=%d has_key=%s",
            self.provider.value,
            self.model_id,
            len(prompt),
            bool(self._api_key),
        )
        with timed(logger, "provider.extract", provider=self.provider.value):
            extractions = generate_pattern_extractions(
                request.text, request.examples, request.extraction_passes
            )
        return AnnotatedDocument(
            document_id=generate_id(self.document_prefix),
            text=request.text,
            extractions=extractions,
        )


class GeminiProvider(BaseExtractionProvider):
    provider = ModelProvider.GEMINI
    default_model = "gemini-2.5-flash"
    document_prefix = "gemini_doc_"

    async def extract(self, request: ExtractionRequest) -> AnnotatedDocument:
        # TODO: replace the pattern stub with a generateContent call once response parsing and alignment exist
        return await self._pattern_document(request)


class OpenAIProvider(BaseExtractionProvider):
    provider = ModelProvider.OPENAI
    default_model = "gpt-4"
    document_prefix = "openai_doc_"

    async def extract(self, request: ExtractionRequest) -> AnnotatedDocument:
        return await self._pattern_document(request)


_PROVIDERS = {
    ModelProvider.GEMINI: GeminiProvider,
    ModelProvider.OPENAI: OpenAIProvider,
}


class ProviderFactory:
    def __init__(self, settings: Settings = default_settings) -> None:
        self._settings = settings

    def create(
        self,
        provider: ModelProvider | str,
        api_key: Optional[str] = None,
        model_id: Optional[str] = None,
    ) -> BaseExtractionProvider:
        """
        Build a provider; a request key wins over the configured one.
        Raises ProviderError for unknown providers or when no key is available.
        """
        try:
            kind = ModelProvider(provider)
        except ValueError:
            raise ProviderError(
                f"Unsupported model provider: {provider}", status.HTTP_400_BAD_REQUEST
            ) from None

        final_key = (api_key or "").strip() or self._settings.api_key_for(kind)
        if not final_key:
            raise ProviderError(
                f"{kind.value.upper()} API key is not configured. "
                f"Set {kind.value.upper()}_API_KEY on the server.",
                status.HTTP_400_BAD_REQUEST,
            )
        return _PROVIDERS[kind](final_key, model_id)

    def available_providers(self) -> List[ModelProvider]:
        return [p for p in _PROVIDERS if (self._settings.api_key_for(p) or "").strip()]
