# service/extraction_service.py
import logging
from typing import List, NamedTuple, Optional
from fastapi import status
from config.settings import Settings, settings as default_settings
from core.providers import ProviderFactory
from model.api import AvailableProviders, EnvironmentInfo, ExtractionRequest
from model.extraction import AnnotatedDocument
from repository.document_repository import DocumentRepository
from util.enums import Environment, ErrorMessage, ModelProvider
from util.errors import AppError
from util.timing import timed

logger = logging.getLogger(__name__)


class ApiKeyStatus(NamedTuple):
    has_gemini: bool
    has_openai: bool
    recommended: Optional[ModelProvider]

    @property
    def has_any(self) -> bool:
        return self.has_gemini or self.has_openai


def validate_extraction_request(request: ExtractionRequest) -> List[str]:
    """
    Collect every problem with the request instead of stopping at the first.
    The API key is optional: a server-side key may be used instead.
    """
    errors: List[str] = []
    if not request.text.strip():
        errors.append("Text must not be empty")
    if not request.prompt_description.strip():
        errors.append("Prompt description must not be empty")
    if not request.examples:
        errors.append("At least one example is required")

    for i, example in enumerate(request.examples, start=1):
        if not example.text.strip():
            errors.append(f"Example {i} text must not be empty")
        if not example.extractions:
            errors.append(f"Example {i} needs at least one extraction")
    return errors


def validate_api_keys(settings: Settings = default_settings) -> ApiKeyStatus:
    has_gemini = bool((settings.GEMINI_API_KEY or "").strip())
    has_openai = bool((settings.OPENAI_API_KEY or "").strip())
    available = {ModelProvider.GEMINI: has_gemini, ModelProvider.OPENAI: has_openai}

    recommended: Optional[ModelProvider] = None
    if available[settings.DEFAULT_MODEL_PROVIDER]:
        recommended = settings.DEFAULT_MODEL_PROVIDER
    elif has_gemini:
        recommended = ModelProvider.GEMINI
    elif has_openai:
        recommended = ModelProvider.OPENAI
    return ApiKeyStatus(has_gemini, has_openai, recommended)


def get_environment_info(settings: Settings = default_settings) -> EnvironmentInfo:
    """Deployment facts safe to expose: which providers exist, never the keys."""
    keys = validate_api_keys(settings)
    return EnvironmentInfo(
        environment="development" if settings.APP_ENV == Environment.DEV else "production",
        defaultProvider=settings.DEFAULT_MODEL_PROVIDER,
        availableProviders=AvailableProviders(gemini=keys.has_gemini, openai=keys.has_openai),
        recommendedProvider=keys.recommended,
        appUrl=settings.APP_URL,
        maxConcurrentRequests=settings.MAX_CONCURRENT_REQUESTS,
        requestTimeout=settings.REQUEST_TIMEOUT_MS,
    )


def provider_for_model(model_id: Optional[str]) -> ModelProvider:
    return ModelProvider.OPENAI if (model_id or "").startswith("gpt") else ModelProvider.GEMINI


class ExtractionService:
    def __init__(
        self,
        documents: DocumentRepository,
        settings: Settings = default_settings,
        providers: Optional[ProviderFactory] = None,
    ) -> None:
        self._documents = documents
        self._settings = settings
        self._providers = providers or ProviderFactory(settings)

    async def extract(self, request: ExtractionRequest) -> AnnotatedDocument:
        """
        Validate, pick a provider, run it and persist the annotated document.
        Logs: sizes, provider and counts only (no text, no keys).
        """
        logger.info(
            "extract.request chars=%d examples=%d model=%s user_key=%s",
            len(request.text),
            len(request.examples),
            request.model_id,
            bool((request.api_key or "").strip()),
        )

        errors = validate_extraction_request(request)
        if errors:
            logger.warning("extract.invalid errors=%d", len(errors))
            raise AppError("; ".join(errors), status.HTTP_400_BAD_REQUEST)

        user_key = (request.api_key or "").strip()
        if user_key:
            provider = provider_for_model(request.model_id)
        else:
            keys = validate_api_keys(self._settings)
            if not keys.has_any or keys.recommended is None:
                info = ErrorMessage.NO_API_KEY_CONFIGURED.value
                raise AppError(info.message, info.http_status)
            provider = keys.recommended
        logger.debug("extract.provider provider=%s user_key=%s", provider.value, bool(user_key))

        service = self._providers.create(provider, user_key or None, request.model_id)
        try:
            with timed(
                logger,
                "extract",
                slow_ms=self._settings.REQUEST_TIMEOUT_MS,
                provider=provider.value,
            ):
                document = await service.extract(request)
        except AppError:
            raise
        except Exception as e:
            logger.error("extract.provider.error provider=%s", provider.value, exc_info=True)
            raise AppError(
                str(e) or ErrorMessage.INTERNAL_ERROR.value.message,
                ErrorMessage.INTERNAL_ERROR.value.http_status,
            ) from e

        try:
            await self._documents.put(document)
        except Exception:
            logger.error("extract.persist.error doc=%s", document.document_id)
            raise

        logger.info(
            "extract.ok doc=%s provider=%s count=%d",
            document.document_id,
            provider.value,
            len(document.extractions),
        )
        return document

    async def get_document(self, document_id: str) -> AnnotatedDocument:
        document = await self._documents.get(document_id)
        if document is None:
            info = ErrorMessage.UNKNOWN_DOCUMENT.value
            raise AppError(info.message, info.http_status)
        return document

    def environment_info(self) -> EnvironmentInfo:
        return get_environment_info(self._settings)
