# controller/controller_dependencies.py
from fastapi_limiter.depends import RateLimiter
from config.settings import settings
from model.visualization import VisualizationConfig
from repository.document_repository import DocumentRepository
from service.extraction_service import ExtractionService

# Shared instance so tests can override it via app.dependency_overrides
rate_limiter = RateLimiter(
    times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS
)


def get_document_repository() -> DocumentRepository:
    return DocumentRepository()


def get_extraction_service() -> ExtractionService:
    _documents = get_document_repository()
    _service = ExtractionService(_documents, settings)
    return _service


def get_visualization_config() -> VisualizationConfig:
    return VisualizationConfig.from_settings(settings)
