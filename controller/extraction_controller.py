# controller/extraction_controller.py
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from controller.controller_dependencies import get_extraction_service, rate_limiter
from model.api import ExtractionRequest, ExtractionResponse, ExtractStatusResponse
from service.extraction_service import ExtractionService
from util.constants import InternalURIs

extraction_router = APIRouter()


@extraction_router.post(
    InternalURIs.EXTRACT,
    response_model=ExtractionResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(rate_limiter)],
)
async def extract(
    payload: ExtractionRequest,
    service: ExtractionService = Depends(get_extraction_service),
) -> ExtractionResponse:
    document = await service.extract(payload)
    return ExtractionResponse(success=True, data=document)


@extraction_router.get(InternalURIs.EXTRACT, response_model=ExtractStatusResponse)
async def extract_status(
    service: ExtractionService = Depends(get_extraction_service),
) -> ExtractStatusResponse:
    return ExtractStatusResponse(
        message="LangExtract API is running",
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=service.environment_info(),
    )


@extraction_router.get(InternalURIs.DOCUMENT)
async def download_document(
    document_id: str,
    service: ExtractionService = Depends(get_extraction_service),
) -> JSONResponse:
    document = await service.get_document(document_id)
    stamp = int(datetime.now(timezone.utc).timestamp() * 1000)
    return JSONResponse(
        content=document.model_dump(mode="json"),
        headers={
            "Content-Disposition": f'attachment; filename="extraction-results-{stamp}.json"'
        },
    )
