# controller/visualization_controller.py
import asyncio
import contextlib
import logging
from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect
from controller.controller_dependencies import (
    get_extraction_service,
    get_visualization_config,
)
from model.api import VisualizeRequest
from model.visualization import VisualizationConfig, VisualizationResponse
from service.extraction_service import ExtractionService
from service.visualization_service import (
    PlaybackSession,
    build_visualization,
    error_frame,
)
from util.constants import InternalURIs
from util.enums import ErrorMessage
from util.errors import AppError, PlaybackIndexError

logger = logging.getLogger(__name__)

visualization_router = APIRouter()


def _visualize_or_422(document, config, current: int) -> VisualizationResponse:
    try:
        return build_visualization(document, config, current)
    except PlaybackIndexError as e:
        raise AppError(str(e), ErrorMessage.INDEX_OUT_OF_RANGE.value.http_status)


@visualization_router.post(InternalURIs.VISUALIZE, response_model=VisualizationResponse)
async def visualize(
    payload: VisualizeRequest,
    default_config: VisualizationConfig = Depends(get_visualization_config),
) -> VisualizationResponse:
    return _visualize_or_422(
        payload.document, payload.options or default_config, payload.currentIndex
    )


@visualization_router.get(
    InternalURIs.DOCUMENT_VISUALIZATION, response_model=VisualizationResponse
)
async def document_visualization(
    document_id: str,
    current: int = Query(default=0),
    service: ExtractionService = Depends(get_extraction_service),
    config: VisualizationConfig = Depends(get_visualization_config),
) -> VisualizationResponse:
    document = await service.get_document(document_id)
    return _visualize_or_422(document, config, current)


async def _pump(websocket: WebSocket, session: PlaybackSession) -> None:
    while True:
        frame = await session.next_frame()
        await websocket.send_json(frame)


@visualization_router.websocket(InternalURIs.DOCUMENT_PLAYBACK)
async def playback(
    websocket: WebSocket,
    document_id: str,
    service: ExtractionService = Depends(get_extraction_service),
    config: VisualizationConfig = Depends(get_visualization_config),
) -> None:
    """
    Flow: one PlaybackController per connection. Commands come in as JSON,
    state frames go out after every transition. Disconnect cancels the timer.
    """
    await websocket.accept()
    try:
        document = await service.get_document(document_id)
    except AppError as e:
        await websocket.send_json(error_frame(e.message))
        await websocket.close(code=4404)
        return

    session = PlaybackSession(document, config)
    await websocket.send_json(session.state_frame())
    sender = asyncio.create_task(_pump(websocket, session))
    logger.info("playback.open doc=%s count=%d", document_id, session.controller.count)
    try:
        while True:
            session.handle(await websocket.receive_text())
    except WebSocketDisconnect:
        logger.info("playback.disconnect doc=%s", document_id)
    finally:
        session.close()
        sender.cancel()
        # the pump may already have failed on a closed socket
        with contextlib.suppress(asyncio.CancelledError, WebSocketDisconnect, RuntimeError):
            await sender
