# routes.py
import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from config.settings import settings
from controller.extraction_controller import extraction_router
from controller.visualization_controller import visualization_router
from util.enums import ErrorMessage
from util.errors import AppError

logger = logging.getLogger(__name__)


def register_routes(app: FastAPI) -> None:
    """Register & Access control controllers here."""
    app.include_router(extraction_router)
    app.include_router(visualization_router)

    @app.get("/healthz")
    async def healthz():
        return {"ok": True}


def _envelope(http_status: int, error: str) -> JSONResponse:
    # Same shape as a failed ExtractionResponse
    return JSONResponse(status_code=http_status, content={"success": False, "error": error})


def _describe(err: dict) -> str:
    # ("body", "examples", 0, "extractions", 0, "extraction_text") -> examples.0.extractions.0.extraction_text
    loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
    return f"{loc}: {err.get('msg', 'invalid value')}" if loc else err.get("msg", "invalid value")


def register_exception_handlers(app: FastAPI) -> None:
    async def app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("request.failed path=%s status=%d", request.url.path, exc.status_code)
        return _envelope(exc.status_code, exc.message)

    async def rate_limited(request: Request, exc: Exception) -> JSONResponse:
        window = settings.RATE_LIMIT_SECONDS
        logger.warning("request.rate_limited path=%s", request.url.path)
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={
                "success": False,
                "error": "rate_limited",
                "message": f"Too many requests. Try again in {window}s.",
            },
            headers={"Retry-After": str(window)},
        )

    async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        problems = [_describe(err) for err in exc.errors()]
        logger.warning("request.invalid path=%s errors=%d", request.url.path, len(problems))
        return _envelope(status.HTTP_400_BAD_REQUEST, "; ".join(problems))

    async def unexpected(request: Request, exc: Exception) -> JSONResponse:
        # Detail stays in the log; clients get the generic message
        logger.error("request.unhandled path=%s", request.url.path, exc_info=exc)
        info = ErrorMessage.INTERNAL_ERROR.value
        return _envelope(info.http_status, info.message)

    app.add_exception_handler(AppError, app_error)
    app.add_exception_handler(RequestValidationError, invalid_request)
    app.add_exception_handler(status.HTTP_429_TOO_MANY_REQUESTS, rate_limited)
    app.add_exception_handler(Exception, unexpected)
