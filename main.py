# main.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi_limiter import FastAPILimiter
from starlette.middleware.cors import CORSMiddleware
import routes
from config.cache import close_redis, get_redis
from config.settings import settings
from util.enums import Color
from util.logger import init_logger

logger = logging.getLogger(__name__)


async def client_identifier(request: Request) -> str:
    """Rate-limit key: first X-Forwarded-For hop behind a trusted proxy, else the peer."""
    if settings.TRUST_PROXY:
        forwarded = request.headers.get("x-forwarded-for", "")
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return request.client.host if request.client else "unknown"


@asynccontextmanager
async def lifespan(fastApi: FastAPI):
    init_logger()
    print(f"{Color.GREEN}Starting LangExtract web ({settings.APP_ENV})...{Color.RESET}")
    try:
        redis = await get_redis()
        await FastAPILimiter.init(redis, identifier=client_identifier)
    except Exception:
        logger.error("startup.redis.failed", exc_info=True)
        raise
    print(f"{Color.BLUE}Ready on {settings.APP_URL}{Color.RESET}")

    try:
        yield
    finally:
        try:
            await close_redis()
        except Exception:
            logger.warning("shutdown.redis.failed", exc_info=True)
        print(f"{Color.RED}Stopped{Color.RESET}")


app: FastAPI = FastAPI(title="LangExtract Web", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.ALLOWED_ORIGIN],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Accept"],
)

routes.register_routes(app)
routes.register_exception_handlers(app)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=settings.is_development)
