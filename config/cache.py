# config/cache.py
import logging
from typing import Optional
from redis.asyncio import Redis, from_url
from config.settings import settings

logger = logging.getLogger(__name__)

_client: Optional[Redis] = None


def _build_client(url: str) -> Redis:
    # Documents are stored as JSON text, so replies come back as str
    return from_url(
        url,
        encoding="utf-8",
        decode_responses=True,
        socket_keepalive=True,
        health_check_interval=30,
    )


async def get_redis() -> Redis:
    """Process-wide client; the first call pings so startup fails fast."""
    global _client
    if _client is not None:
        return _client
    client = _build_client(settings.REDIS_URL)
    await client.ping()
    logger.info("redis.connected url=%s", settings.REDIS_URL.split("@")[-1])
    _client = client
    return _client


async def close_redis() -> None:
    global _client
    client, _client = _client, None
    if client is None:
        return
    await client.aclose()
    logger.info("redis.closed")
