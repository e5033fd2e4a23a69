# repository/document_repository.py
import logging
from typing import Final, Optional
from pydantic import ValidationError
from redis.asyncio import Redis
from config.cache import get_redis
from config.settings import settings
from model.extraction import AnnotatedDocument
from repository.namespaces import DOCUMENTS

KEY_PREFIX: Final[str] = DOCUMENTS
logger = logging.getLogger(__name__)


class DocumentRepository:
    """
    Flow:
    - Persist each annotated document as JSON keyed by document_id.
    - Visualization and playback load it back by id.
    - TTL is refreshed on read so documents survive active sessions.
    """

    def __init__(self, ttl_seconds: int = settings.PERSISTENCE_TTL_SECONDS) -> None:
        self._ttl = int(ttl_seconds)

    @staticmethod
    async def _client() -> Redis:
        return await get_redis()

    @staticmethod
    def _key(document_id: str) -> str:
        return f"{KEY_PREFIX}:{document_id}"

    async def put(self, document: AnnotatedDocument) -> None:
        r = await self._client()
        await r.set(self._key(document.document_id), document.model_dump_json(), ex=self._ttl)

    async def get(self, document_id: str) -> Optional[AnnotatedDocument]:
        if not document_id:
            return None
        r = await self._client()
        raw = await r.get(self._key(document_id))
        if raw is None:
            return None
        try:
            return AnnotatedDocument.model_validate_json(raw)
        except ValidationError:
            logger.warning("document.decode.error id=%s", document_id)
            return None
        finally:
            await r.expire(self._key(document_id), self._ttl)
