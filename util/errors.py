# util/errors.py
from fastapi import HTTPException, status


class AppError(HTTPException):
    # Flow: raise AppError to short-circuit with a typed status & message.
    def __init__(
        self, message: str, http_status: int = status.HTTP_400_BAD_REQUEST
    ) -> None:
        super().__init__(status_code=http_status, detail=message)
        self.message = message


class ProviderError(AppError):
    """Provider could not be created or failed on transport/auth."""

    def __init__(
        self, message: str, http_status: int = status.HTTP_502_BAD_GATEWAY
    ) -> None:
        super().__init__(message, http_status)


class PlaybackError(Exception):
    pass


class PlaybackUnavailableError(PlaybackError):
    # No positionally-resolved extractions: the controller stays idle.
    def __init__(self, message: str = "No extractions with a resolved position") -> None:
        super().__init__(message)


class PlaybackIndexError(PlaybackError, IndexError):
    def __init__(self, index: int, count: int) -> None:
        super().__init__(f"Extraction index {index} out of range [0, {count})")
        self.index = index
        self.count = count
