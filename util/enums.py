# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    BOLD = "\033[1m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class ModelProvider(str, Enum):
    GEMINI = "gemini"
    OPENAI = "openai"


class PlaybackStatus(str, Enum):
    IDLE = "idle"
    PAUSED = "paused"
    PLAYING = "playing"


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    NO_API_KEY_CONFIGURED = ErrorInfo(
        "No API key configured. Provide one in the request or configure "
        "GEMINI_API_KEY / OPENAI_API_KEY on the server.",
        status.HTTP_400_BAD_REQUEST,
    )
    UNKNOWN_DOCUMENT = ErrorInfo("Unknown or expired document", status.HTTP_404_NOT_FOUND)
    INDEX_OUT_OF_RANGE = ErrorInfo(
        "Extraction index out of range", status.HTTP_422_UNPROCESSABLE_ENTITY
    )
    INTERNAL_ERROR = ErrorInfo(
        "Unknown error during extraction", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
