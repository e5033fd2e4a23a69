# config/settings.py
import os
import sys
from dotenv import load_dotenv
from pydantic import ValidationError, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from util.enums import Environment, ModelProvider


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(frozen=True, extra="ignore")

    # App
    APP_ENV: str = Field(default=Environment.DEV.value, validation_alias="APP_ENV")
    APP_URL: str = Field(default="http://localhost:8000", validation_alias="APP_URL")
    DEBUG: bool = Field(default=False, validation_alias="DEBUG")
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0", validation_alias="REDIS_URL"
    )
    PERSISTENCE_TTL_SECONDS: int = Field(
        default=2 * 60 * 60, validation_alias="PERSISTENCE_TTL_SECONDS"
    )

    # CORS & Limits
    ALLOWED_ORIGIN: str = Field(
        default="http://localhost:3000", validation_alias="ALLOWED_ORIGIN"
    )
    RATE_LIMIT_TIMES: int = Field(default=30, validation_alias="RATE_LIMIT_TIMES")
    RATE_LIMIT_SECONDS: int = Field(default=60, validation_alias="RATE_LIMIT_SECONDS")
    TRUST_PROXY: bool = Field(default=False, validation_alias="TRUST_PROXY")

    # Providers (keys are never logged)
    GEMINI_API_KEY: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
    OPENAI_API_KEY: str | None = Field(default=None, validation_alias="OPENAI_API_KEY")
    DEFAULT_MODEL_PROVIDER: ModelProvider = Field(
        default=ModelProvider.GEMINI, validation_alias="DEFAULT_MODEL_PROVIDER"
    )
    MAX_CONCURRENT_REQUESTS: int = Field(
        default=10, validation_alias="MAX_CONCURRENT_REQUESTS"
    )
    REQUEST_TIMEOUT_MS: int = Field(default=30000, validation_alias="REQUEST_TIMEOUT_MS")

    # Visualization
    ANIMATION_INTERVAL_SECONDS: float = Field(
        default=1.5, gt=0, validation_alias="ANIMATION_INTERVAL_SECONDS"
    )
    CONTEXT_CHARS: int = Field(default=150, ge=0, validation_alias="CONTEXT_CHARS")

    # Logging knobs
    LOGGER_NAME: str = "langextract-web"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == Environment.DEV

    def api_key_for(self, provider: ModelProvider) -> str | None:
        if provider == ModelProvider.GEMINI:
            return self.GEMINI_API_KEY
        if provider == ModelProvider.OPENAI:
            return self.OPENAI_API_KEY
        return None


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
