# util/logger.py
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from config.settings import Settings, settings as default_settings

logging.captureWarnings(True)

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

# Libraries that are chatty at DEBUG and add nothing to request traces
_QUIET = ("asyncio", "redis", "fastapi_limiter", "watchfiles")


class ColoredFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": "\033[37m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[41m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Work on a copy so a file handler sharing the record keeps a plain level name
        tinted = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        tinted.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(tinted)


def resolve_level(cfg: Settings = default_settings) -> int:
    """DEBUG=true wins over LOG_LEVEL; unknown level names fall back to INFO."""
    if cfg.DEBUG:
        return logging.DEBUG
    return getattr(logging, (cfg.LOG_LEVEL or "INFO").upper(), logging.INFO)


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(TEXT_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _file_handler(level: int, cfg: Settings) -> logging.Handler:
    os.makedirs(cfg.LOG_DIR, exist_ok=True)
    handler = RotatingFileHandler(
        os.path.join(cfg.LOG_DIR, cfg.LOG_FILE_NAME),
        maxBytes=cfg.LOG_MAX_BYTES,
        backupCount=cfg.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT))
    return handler


def init_logger(cfg: Settings = default_settings) -> logging.Logger:
    """
    Configure the root logger once per process.

    stdout always gets a coloured handler. A size-rotated file under
    LOG_DIR is added when LOG_TO_FILE is set. Calling again is a no-op.
    """
    root = logging.getLogger()
    if getattr(root, "_langextract_inited", False):
        return logging.getLogger(cfg.LOGGER_NAME)

    level = resolve_level(cfg)
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)

    root.addHandler(_console_handler(level))
    if cfg.LOG_TO_FILE:
        root.addHandler(_file_handler(level, cfg))

    for name in _QUIET:
        logging.getLogger(name).setLevel(max(level, logging.INFO))
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)

    root._langextract_inited = True  # type: ignore[attr-defined]
    logger = logging.getLogger(cfg.LOGGER_NAME)
    logger.debug(
        "logger.init level=%s file=%s", logging.getLevelName(level), cfg.LOG_TO_FILE
    )
    return logger
