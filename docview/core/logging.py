# File: /docview/core/logging.py | Version: 2.0 | Title: App logging configuration (plain or JSON lines, engine context)
import json
import logging
import logging.config
import os

# Context the engine attaches via ``extra=`` when it has it
CONTEXT_FIELDS = ("module_id", "owner_id", "view_id")


def _boolenv(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "y", "on"}


class JsonConsole(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                payload[name] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging() -> None:
    """
    LOG_LEVEL sets the root and ``docview`` level; LOG_JSON switches to one JSON
    object per line. ENGINE_LOG_LEVEL overrides the level of ``docview.engine``
    (dangling-property warnings, projection debug lines).
    """
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    engine_level = os.getenv("ENGINE_LOG_LEVEL", level).upper()

    if _boolenv("LOG_JSON", False):
        formatter = {"()": JsonConsole}
    else:
        formatter = {"format": "%(asctime)s %(levelname)-7s %(name)s: %(message)s"}

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": formatter},
            "handlers": {
                "console": {"class": "logging.StreamHandler", "formatter": "default"},
            },
            "root": {"handlers": ["console"], "level": level},
            "loggers": {
                "docview": {"level": level},
                "docview.engine": {"level": engine_level},
                # Test client and driver chatter
                "httpx": {"level": "WARNING", "propagate": False},
                "httpcore": {"level": "WARNING", "propagate": False},
                "sqlalchemy.engine": {"level": "WARNING"},
                "uvicorn.access": {"level": level},
            },
        }
    )
