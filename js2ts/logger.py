import json
import logging
from logging.config import dictConfig
from typing import Any, Dict

# --------------------------------------------------------------------------- #
# Logging configuration
# --------------------------------------------------------------------------- #
LOGGING_CONFIG: Dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        },
    },
    "handlers": {
        "stderr": {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "js2ts": {
            "handlers": ["stderr"],
            "level": "INFO",
            "propagate": False,
        },
    },
}

dictConfig(LOGGING_CONFIG)

logger: logging.Logger = logging.getLogger("js2ts")


def set_level(level: int) -> None:
    logger.setLevel(level)


class Js2TsLogger:
    """
    Structured logging for js2ts: every call emits one JSON payload
    ``{"event": ..., "data": {...}}`` built from the keyword arguments.
    """
    _logger: logging.Logger = logger

    @classmethod
    def debug(cls, event_type: str, **data: Any) -> None:
        cls._log_event(event_type, level=logging.DEBUG, **data)

    @classmethod
    def info(cls, event_type: str, **data: Any) -> None:
        cls._log_event(event_type, level=logging.INFO, **data)

    @classmethod
    def warning(cls, event_type: str, **data: Any) -> None:
        cls._log_event(event_type, level=logging.WARNING, **data)

    @classmethod
    def error(cls, event_type: str, **data: Any) -> None:
        cls._log_event(event_type, level=logging.ERROR, **data)

    @classmethod
    def _log_event(cls, event_type: str, *, level: int = logging.INFO, **data: Any) -> None:
        if not cls._logger.isEnabledFor(level):
            return
        payload: Dict[str, Any] = {"event": event_type}
        if data:
            payload["data"] = data
        cls._logger.log(level, json.dumps(payload, default=str))


def verbose_log(event: str, verbose: bool, **data: Any) -> None:
    """Emit an info-level progress event only when *verbose* is set."""
    if verbose:
        Js2TsLogger.info(event, **data)
