"""structlog setup for the identity context.

Records flow through the stdlib root logger to stdout, and also to a rotating
``identity.log`` when ``LOG_DIR`` is set. Production and staging render JSON.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog

_JSON_ENVIRONMENTS = {"production", "staging"}
_DEFAULT_LEVELS = {"production": "INFO", "staging": "INFO", "test": "WARNING"}


def _environment() -> str:
    for variable in ("ENV", "ENVIRONMENT", "PROTEAN_ENV"):
        if os.getenv(variable):
            return os.environ[variable].lower()
    return "development"


def _handlers() -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    log_dir = os.getenv("LOG_DIR")
    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(Path(log_dir) / "identity.log", maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
        )
    return handlers


def configure_logging() -> None:
    """Configure the root logger and structlog. Safe to call again after env changes."""
    environment = _environment()
    level = os.getenv("LOG_LEVEL", _DEFAULT_LEVELS.get(environment, "DEBUG")).upper()

    logging.basicConfig(level=level, format="%(message)s", handlers=_handlers(), force=True)
    logging.getLogger("protean").setLevel(logging.WARNING)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if environment in _JSON_ENVIRONMENTS:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind key/value pairs onto every log line until ``clear_context``."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
