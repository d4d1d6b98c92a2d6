"""
Structured logging for the ball mill backend.

structlog renders to the console while ``app_debug`` is on and to one JSON
object per line otherwise. Standard library loggers (uvicorn, slowapi) go
through the same stdout handler.
"""

import logging
import sys
from typing import Any, List, Optional

import structlog
from ballmill.core.settings import settings

# Third-party loggers that are too chatty at DEBUG
QUIET_LOGGERS = ("uvicorn.access", "slowapi", "asyncio")


def _renderer() -> Any:
    if settings.app_debug:
        return structlog.dev.ConsoleRenderer(colors=not settings.testing)
    return structlog.processors.JSONRenderer()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure structlog and stdlib logging; ``level`` overrides settings.log_level."""
    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if not settings.app_debug:
        processors.append(structlog.processors.format_exc_info)
    processors.append(_renderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """
    Structured logger for a module.

    Log events are snake_case names with keyword context, e.g.
    ``logger.info("design_generation_started", capacity_tph=100)``.
    """
    return structlog.get_logger(name)
