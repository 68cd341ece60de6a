"""Structured logging configuration.

structlog renders JSON in production and a human-readable console format when
``settings.debug`` is on. Standard-library loggers are routed through the same
processor chain so third-party output (uvicorn, SQLAlchemy) shares the format.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import BoundLogger
from structlog.types import Processor

from agenda.config import settings


def _build_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _select_renderer() -> Processor:
    if settings.debug:
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def configure_logging() -> None:
    """Configure structlog and the stdlib root handler."""

    processors = _build_processors()

    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=_select_renderer(),
        foreign_pre_chain=processors,
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    logging.basicConfig(
        handlers=[handler],
        level=logging.DEBUG if settings.debug else logging.INFO,
    )


def get_logger(name: str | None = None) -> BoundLogger:
    """Get a structured logger."""
    return structlog.get_logger(name)


def log_exception(
    logger: BoundLogger,
    exc: BaseException,
    context: str,
    *,
    level: str = "error",
    **extra: Any,
) -> None:
    """Log an exception together with its type and module.

    Usage:
        except IntegrityError as exc:
            log_exception(logger, exc, "User insert rejected", level="warning")
    """
    log_method = getattr(logger, level, logger.error)
    log_method(
        context,
        exc_info=exc,
        error=str(exc),
        error_type=type(exc).__name__,
        error_module=type(exc).__module__,
        **extra,
    )
