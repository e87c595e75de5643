from __future__ import annotations

import logging
import sys

import structlog

from .config import get_settings


def _coerce_level(level: str | int) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def setup_logging(level: str | int = "INFO") -> None:
    """Configure stdlib and structlog output for the Catalogue Service.

    Everything is written to stdout and structlog events are rendered as JSON.
    Requests are logged by the request logging middleware, so uvicorn runs
    without its own access log.
    """

    logging_level = _coerce_level(level)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging_level,
    )

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str):
    # Stays lazy so module level loggers pick up setup_logging() configuration
    return structlog.get_logger(name, service=get_settings().service_name)


__all__ = ["get_logger", "setup_logging"]
