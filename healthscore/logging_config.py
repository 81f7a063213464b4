"""Centralised structlog configuration."""
import logging
import sys
from typing import Optional

import structlog

from healthscore.config import settings

_configured = False


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure stdlib logging and structlog once per process.

    LOG_FORMAT "json" renders one JSON object per line; "console" renders
    coloured key=value output for local development.
    """
    global _configured
    if _configured:
        return

    level_name = level or settings.LOG_LEVEL
    fmt = log_format or settings.LOG_FORMAT

    logging.basicConfig(
        level=getattr(logging, level_name),
        format="%(message)s",
        stream=sys.stdout,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if fmt == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    _configured = True
