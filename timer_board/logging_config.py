"""
structlog configuration for the Timer Board application.

dev mode: readable console output
json mode: one JSON object per line
"""
import logging
import os
from typing import Optional

import structlog


def setup_logging(log_format: Optional[str] = None, log_level: Optional[str] = None) -> None:
    """
    Configure structlog and the standard library root logger.

    Arguments override the TIMER_BOARD_LOG_FORMAT ("dev" or "json") and
    TIMER_BOARD_LOG_LEVEL environment variables.
    """
    log_format = log_format or os.environ.get("TIMER_BOARD_LOG_FORMAT", "dev")
    log_level = log_level or os.environ.get("TIMER_BOARD_LOG_LEVEL", "INFO")

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
