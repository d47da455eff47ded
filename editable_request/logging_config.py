"""Structlog configuration helpers for structured logging."""

from __future__ import annotations

import logging

import structlog

LOG_LEVEL = logging.INFO
DEBUG_LOG_LEVEL = logging.DEBUG


def configure_logging(debug: bool = False) -> None:
    """Configure structlog to emit JSON-formatted logs.

    ``debug`` lowers the stdlib threshold so slack_sdk request/response
    tracing becomes visible as well.
    """

    timestamper = structlog.processors.TimeStamper(fmt="iso")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            timestamper,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=DEBUG_LOG_LEVEL if debug else LOG_LEVEL)
