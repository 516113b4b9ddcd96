"""Structured logging foundation for the WinGo predictor.

Provides JSON logging (prod) or colored console (dev) via structlog.
Includes an audit trail logger for stored predictions and win/loss verdicts.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, cast

import structlog


def _configure_structlog() -> None:
    """Configure structlog based on WINGO_ENV and WINGO_LOG_LEVEL."""
    env = os.environ.get("WINGO_ENV", "development")
    log_level_name = os.environ.get("WINGO_LOG_LEVEL", "INFO").upper()
    min_level = getattr(logging, log_level_name, logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if env == "production":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    _LOG_LEVELS["current"] = log_level_name


_LOG_LEVELS: dict[str, str] = {"current": "INFO"}
_CONFIGURED = False


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a named logger instance.

    Args:
        name: Logger name (typically module __name__).

    Returns:
        Configured structlog bound logger.
    """
    global _CONFIGURED
    if not _CONFIGURED:
        _configure_structlog()
        _CONFIGURED = True

    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))


def get_audit_logger() -> structlog.stdlib.BoundLogger:
    """Get the audit trail logger for predictions and verdicts.

    All audit events are logged with event_type for downstream filtering.
    """
    return get_logger("wingo.audit")


def log_prediction_event(
    action: str,
    issue: str,
    **kwargs: Any,
) -> None:
    """Log a prediction lifecycle event to the audit trail.

    Args:
        action: Event type (stored, verdict).
        issue: Issue number the event refers to.
        **kwargs: Additional context (prediction, confidence, status, etc).
    """
    logger = get_audit_logger()
    logger.info(
        "prediction_event",
        event_type="audit",
        action=action,
        issue=issue,
        **kwargs,
    )
