"""
Module: logger.py
Description: Structured logging configuration for the SQS queue manager.

Configures structlog once, at import, with the level from SQS_LOG_LEVEL,
to emit one JSON object per line so queue errors
can be shipped to CloudWatch Logs or any other line-oriented sink.

Key Components:
- configure_logging(): install processors and the level filter
- get_logger(): named, channel-bound logger

Dependencies: structlog, logging, datetime
Author: SQS Manager Team
"""

import logging
from datetime import datetime, timezone

import structlog

from sqs_manager.config.settings import get_settings


def _add_timestamp(logger, method_name, event_dict):
    """Add an ISO 8601 UTC timestamp to the log entry."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _add_log_level(logger, method_name, event_dict):
    event_dict["level"] = method_name.upper()
    return event_dict


def configure_logging(level: str = "INFO") -> None:
    """
    Configure structlog for JSON output.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            _add_timestamp,
            _add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.WriteLoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        cache_logger_on_first_use=True,
    )


configure_logging(get_settings().log_level)


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a structlog logger bound to a channel name.

    Args:
        name: Channel name (typically __name__ or a fixed channel
            such as "sqs_manager.sqs")

    Returns:
        Logger whose entries carry a ``channel`` field

    Example:
        >>> logger = get_logger("sqs_manager.sqs")
        >>> logger.error("req-1 - AWS.SimpleQueueService.NonExistentQueue - gone")
    """
    return structlog.get_logger(name, channel=name)
