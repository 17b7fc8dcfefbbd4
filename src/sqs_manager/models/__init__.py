"""
Module: models
Description: Package initialization for Pydantic data models.

This package contains the data carriers used by the queue manager:
- Message: a received queue message
- QueueHandle: queue name and URL
- OperationError, NormalizedResponse, ChunkResult: normalized outcomes
"""

from .message import ATTRIBUTE_FIELD_MAP, Message, parse_message
from .queue import QueueHandle
from .response import ChunkResult, NormalizedResponse, OperationError

__all__ = [
    "ATTRIBUTE_FIELD_MAP",
    "ChunkResult",
    "Message",
    "NormalizedResponse",
    "OperationError",
    "QueueHandle",
    "parse_message",
]
