"""
Package: sqs_manager
Description: Synchronous façade over Amazon SQS.

Normalizes SQS responses into a stable contract: request-id tracking,
captured errors instead of exceptions, chunked batch operations and a
cached queue directory.
"""

from .exceptions import (
    DirectoryUnavailableError,
    InitializationError,
    MalformedResponseError,
    QueueManagerError,
)
from .models import Message, OperationError, QueueHandle
from .sqs_queue import QueueManager

__version__ = "0.1.0"

__all__ = [
    "DirectoryUnavailableError",
    "InitializationError",
    "MalformedResponseError",
    "Message",
    "OperationError",
    "QueueHandle",
    "QueueManager",
    "QueueManagerError",
]
