"""
Package: sqs_queue
Description: SQS queue operations behind the QueueManager façade.

Provides the transport, response normalization, queue directory and
batch dispatch used by QueueManager.
"""

from .batch import BATCH_LIMIT, BatchDispatcher
from .directory import QueueDirectory
from .manager import QueueManager
from .normalizer import ResponseNormalizer
from .transport import QueueTransport, SQSTransport

__all__ = [
    "BATCH_LIMIT",
    "BatchDispatcher",
    "QueueDirectory",
    "QueueManager",
    "QueueTransport",
    "ResponseNormalizer",
    "SQSTransport",
]
