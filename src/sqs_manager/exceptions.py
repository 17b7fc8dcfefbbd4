"""
Module: exceptions.py
Description: Exceptions raised by the SQS queue manager.

Remote failures are never raised; they are captured by the response
normalizer. The exceptions here signal programmer errors and fatal
startup conditions.
"""


class QueueManagerError(Exception):
    """Base exception for all queue manager errors."""

    pass


class InitializationError(QueueManagerError):
    """Raised when the manager is constructed without credentials."""

    pass


class DirectoryUnavailableError(QueueManagerError):
    """Raised when the queue directory is read before it was built."""

    pass


class MalformedResponseError(QueueManagerError, ValueError):
    """Raised when a transport response lacks its ResponseMetadata envelope."""

    pass
