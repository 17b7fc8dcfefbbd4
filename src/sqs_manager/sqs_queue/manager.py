"""
Module: manager.py
Description: QueueManager façade over Amazon SQS.

Orchestrates queue discovery, single and batch message operations, and
keeps the request id and error of the most recent call. Remote failures
are never raised: operations return False/None and the details are
available from get_errors() and get_last_request_id().

Key Components:
- QueueManager: the façade
- parse_messages(): receive payload -> Message list

Dependencies: typing
Author: SQS Manager Team
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from sqs_manager.config.settings import Settings, get_settings
from sqs_manager.exceptions import DirectoryUnavailableError, InitializationError
from sqs_manager.models.message import Message, parse_message
from sqs_manager.models.queue import QueueHandle
from sqs_manager.models.response import ChunkResult, OperationError
from sqs_manager.sqs_queue.batch import BatchDispatcher, message_body, receipt_handle
from sqs_manager.sqs_queue.directory import QueueDirectory
from sqs_manager.sqs_queue.normalizer import ResponseNormalizer
from sqs_manager.sqs_queue.transport import QueueTransport, SQSTransport
from sqs_manager.utils.logger import get_logger

logger = get_logger(__name__)

MAX_MESSAGES_OPTION = 'MaxNumberOfMessages'


def parse_messages(payload: Mapping[str, Any]) -> List[Message]:
    """
    Parse the message envelopes of a receive payload.

    Accepts the JSON protocol shape {"Messages": [...]} and the query
    protocol shape {"ReceiveMessageResult": {"Message": {...} | [...]}}.
    """
    if 'Messages' in payload:
        envelopes = payload.get('Messages') or []
    else:
        result = payload.get('ReceiveMessageResult')
        envelopes = (result.get('Message') or []) if isinstance(result, Mapping) else []

    if isinstance(envelopes, Mapping):
        envelopes = [envelopes]
    return [parse_message(envelope) for envelope in envelopes]


class QueueManager:
    """
    Synchronous façade over a queue transport.

    Attributes:
        table_prefix: Reserved for future table-name scoping
        transport: Transport used for every remote call
        directory: Cached queue directory

    Example:
        >>> manager = QueueManager(access_key="AKIA...", secret_key="...")
        >>> orders = manager.get_queue("orders")
        >>> manager.send(orders.url, "hello")
        True
        >>> message = manager.receive(orders.url)
        >>> manager.delete(orders.url, message)
        True
    """

    def __init__(
        self,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        table_prefix: Optional[str] = None,
        transport: Optional[QueueTransport] = None,
        settings: Optional[Settings] = None
    ):
        """
        Initialize the queue manager.

        Explicit arguments take precedence over settings read from
        SQS_* environment variables.

        Raises:
            InitializationError: If access_key or secret_key is missing
        """
        settings = settings or get_settings()

        self.access_key = access_key or settings.access_key
        self.secret_key = secret_key or settings.secret_key
        self.table_prefix = table_prefix if table_prefix is not None else settings.table_prefix

        if not self.access_key or not self.secret_key:
            raise InitializationError(
                f"{type(self).__name__} access_key and secret_key must be set"
            )

        self.transport = transport or SQSTransport(
            access_key=self.access_key,
            secret_key=self.secret_key,
            region_name=settings.aws_region,
            endpoint_url=settings.endpoint_url
        )
        self._normalizer = ResponseNormalizer()
        self.directory = QueueDirectory(self.transport, self._normalizer)
        self._batch = BatchDispatcher(self.transport, self._normalizer)

        logger.info(
            "Queue manager initialized",
            transport=type(self.transport).__name__,
            table_prefix=self.table_prefix
        )

    def get_errors(self) -> Optional[OperationError]:
        """Error of the most recent remote call, None if it succeeded."""
        return self._normalizer.last_error

    def get_last_request_id(self) -> str:
        """Request id of the most recent remote call."""
        return self._normalizer.last_request_id

    @property
    def last_batch_results(self) -> List[ChunkResult]:
        """Per-chunk outcomes of the most recent batch call."""
        return list(self._batch.last_results)

    def get_queues(self, refresh: bool = False) -> Optional[Dict[str, QueueHandle]]:
        """Queue directory keyed by name; None if it could not be fetched."""
        return self.directory.list(refresh=refresh)

    def get_queue(self, name: str) -> Optional[QueueHandle]:
        """
        Look up a queue by name, building the directory if needed.

        Returns:
            The handle, or None for an unknown name

        Raises:
            DirectoryUnavailableError: If the directory could not be built
        """
        if not self.directory.built and self.directory.list() is None:
            raise DirectoryUnavailableError(
                f"queue directory unavailable: {self.get_errors()}"
            )
        return self.directory.get(name)

    def create(self, name: str) -> Optional[QueueHandle]:
        """Create a queue; returns its handle or None on failure."""
        return self.directory.create(name)

    def send(
        self,
        url: str,
        message: Union[str, Message],
        options: Optional[Dict[str, Any]] = None
    ) -> bool:
        """
        Send one message.

        Args:
            url: Queue URL
            message: Body string or a Message whose body is resent
            options: Extra send arguments (DelaySeconds, MessageAttributes, ...)

        Returns:
            True if the service accepted the message
        """
        body = message_body(message)
        response = self._normalizer.normalize(
            self.transport.send_message(url, body, dict(options or {}))
        )
        return response.success

    def send_batch(
        self,
        url: str,
        messages: Sequence[Union[str, Message]],
        options: Optional[Dict[str, Any]] = None
    ) -> bool:
        """Send messages in chunks of 10; True only if every chunk succeeded."""
        return self._batch.send_batch(url, messages, options)

    def receive(
        self,
        url: str,
        options: Optional[Dict[str, Any]] = None
    ) -> Union[Message, List[Message], None]:
        """
        Receive messages from a queue.

        With a MaxNumberOfMessages option the result is always a list,
        possibly empty. Without it, the result is the last received
        Message, or None when nothing was received.

        Args:
            url: Queue URL
            options: Receive arguments (MaxNumberOfMessages,
                WaitTimeSeconds, AttributeNames, ...)
        """
        options = dict(options or {})
        response = self._normalizer.normalize(self.transport.receive_message(url, options))
        messages = parse_messages(response.payload) if response.success else []

        if options.get(MAX_MESSAGES_OPTION) is not None:
            return messages
        return messages[-1] if messages else None

    def delete(
        self,
        url: str,
        handle: Union[str, Message],
        options: Optional[Dict[str, Any]] = None
    ) -> bool:
        """
        Delete one received message.

        Args:
            url: Queue URL
            handle: The Message or its receipt handle

        Returns:
            True if the service acknowledged the delete
        """
        response = self._normalizer.normalize(
            self.transport.delete_message(url, receipt_handle(handle), dict(options or {}))
        )
        return response.success

    def delete_batch(
        self,
        url: str,
        handles: Sequence[Union[str, Message]],
        options: Optional[Dict[str, Any]] = None
    ) -> bool:
        """Delete messages in chunks of 10; True only if every chunk succeeded."""
        return self._batch.delete_batch(url, handles, options)
