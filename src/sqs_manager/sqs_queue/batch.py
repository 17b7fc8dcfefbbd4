"""
Module: batch.py
Description: Batch send/delete dispatch within the SQS batch limit.

SQS accepts at most 10 entries per batch call. Larger inputs are split
into ordered chunks; every chunk is sent even after an earlier chunk
failed, and the aggregate result is True only when all chunks succeed.

Key Components:
- BatchDispatcher: chunked send_batch() and delete_batch()
- BATCH_LIMIT: provider maximum entries per call

Dependencies: typing
Author: SQS Manager Team
"""

from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from sqs_manager.models.message import Message
from sqs_manager.models.response import ChunkResult
from sqs_manager.sqs_queue.normalizer import ResponseNormalizer
from sqs_manager.sqs_queue.transport import QueueTransport
from sqs_manager.utils.batch_helpers import build_entries, chunk_list
from sqs_manager.utils.logger import get_logger

logger = get_logger(__name__)

BATCH_LIMIT = 10


def message_body(item: Union[str, Message]) -> str:
    """Body to send for a raw string or a Message."""
    if isinstance(item, Message):
        return item.body
    if isinstance(item, str):
        return item
    raise ValueError(f"message must be a str or Message, got {type(item).__name__}")


def receipt_handle(item: Union[str, Message]) -> str:
    """Receipt handle of a Message, or the raw handle string itself."""
    if isinstance(item, Message):
        return item.receipt_handle
    if isinstance(item, str):
        return item
    raise ValueError(f"handle must be a str or Message, got {type(item).__name__}")


class BatchDispatcher:
    """
    Splits batch operations into provider-sized chunks.

    Attributes:
        last_results: One ChunkResult per chunk of the latest batch call

    Example:
        >>> dispatcher = BatchDispatcher(transport, ResponseNormalizer())
        >>> dispatcher.send_batch(url, ["m%d" % i for i in range(23)])  # 3 calls
        True
        >>> [r.size for r in dispatcher.last_results]
        [10, 10, 3]
    """

    def __init__(
        self,
        transport: QueueTransport,
        normalizer: ResponseNormalizer,
        batch_limit: int = BATCH_LIMIT
    ):
        if not 0 < batch_limit <= BATCH_LIMIT:
            raise ValueError(f"batch_limit must be between 1 and {BATCH_LIMIT}")

        self._transport = transport
        self._normalizer = normalizer
        self.batch_limit = batch_limit
        self.last_results: List[ChunkResult] = []

    def send_batch(
        self,
        url: str,
        messages: Sequence[Union[str, Message]],
        options: Optional[Dict[str, Any]] = None
    ) -> bool:
        """
        Send messages in chunks of at most batch_limit.

        Args:
            url: Queue URL
            messages: Bodies or Message objects, in send order
            options: Extra keyword arguments for each batch call

        Returns:
            True if every chunk call succeeded
        """
        bodies = [message_body(m) for m in messages]
        return self._dispatch(
            'send', url, bodies, 'MessageBody',
            self._transport.send_message_batch, options
        )

    def delete_batch(
        self,
        url: str,
        handles: Sequence[Union[str, Message]],
        options: Optional[Dict[str, Any]] = None
    ) -> bool:
        """
        Delete messages in chunks of at most batch_limit.

        Args:
            url: Queue URL
            handles: Receipt handles or Message objects
            options: Extra keyword arguments for each batch call

        Returns:
            True if every chunk call succeeded
        """
        receipts = [receipt_handle(h) for h in handles]
        return self._dispatch(
            'delete', url, receipts, 'ReceiptHandle',
            self._transport.delete_message_batch, options
        )

    def _dispatch(
        self,
        operation: str,
        url: str,
        values: List[str],
        field: str,
        call: Callable[..., Dict[str, Any]],
        options: Optional[Dict[str, Any]]
    ) -> bool:
        if not url or not isinstance(url, str):
            raise ValueError("url must be a non-empty string")

        results: List[ChunkResult] = []
        self.last_results = results
        for index, chunk in enumerate(chunk_list(values, self.batch_limit)):
            response = self._normalizer.normalize(
                call(url, build_entries(chunk, field), dict(options or {}))
            )
            failed_ids = [
                str(entry.get('Id'))
                for entry in (response.payload or {}).get('Failed') or []
            ]
            results.append(ChunkResult(
                index=index,
                size=len(chunk),
                success=response.success,
                request_id=response.request_id,
                error=response.error,
                failed_ids=failed_ids
            ))

            if failed_ids:
                logger.warning(
                    "Batch entries rejected",
                    operation=operation,
                    chunk=index,
                    failed_ids=failed_ids,
                    request_id=response.request_id
                )

        return all(r.success for r in results)
