"""
Module: directory.py
Description: Lazily built, cached directory of queues.

Maps queue names to QueueHandle objects. The directory is fetched from
the service on first use and only refetched on an explicit refresh.
Names are case-sensitive: "Orders" and "orders" are different queues.
"""

import threading
from typing import Any, Dict, Iterator, List, Mapping, Optional

from sqs_manager.exceptions import DirectoryUnavailableError
from sqs_manager.models.queue import QueueHandle
from sqs_manager.sqs_queue.normalizer import ResponseNormalizer
from sqs_manager.sqs_queue.transport import QueueTransport
from sqs_manager.utils.logger import get_logger

logger = get_logger(__name__)


def extract_queue_urls(payload: Mapping[str, Any]) -> List[str]:
    """
    Read the queue URL list from a list-queues payload.

    The service answers in one of two shapes:
        {"QueueUrls": [url, ...]}                          (JSON protocol)
        {"ListQueuesResult": {"QueueUrl": url | [url, ...]}} (query protocol)
    """
    if 'QueueUrls' in payload:
        urls = payload.get('QueueUrls') or []
    else:
        result = payload.get('ListQueuesResult')
        urls = (result.get('QueueUrl') or []) if isinstance(result, Mapping) else []

    if isinstance(urls, str):
        urls = [urls]
    return [str(url) for url in urls if url]


def extract_created_url(payload: Mapping[str, Any]) -> str:
    """Read the new queue URL from a create-queue payload, in either shape."""
    if payload.get('QueueUrl'):
        return str(payload['QueueUrl'])
    result = payload.get('CreateQueueResult') or {}
    return str(result.get('QueueUrl') or '')


class QueueDirectory:
    """
    Case-sensitive name -> QueueHandle cache.

    A rebuild populates a new dict and swaps it in under a lock, so
    readers see either the old or the new directory, never a mix.
    """

    def __init__(self, transport: QueueTransport, normalizer: ResponseNormalizer):
        self._transport = transport
        self._normalizer = normalizer
        self._queues: Optional[Dict[str, QueueHandle]] = None
        self._lock = threading.Lock()

    @property
    def built(self) -> bool:
        """Whether a list-queues call has succeeded at least once."""
        return self._queues is not None

    def list(self, refresh: bool = False) -> Optional[Dict[str, QueueHandle]]:
        """
        Return the queue directory, building it on first use.

        Args:
            refresh: Refetch from the service even if already built

        Returns:
            Copy of the name -> handle mapping, or None if the
            list-queues call failed (the cached directory is kept)
        """
        if self._queues is not None and not refresh:
            return dict(self._queues)

        response = self._normalizer.normalize(self._transport.list_queues())
        if not response.success:
            return None

        queues: Dict[str, QueueHandle] = {}
        for url in extract_queue_urls(response.payload):
            handle = QueueHandle.from_url(url)
            queues[handle.name] = handle

        with self._lock:
            self._queues = queues

        logger.info(
            "Queue directory built",
            queue_count=len(queues),
            refresh=refresh,
            request_id=response.request_id
        )

        return dict(queues)

    def create(self, name: str) -> Optional[QueueHandle]:
        """
        Create a queue and add it to the directory.

        Args:
            name: Queue name

        Returns:
            The new QueueHandle, or None if creation failed
        """
        if not name or not isinstance(name, str):
            raise ValueError("name must be a non-empty string")

        response = self._normalizer.normalize(self._transport.create_queue(name))
        if not response.success:
            return None

        handle = QueueHandle.from_url(extract_created_url(response.payload))

        # The list call overwrites the normalizer state of the create call.
        if self._queues is None and self.list() is None:
            logger.warning(
                "Queue created but directory could not be built",
                queue_name=handle.name
            )
            return handle

        with self._lock:
            queues = dict(self._queues)
            queues[handle.name] = handle
            self._queues = queues

        logger.info("Queue created", queue_name=handle.name, queue_url=handle.url)
        return handle

    def get(self, name: str) -> Optional[QueueHandle]:
        """
        Look up a queue by name.

        Returns:
            The handle, or None for an unknown name

        Raises:
            DirectoryUnavailableError: If the directory was never built
        """
        if self._queues is None:
            raise DirectoryUnavailableError("queue directory has not been built")
        return self._queues.get(name)

    def _snapshot(self) -> Dict[str, QueueHandle]:
        return self._queues or {}

    def __contains__(self, name: object) -> bool:
        return name in self._snapshot()

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._snapshot()))

    def __len__(self) -> int:
        return len(self._snapshot())
