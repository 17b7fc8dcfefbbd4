"""
Module: transport.py
Description: Queue transport used by the queue manager.

The transport performs the remote calls and hands back raw response
envelopes. Remote failures come back as envelopes carrying an Error
block rather than as exceptions, so the response normalizer sees every
outcome in the same shape.

Key Components:
- QueueTransport: protocol the manager depends on
- SQSTransport: boto3-backed implementation

Dependencies: boto3, botocore, typing
Author: SQS Manager Team
"""

from typing import Any, Dict, List, Optional, Protocol

import boto3
from botocore.exceptions import ClientError

from sqs_manager.utils.logger import get_logger

logger = get_logger(__name__)

Envelope = Dict[str, Any]


class QueueTransport(Protocol):
    """Operations the queue manager needs from the remote service."""

    def list_queues(self) -> Envelope: ...

    def create_queue(self, name: str) -> Envelope: ...

    def send_message(self, url: str, body: str, options: Dict[str, Any]) -> Envelope: ...

    def send_message_batch(
        self, url: str, entries: List[Dict[str, str]], options: Dict[str, Any]
    ) -> Envelope: ...

    def receive_message(self, url: str, options: Dict[str, Any]) -> Envelope: ...

    def delete_message(
        self, url: str, receipt_handle: str, options: Dict[str, Any]
    ) -> Envelope: ...

    def delete_message_batch(
        self, url: str, entries: List[Dict[str, str]], options: Dict[str, Any]
    ) -> Envelope: ...


class SQSTransport:
    """
    Amazon SQS transport built on a boto3 client.

    Option dictionaries are passed through as boto3 keyword arguments
    (MaxNumberOfMessages, DelaySeconds, AttributeNames, ...).

    Example:
        >>> transport = SQSTransport(access_key="AKIA...", secret_key="...")
        >>> transport.list_queues()["QueueUrls"]
        ['https://sqs.us-east-1.amazonaws.com/123456789012/orders']
    """

    def __init__(
        self,
        access_key: str,
        secret_key: str,
        region_name: str = "us-east-1",
        endpoint_url: Optional[str] = None,
        client: Any = None
    ):
        """
        Initialize SQS transport.

        Args:
            access_key: AWS access key id
            secret_key: AWS secret access key
            region_name: AWS region of the queues
            endpoint_url: Optional endpoint override
            client: Pre-built boto3 SQS client (skips client construction)
        """
        self.region_name = region_name
        self.endpoint_url = endpoint_url
        self.client = client or boto3.client(
            'sqs',
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            region_name=region_name,
            endpoint_url=endpoint_url
        )

        logger.info(
            "SQS transport initialized",
            region=region_name,
            endpoint_url=endpoint_url
        )

    def _call(self, operation: str, **kwargs: Any) -> Envelope:
        try:
            return getattr(self.client, operation)(**kwargs)
        except ClientError as e:
            logger.debug(
                "SQS call returned error envelope",
                operation=operation,
                error_code=e.response.get('Error', {}).get('Code')
            )
            return e.response

    def list_queues(self) -> Envelope:
        return self._call('list_queues')

    def create_queue(self, name: str) -> Envelope:
        return self._call('create_queue', QueueName=name)

    def send_message(self, url: str, body: str, options: Dict[str, Any]) -> Envelope:
        return self._call('send_message', QueueUrl=url, MessageBody=body, **options)

    def send_message_batch(
        self, url: str, entries: List[Dict[str, str]], options: Dict[str, Any]
    ) -> Envelope:
        return self._call('send_message_batch', QueueUrl=url, Entries=entries, **options)

    def receive_message(self, url: str, options: Dict[str, Any]) -> Envelope:
        return self._call('receive_message', QueueUrl=url, **options)

    def delete_message(
        self, url: str, receipt_handle: str, options: Dict[str, Any]
    ) -> Envelope:
        return self._call(
            'delete_message', QueueUrl=url, ReceiptHandle=receipt_handle, **options
        )

    def delete_message_batch(
        self, url: str, entries: List[Dict[str, str]], options: Dict[str, Any]
    ) -> Envelope:
        return self._call('delete_message_batch', QueueUrl=url, Entries=entries, **options)
