"""
Module: message.py
Description: Received queue message model.

Defines the immutable Message returned by QueueManager.receive() and
the allow-list used to copy provider attributes onto it.

Key Components:
- Message: body, digest, id, receipt handle and known attributes
- ATTRIBUTE_FIELD_MAP: provider attribute name -> message attribute name
- parse_message(): build a Message from a provider envelope

Dependencies: pydantic, typing
Author: SQS Manager Team
"""

from typing import Any, Dict, Iterable, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field


# Provider attribute names (PascalCase) copied onto a Message. Anything
# else returned by the service is dropped.
ATTRIBUTE_FIELD_MAP: Dict[str, str] = {
    'SenderId': 'senderId',
    'SentTimestamp': 'sentTimestamp',
    'ApproximateReceiveCount': 'approximateReceiveCount',
    'ApproximateFirstReceiveTimestamp': 'approximateFirstReceiveTimestamp',
    'SequenceNumber': 'sequenceNumber',
    'MessageDeduplicationId': 'messageDeduplicationId',
    'MessageGroupId': 'messageGroupId',
    'AWSTraceHeader': 'awsTraceHeader',
}


class Message(BaseModel):
    """
    One message received from a queue.

    Deleting a message on the service does not change this object; it
    only invalidates the receipt handle remotely.

    Attributes:
        body: Message body
        body_digest: MD5 digest of the body as reported by the service
        id: Service-assigned message id
        receipt_handle: Token required to delete this receipt
        attributes: Known system attributes, keyed by lower-camel name
    """

    model_config = ConfigDict(frozen=True)

    body: str = Field(default="", description="Message body")
    body_digest: str = Field(default="", description="MD5 of the message body")
    id: str = Field(default="", description="Message id")
    receipt_handle: str = Field(default="", description="Receipt handle")
    attributes: Dict[str, str] = Field(
        default_factory=dict,
        description="Allow-listed message attributes"
    )

    def __str__(self) -> str:
        return self.body


def _iter_attributes(raw: Any) -> Iterable[Tuple[str, Any]]:
    # boto3 returns {"Name": "Value"}; the query API returns
    # [{"Name": ..., "Value": ...}] (a single dict when only one).
    if not raw:
        return []
    if isinstance(raw, Mapping) and 'Name' not in raw:
        return raw.items()
    if isinstance(raw, Mapping):
        raw = [raw]
    return [(item.get('Name', ''), item.get('Value', '')) for item in raw]


def parse_message(envelope: Mapping[str, Any]) -> Message:
    """
    Build a Message from one provider message envelope.

    Only attributes listed in ATTRIBUTE_FIELD_MAP are kept.

    Args:
        envelope: Mapping with Body, MD5OfBody, MessageId, ReceiptHandle
            and optionally Attributes (or the legacy Attribute key)

    Returns:
        Parsed Message
    """
    raw_attributes = envelope.get('Attributes', envelope.get('Attribute'))
    attributes = {
        ATTRIBUTE_FIELD_MAP[name]: str(value)
        for name, value in _iter_attributes(raw_attributes)
        if name in ATTRIBUTE_FIELD_MAP
    }

    return Message(
        body=str(envelope.get('Body', '')),
        body_digest=str(envelope.get('MD5OfBody', '')),
        id=str(envelope.get('MessageId', '')),
        receipt_handle=str(envelope.get('ReceiptHandle', '')),
        attributes=attributes,
    )
