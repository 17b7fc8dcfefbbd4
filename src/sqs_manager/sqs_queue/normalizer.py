"""
Module: normalizer.py
Description: Response normalization for raw SQS envelopes.

Every transport call made by the queue manager goes through
ResponseNormalizer.normalize(). It records the request id, decides
success from the envelope, and captures the error of a failed call as
the single "last error" of its owner.

Envelope shape (botocore):
    success: {..., "ResponseMetadata": {"RequestId": ..., "HTTPStatusCode": 200}}
    failure: {"Error": {"Code": ..., "Message": ...}, "ResponseMetadata": {...}}
"""

from typing import Any, Mapping, Optional

from sqs_manager.exceptions import MalformedResponseError
from sqs_manager.models.response import NormalizedResponse, OperationError
from sqs_manager.utils.logger import get_logger

ERROR_CHANNEL = "sqs_manager.sqs"

logger = get_logger(ERROR_CHANNEL)


class ResponseNormalizer:
    """
    Turns raw transport envelopes into NormalizedResponse values.

    Holds the request id and error of the most recent call. Both are
    overwritten on every normalize(); errors are not accumulated.
    """

    def __init__(self):
        self._last_request_id = ""
        self._last_error: Optional[OperationError] = None

    @property
    def last_request_id(self) -> str:
        """Request id of the most recent call, successful or not."""
        return self._last_request_id

    @property
    def last_error(self) -> Optional[OperationError]:
        """Error of the most recent call, None if it succeeded."""
        return self._last_error

    @staticmethod
    def is_success(raw: Mapping[str, Any]) -> bool:
        """Provider success predicate: no Error block and a 2xx status."""
        if raw.get('Error'):
            return False
        status = raw['ResponseMetadata'].get('HTTPStatusCode') or 200
        try:
            return 200 <= int(status) < 300
        except (TypeError, ValueError):
            return False

    def normalize(self, raw: Mapping[str, Any]) -> NormalizedResponse:
        """
        Normalize one raw transport response.

        Args:
            raw: Envelope returned by the transport

        Returns:
            NormalizedResponse with the payload on success or the
            captured OperationError on failure

        Raises:
            MalformedResponseError: If raw is not a mapping with a
                ResponseMetadata block
        """
        if not isinstance(raw, Mapping) or not isinstance(raw.get('ResponseMetadata'), Mapping):
            raise MalformedResponseError("transport response is missing ResponseMetadata")

        self._last_error = None
        request_id = str(raw['ResponseMetadata'].get('RequestId') or '')
        self._last_request_id = request_id

        if self.is_success(raw):
            return NormalizedResponse(success=True, request_id=request_id, payload=dict(raw))

        error_block = raw.get('Error') or {}
        error = OperationError(
            request_id=request_id,
            code=str(error_block.get('Code') or ''),
            message=str(error_block.get('Message') or '')
        )
        self._last_error = error

        logger.error(
            str(error),
            request_id=error.request_id,
            error_code=error.code,
            error_message=error.message
        )

        return NormalizedResponse(success=False, request_id=request_id, error=error)
