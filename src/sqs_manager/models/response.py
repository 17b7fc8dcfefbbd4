"""
Module: response.py
Description: Normalized response models.

Defines the structures produced when raw transport envelopes are
normalized: the captured error, the success/failure wrapper, and the
per-chunk outcome of a batch call.

Key Components:
- OperationError: request id, error code and message of a failed call
- NormalizedResponse: success flag with payload or error
- ChunkResult: outcome of a single batch chunk

Dependencies: pydantic, typing
Author: SQS Manager Team
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class OperationError(BaseModel):
    """
    Error captured from a failed remote call.

    Attributes:
        request_id: Request id of the failing call
        code: Provider error code
        message: Provider error message
    """

    model_config = ConfigDict(frozen=True)

    request_id: str = Field(default="", description="Request id")
    code: str = Field(default="", description="Provider error code")
    message: str = Field(default="", description="Provider error message")

    def __str__(self) -> str:
        return " - ".join([self.request_id, self.code, self.message])


class NormalizedResponse(BaseModel):
    """
    Result of normalizing one raw transport response.

    Exactly one of payload (on success) or error (on failure) is set.
    """

    model_config = ConfigDict(frozen=True)

    success: bool = Field(..., description="Whether the call succeeded")
    request_id: str = Field(default="", description="Request id")
    payload: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Raw response on success"
    )
    error: Optional[OperationError] = Field(
        default=None,
        description="Captured error on failure"
    )

    def __bool__(self) -> bool:
        return self.success


class ChunkResult(BaseModel):
    """
    Outcome of one chunk of a batch send or delete.

    Attributes:
        index: Position of the chunk in the dispatch order
        size: Number of entries in the chunk
        success: Whether the chunk call normalized as success
        request_id: Request id of the chunk call
        error: Captured error when the call failed
        failed_ids: Chunk-local ids the service reported as failed
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    size: int = Field(..., ge=0)
    success: bool
    request_id: str = ""
    error: Optional[OperationError] = None
    failed_ids: List[str] = Field(default_factory=list)
