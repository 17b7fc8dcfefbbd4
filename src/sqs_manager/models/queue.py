"""
Module: queue.py
Description: Queue handle model.

A QueueHandle pairs a queue name with its URL. The name is always
derived from the URL so the two can never disagree.
"""

from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field


class QueueHandle(BaseModel):
    """
    Name and URL identifying a remote queue.

    Attributes:
        name: Last path segment of the queue URL
        url: Full queue URL
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Queue name")
    url: str = Field(..., min_length=1, description="Queue URL")

    @classmethod
    def from_url(cls, url: str) -> "QueueHandle":
        """
        Build a handle from a queue URL.

        Example:
            >>> QueueHandle.from_url("https://sqs.us-east-1.amazonaws.com/123/orders").name
            'orders'
        """
        if not url or not isinstance(url, str):
            raise ValueError("url must be a non-empty string")

        path = urlparse(url).path or url
        segments = [s for s in path.split('/') if s]
        if not segments:
            raise ValueError(f"cannot derive queue name from url: {url}")

        return cls(name=segments[-1], url=url)

    def __str__(self) -> str:
        return self.url
