"""
Module: batch_helpers.py
Description: Utility functions for batch operations.

Splits input sequences into provider-sized chunks and numbers the
entries of a chunk with chunk-local identifiers.

Key Components:
- chunk_list(): Split a sequence into ordered chunks
- build_entries(): Wrap chunk items into {Id, <field>} records

Dependencies: typing
Author: SQS Manager Team
"""

from typing import Any, Dict, List, Sequence, TypeVar

T = TypeVar('T')


def chunk_list(items: Sequence[T], chunk_size: int) -> List[List[T]]:
    """
    Split a sequence into chunks of at most chunk_size items.

    Order is preserved within and across chunks.

    Args:
        items: Sequence to split
        chunk_size: Maximum size of each chunk

    Returns:
        List of chunks

    Raises:
        ValueError: If chunk_size is not positive

    Example:
        >>> chunk_list([1, 2, 3, 4, 5], 2)
        [[1, 2], [3, 4], [5]]
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    items = list(items)
    return [items[i:i + chunk_size] for i in range(0, len(items), chunk_size)]


def build_entries(chunk: Sequence[Any], field: str) -> List[Dict[str, str]]:
    """
    Build batch request entries with chunk-local ids.

    Ids restart at "0" for every chunk.

    Example:
        >>> build_entries(["a", "b"], "MessageBody")
        [{'Id': '0', 'MessageBody': 'a'}, {'Id': '1', 'MessageBody': 'b'}]
    """
    return [{'Id': str(i), field: value} for i, value in enumerate(chunk)]
