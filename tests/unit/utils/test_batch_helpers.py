"""
Module: test_batch_helpers.py
Description: Unit tests for chunking helpers.
"""

import pytest

from sqs_manager.utils.batch_helpers import build_entries, chunk_list


class TestChunkList:
    """Test cases for chunk_list()."""

    def test_even_split(self):
        assert chunk_list([1, 2, 3, 4], 2) == [[1, 2], [3, 4]]

    def test_remainder_chunk(self):
        assert chunk_list([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]

    def test_empty(self):
        assert chunk_list([], 10) == []

    def test_accepts_tuples(self):
        assert chunk_list(("a", "b", "c"), 10) == [["a", "b", "c"]]

    @pytest.mark.parametrize("size", [0, -1])
    def test_invalid_chunk_size(self, size):
        with pytest.raises(ValueError, match="chunk_size must be positive"):
            chunk_list([1], size)


class TestBuildEntries:
    """Test cases for build_entries()."""

    def test_chunk_local_ids(self):
        assert build_entries(["x", "y", "z"], "MessageBody") == [
            {'Id': '0', 'MessageBody': 'x'},
            {'Id': '1', 'MessageBody': 'y'},
            {'Id': '2', 'MessageBody': 'z'},
        ]

    def test_empty(self):
        assert build_entries([], "ReceiptHandle") == []
