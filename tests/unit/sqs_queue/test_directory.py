"""
Module: test_directory.py
Description: Unit tests for QueueDirectory.

Covers lazy building, both list-queues envelope shapes, case-sensitive
keys, refresh semantics, create(), and lookups before the first build.
"""

import pytest

from sqs_manager.exceptions import DirectoryUnavailableError
from sqs_manager.models.queue import QueueHandle
from sqs_manager.sqs_queue.directory import (
    QueueDirectory,
    extract_created_url,
    extract_queue_urls,
)
from sqs_manager.sqs_queue.normalizer import ResponseNormalizer

BASE = "https://sqs.us-east-1.amazonaws.com/123456789012"


@pytest.fixture
def directory(fake_transport):
    """Provide a directory over the fake transport."""
    return QueueDirectory(fake_transport, ResponseNormalizer())


class TestExtractQueueUrls:
    """Test cases for the two list-queues payload shapes."""

    def test_json_shape(self):
        assert extract_queue_urls({'QueueUrls': [f"{BASE}/a", f"{BASE}/b"]}) == [
            f"{BASE}/a", f"{BASE}/b"
        ]

    def test_query_shape_list(self):
        payload = {'ListQueuesResult': {'QueueUrl': [f"{BASE}/a", f"{BASE}/b"]}}
        assert extract_queue_urls(payload) == [f"{BASE}/a", f"{BASE}/b"]

    def test_query_shape_single(self):
        payload = {'ListQueuesResult': {'QueueUrl': f"{BASE}/only"}}
        assert extract_queue_urls(payload) == [f"{BASE}/only"]

    @pytest.mark.parametrize("payload", [
        {},
        {'QueueUrls': []},
        {'ListQueuesResult': None},
        {'ListQueuesResult': {}},
    ])
    def test_empty(self, payload):
        assert extract_queue_urls(payload) == []

    def test_created_url_shapes(self):
        assert extract_created_url({'QueueUrl': f"{BASE}/x"}) == f"{BASE}/x"
        assert extract_created_url({'CreateQueueResult': {'QueueUrl': f"{BASE}/y"}}) == f"{BASE}/y"


class TestQueueDirectory:
    """Test cases for QueueDirectory list/create/get."""

    def test_list_builds_one_handle_per_url(self, directory, fake_transport, ok_envelope):
        """Test every URL becomes a handle keyed by its last path segment."""
        fake_transport.list_queues.return_value = ok_envelope(
            QueueUrls=[f"{BASE}/orders", f"{BASE}/Orders", f"{BASE}/billing"]
        )

        queues = directory.list()

        assert list(queues) == ["orders", "Orders", "billing"]
        assert queues["orders"] == QueueHandle(name="orders", url=f"{BASE}/orders")
        assert queues["Orders"].url == f"{BASE}/Orders"
        assert directory.built is True
        assert len(directory) == 3
        assert "orders" in directory
        assert "ORDERS" not in directory

    def test_list_accepts_query_shape(self, directory, fake_transport, ok_envelope):
        """Test the ListQueuesResult envelope is also accepted."""
        fake_transport.list_queues.return_value = ok_envelope(
            ListQueuesResult={'QueueUrl': [f"{BASE}/q1", f"{BASE}/q2"]}
        )

        assert sorted(directory.list()) == ["q1", "q2"]

    def test_list_is_cached(self, directory, fake_transport):
        """Test the directory is fetched once unless refreshed."""
        directory.list()
        directory.list()
        directory.get("anything")

        assert fake_transport.list_queues.call_count == 1

    def test_refresh_replaces_contents(self, directory, fake_transport, ok_envelope):
        """Test refresh fully replaces the directory."""
        fake_transport.list_queues.return_value = ok_envelope(QueueUrls=[f"{BASE}/old"])
        directory.list()

        fake_transport.list_queues.return_value = ok_envelope(QueueUrls=[f"{BASE}/new"])
        queues = directory.list(refresh=True)

        assert list(queues) == ["new"]
        assert directory.get("old") is None
        assert fake_transport.list_queues.call_count == 2

    def test_failed_refresh_keeps_stale_directory(
        self, directory, fake_transport, ok_envelope, error_envelope
    ):
        """Test a failed refresh returns None and keeps the old entries."""
        fake_transport.list_queues.return_value = ok_envelope(QueueUrls=[f"{BASE}/stale"])
        directory.list()

        fake_transport.list_queues.return_value = error_envelope()
        assert directory.list(refresh=True) is None
        assert directory.get("stale").url == f"{BASE}/stale"

    def test_failed_first_build_leaves_directory_unbuilt(
        self, directory, fake_transport, error_envelope, ok_envelope
    ):
        """Test a failed first build is retried on the next call."""
        fake_transport.list_queues.return_value = error_envelope()

        assert directory.list() is None
        assert directory.built is False
        assert len(directory) == 0

        fake_transport.list_queues.return_value = ok_envelope(QueueUrls=[f"{BASE}/late"])
        assert list(directory.list()) == ["late"]

    def test_get_before_build_raises(self, directory):
        """Test lookups before the first build signal an unavailable directory."""
        with pytest.raises(DirectoryUnavailableError):
            directory.get("orders")

    def test_get_unknown_name_returns_none(self, directory):
        """Test unknown names never raise once built."""
        directory.list()

        assert directory.get("missing") is None

    def test_refresh_serves_old_directory_until_swap(
        self, directory, fake_transport, ok_envelope
    ):
        """Test readers see the old entries while a refresh is in flight."""
        fake_transport.list_queues.return_value = ok_envelope(QueueUrls=[f"{BASE}/old"])
        directory.list()
        seen_during_refresh = []

        def list_queues():
            seen_during_refresh.append((directory.get("old"), directory.get("new")))
            return ok_envelope(QueueUrls=[f"{BASE}/new"])

        fake_transport.list_queues.side_effect = list_queues
        directory.list(refresh=True)

        assert seen_during_refresh == [(QueueHandle(name="old", url=f"{BASE}/old"), None)]
        assert directory.get("old") is None
        assert directory.get("new").url == f"{BASE}/new"

    def test_duplicate_name_keeps_last_url(self, directory, fake_transport, ok_envelope):
        """Test a later URL with the same queue name replaces the earlier one."""
        other = "https://sqs.eu-west-1.amazonaws.com/999999999999/a"
        fake_transport.list_queues.return_value = ok_envelope(QueueUrls=[f"{BASE}/a", other])

        queues = directory.list()

        assert queues == {"a": QueueHandle(name="a", url=other)}
        assert len(directory) == 1

    def test_returned_mapping_is_a_copy(self, directory, fake_transport, ok_envelope):
        """Test callers can't mutate the cached directory."""
        fake_transport.list_queues.return_value = ok_envelope(QueueUrls=[f"{BASE}/a"])
        queues = directory.list()
        queues.clear()

        assert directory.get("a") is not None

    def test_create_inserts_handle(self, directory, fake_transport, ok_envelope):
        """Test create("orders") adds the new handle to the directory."""
        fake_transport.create_queue.return_value = ok_envelope(QueueUrl=f"{BASE}/orders")

        handle = directory.create("orders")

        assert handle == QueueHandle(name="orders", url=f"{BASE}/orders")
        assert directory.get("orders") == handle
        fake_transport.create_queue.assert_called_once_with("orders")
        fake_transport.list_queues.assert_called_once()

    def test_create_failure_returns_none(self, directory, fake_transport, error_envelope):
        """Test a failed create returns None and leaves the directory alone."""
        fake_transport.create_queue.return_value = error_envelope(code="QueueAlreadyExists")

        assert directory.create("orders") is None
        fake_transport.list_queues.assert_not_called()

    def test_create_when_list_fails_still_returns_handle(
        self, directory, fake_transport, ok_envelope, error_envelope
    ):
        """Test the created handle is returned even if the lazy build fails."""
        fake_transport.create_queue.return_value = ok_envelope(QueueUrl=f"{BASE}/orders")
        fake_transport.list_queues.return_value = error_envelope()

        handle = directory.create("orders")

        assert handle.name == "orders"
        assert directory.built is False

    def test_create_rejects_empty_name(self, directory):
        with pytest.raises(ValueError, match="name must be a non-empty string"):
            directory.create("")
