"""
Module: conftest.py
Description: Shared pytest fixtures for queue manager tests.

Provides a recording fake transport with canned SQS envelopes, test
settings that ignore the environment, and a moto-backed SQS client for
transport tests.
"""

from unittest.mock import MagicMock

import boto3
import pytest
from moto import mock_aws
from pydantic_settings import SettingsConfigDict

from sqs_manager.config.settings import Settings
from sqs_manager.sqs_queue.manager import QueueManager

QUEUE_BASE = "https://sqs.us-east-1.amazonaws.com/123456789012"


class TestSettings(Settings):
    """Settings that don't read environment variables or .env files."""

    model_config = SettingsConfigDict(
        env_prefix="SQS_TEST_UNUSED_",
        env_file=None,
        case_sensitive=False,
        extra="ignore"
    )


def ok(request_id="req-ok", **body):
    """Successful botocore-style envelope."""
    body['ResponseMetadata'] = {'RequestId': request_id, 'HTTPStatusCode': 200}
    return body


def fail(request_id="req-fail", code="AWS.SimpleQueueService.NonExistentQueue",
         message="The specified queue does not exist.", status=400):
    """Error envelope as carried by botocore ClientError.response."""
    return {
        'Error': {'Code': code, 'Message': message, 'Type': 'Sender'},
        'ResponseMetadata': {'RequestId': request_id, 'HTTPStatusCode': status},
    }


@pytest.fixture
def test_settings():
    """Provide settings with dummy credentials."""
    return TestSettings(access_key="test-access", secret_key="test-secret")


@pytest.fixture
def fake_transport():
    """
    Provide a recording transport.

    Every operation succeeds with an empty payload unless a test sets
    return_value or side_effect on it.
    """
    transport = MagicMock(name="transport")
    transport.list_queues.return_value = ok(QueueUrls=[])
    transport.create_queue.return_value = ok(QueueUrl=f"{QUEUE_BASE}/created")
    transport.send_message.return_value = ok(MessageId="m-1")
    transport.send_message_batch.side_effect = lambda url, entries, options: ok(
        Successful=[{'Id': e['Id']} for e in entries], Failed=[]
    )
    transport.receive_message.return_value = ok()
    transport.delete_message.return_value = ok()
    transport.delete_message_batch.side_effect = lambda url, entries, options: ok(
        Successful=[{'Id': e['Id']} for e in entries], Failed=[]
    )
    return transport


@pytest.fixture
def manager(fake_transport, test_settings):
    """Provide a QueueManager wired to the fake transport."""
    return QueueManager(transport=fake_transport, settings=test_settings)


@pytest.fixture
def aws_credentials(monkeypatch):
    """Dummy credentials so boto3 never reaches a real account."""
    for key, value in {
        'AWS_ACCESS_KEY_ID': 'testing',
        'AWS_SECRET_ACCESS_KEY': 'testing',
        'AWS_SECURITY_TOKEN': 'testing',
        'AWS_SESSION_TOKEN': 'testing',
        'AWS_DEFAULT_REGION': 'us-east-1',
    }.items():
        monkeypatch.setenv(key, value)


@pytest.fixture
def mock_sqs(aws_credentials):
    """
    Provide a moto-mocked SQS client.

    The mock stays active for the duration of the test.
    """
    with mock_aws():
        yield boto3.client('sqs', region_name='us-east-1')


@pytest.fixture
def ok_envelope():
    """Factory for successful envelopes."""
    return ok


@pytest.fixture
def error_envelope():
    """Factory for error envelopes."""
    return fail


@pytest.fixture
def empty_settings():
    """Provide settings without credentials."""
    return TestSettings()
