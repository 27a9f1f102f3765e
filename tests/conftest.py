"""Test configuration and fixtures for blobfs."""

import uuid
from concurrent.futures import Future

import boto3
import pytest
from moto import mock_aws

from blobfs.objectstorage.clients import S3ClientConfig, S3ObjectClient
from blobfs.storage import BlobStorage

BUCKET = "test-bucket"

CONTENT = b"""blobfs:
  storage:
    type: s3
    bucket: test-bucket
"""


def resolved(value):
    """Create a future that already holds value."""
    future = Future()
    future.set_result(value)
    return future


@pytest.fixture
def aws_credentials(monkeypatch):
    """Keep boto3 away from real credentials."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "test_key")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "test_secret")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def s3(aws_credentials):
    """Create a mocked S3 bucket."""
    with mock_aws():
        client = boto3.client(
            "s3",
            aws_access_key_id="test_key",
            aws_secret_access_key="test_secret",
            region_name="us-east-1",
        )
        client.create_bucket(Bucket=BUCKET)
        yield client


@pytest.fixture
def client_config():
    """S3 client configuration matching the mocked bucket."""
    return S3ClientConfig(
        access_key_id="test_key",
        secret_access_key="test_secret",
        region_name="us-east-1",
    )


@pytest.fixture
def object_client(s3, client_config):
    """Object client bound to the mocked bucket."""
    client = S3ObjectClient(client_config, BUCKET)
    yield client
    client.close()


@pytest.fixture
def storage(object_client):
    """Storage over the mocked bucket."""
    return BlobStorage(object_client)


@pytest.fixture
def tenant():
    """A fresh tenant identifier."""
    return uuid.uuid4().hex


@pytest.fixture
def prefix():
    """A fresh top-level directory name."""
    return uuid.uuid4().hex
