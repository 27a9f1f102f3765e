"""Tests for storage configuration schemas."""

import pytest
from pydantic import ValidationError

from blobfs.objectstorage.clients import S3ClientConfig
from blobfs.schemas import S3StorageConfig


class TestS3StorageConfig:
    """Test S3 storage configuration."""

    def test_s3_config_creation(self):
        """Test S3 configuration creation."""
        config = S3StorageConfig(
            bucket="files",
            access_key_id="key123",
            secret_access_key="secret456",
            region_name="eu-west-1",
        )
        assert config.type == "s3"
        assert config.bucket == "files"
        assert config.access_key_id == "key123"
        assert config.region_name == "eu-west-1"

    def test_s3_config_missing_bucket(self):
        """Test the bucket is required and not empty."""
        with pytest.raises(ValidationError):
            S3StorageConfig()
        with pytest.raises(ValidationError):
            S3StorageConfig(bucket="")

    def test_client_config(self):
        """Test conversion into the client configuration."""
        config = S3StorageConfig(
            bucket="files",
            endpoint_url="http://localhost:9000",
            aws_profile="minio",
        )

        client_config = config.client_config()

        assert isinstance(client_config, S3ClientConfig)
        assert client_config.region_name == "us-east-1"
        assert client_config.endpoint_url == "http://localhost:9000"
        assert client_config.aws_profile == "minio"


class TestS3ClientConfig:
    """Test S3 client configuration."""

    def test_defaults(self):
        """Test the default region and empty credentials."""
        config = S3ClientConfig()
        assert config.region_name == "us-east-1"
        assert config.access_key_id is None

    def test_unknown_fields_rejected(self):
        """Test typos in configuration keys are not ignored."""
        with pytest.raises(ValidationError):
            S3ClientConfig(bucket="files")

    def test_addressing_style(self):
        """Test the addressing style reaches the client configuration."""
        config = S3StorageConfig(bucket="files", addressing_style="path")
        assert config.client_config().addressing_style == "path"

        with pytest.raises(ValidationError):
            S3StorageConfig(bucket="files", addressing_style="sideways")
