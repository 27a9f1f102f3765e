"""Tests for file attribute resolution."""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from blobfs.core.exceptions import PathNotFoundError
from blobfs.objectstorage.clients import DIRECTORY_CONTENT_TYPE, BlobDescriptor
from blobfs.storage.attributes import AttributesResolver, FileType

MODIFIED = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


class TestFromDescriptor:
    """Test classification and extraction from blob descriptors."""

    def test_file(self):
        """Test a regular blob becomes a file."""
        descriptor = BlobDescriptor(
            name="/acme/storage/root.yml",
            size=76,
            content_type="text/yaml",
            create_time=MODIFIED,
            update_time=MODIFIED,
            metadata={"owner": "etl"},
        )

        attributes = AttributesResolver.from_descriptor(descriptor)

        assert attributes.file_name == "root.yml"
        assert attributes.type == FileType.FILE
        assert attributes.size == 76
        assert attributes.last_modified_time == 1709294400000
        assert attributes.creation_time == 1709294400000
        assert attributes.metadata == {"owner": "etl"}

    def test_marker_is_directory(self):
        """Test a key ending with '/' is a directory of size 0."""
        descriptor = BlobDescriptor(name="/acme/storage/level1/", size=12)

        attributes = AttributesResolver.from_descriptor(descriptor)

        assert attributes.file_name == "level1"
        assert attributes.type == FileType.DIRECTORY
        assert attributes.size == 0

    def test_directory_content_type(self):
        """Test the directory content type marks a directory."""
        descriptor = BlobDescriptor(
            name="/acme/storage/level1", content_type=DIRECTORY_CONTENT_TYPE
        )

        assert AttributesResolver.from_descriptor(descriptor).type == FileType.DIRECTORY

    def test_explicit_directory(self):
        """Test the caller can force a directory."""
        descriptor = BlobDescriptor(name="/acme/storage/level1", size=3)

        attributes = AttributesResolver.from_descriptor(descriptor, is_directory=True)

        assert attributes.type == FileType.DIRECTORY
        assert attributes.size == 0

    def test_missing_timestamps(self):
        """Test missing timestamps become 0 instead of failing."""
        descriptor = BlobDescriptor(name="/acme/storage/level1/")

        attributes = AttributesResolver.from_descriptor(descriptor)

        assert attributes.last_modified_time == 0
        assert attributes.creation_time == 0


class TestLookup:
    """Test attribute lookup by object key."""

    def test_file_wins_over_marker(self):
        """Test a file at the exact key is preferred."""
        client = Mock()
        client.stat.return_value = BlobDescriptor(name="/acme/level1", size=5)

        attributes = AttributesResolver(client).lookup("/acme/level1")

        assert attributes.type == FileType.FILE
        client.stat.assert_called_once_with("/acme/level1")

    def test_falls_back_to_marker(self):
        """Test a directory marker is found when no file exists."""
        client = Mock()
        client.stat.side_effect = [None, BlobDescriptor(name="/acme/level1/")]

        attributes = AttributesResolver(client).lookup("/acme/level1")

        assert attributes.type == FileType.DIRECTORY
        assert attributes.file_name == "level1"

    def test_not_found(self):
        """Test absence of both file and marker."""
        client = Mock()
        client.stat.return_value = None

        with pytest.raises(PathNotFoundError, match="/level1 not found"):
            AttributesResolver(client).lookup("/acme/level1", "/level1")
