"""File attributes computed from blob descriptors."""

import posixpath
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from blobfs.core import get_logger
from blobfs.core.exceptions import PathNotFoundError
from blobfs.objectstorage.clients import (
    DIRECTORY_CONTENT_TYPE,
    BlobDescriptor,
    ObjectClient,
)

logger = get_logger(__name__)


class FileType(str, Enum):
    """Kind of node seen through the filesystem abstraction."""

    FILE = "File"
    DIRECTORY = "Directory"


@dataclass(frozen=True)
class FileAttributes:
    """Attributes of a file or directory.

    Attributes:
        file_name: Last segment of the path
        type: File or Directory
        size: Size in bytes, always 0 for directories
        last_modified_time: Epoch millis, 0 when unknown
        creation_time: Epoch millis, 0 when unknown
        metadata: User metadata of the underlying blob
    """

    file_name: str
    type: FileType
    size: int = 0
    last_modified_time: int = 0
    creation_time: int = 0
    metadata: dict[str, str] = field(default_factory=dict)


def _epoch_millis(value: Optional[datetime]) -> int:
    if value is None:
        return 0
    return int(value.timestamp() * 1000)


class AttributesResolver:
    """Classifies blobs as files or directories and looks them up by key."""

    def __init__(self, client: ObjectClient):
        self.client = client

    @staticmethod
    def from_descriptor(
        descriptor: BlobDescriptor, is_directory: bool = False
    ) -> FileAttributes:
        """Build file attributes from a blob descriptor.

        Directory markers may be reported without timestamps; those map to 0
        instead of failing.
        """
        name = descriptor.name
        directory = (
            is_directory
            or name.endswith("/")
            or descriptor.content_type == DIRECTORY_CONTENT_TYPE
        )

        return FileAttributes(
            file_name=posixpath.basename(name.rstrip("/")),
            type=FileType.DIRECTORY if directory else FileType.FILE,
            size=0 if directory else descriptor.size,
            last_modified_time=_epoch_millis(descriptor.update_time),
            creation_time=_epoch_millis(descriptor.create_time),
            metadata=dict(descriptor.metadata),
        )

    def lookup(self, key: str, uri: Optional[str] = None) -> FileAttributes:
        """Resolve the attributes stored at key.

        A file at the exact key wins over a directory marker at key + '/'.

        Raises:
            PathNotFoundError: If neither a file nor a directory exists
        """
        descriptor = self.client.stat(key)
        if descriptor is None and not key.endswith("/"):
            descriptor = self.client.stat(key + "/")

        if descriptor is None:
            raise PathNotFoundError(f"{uri or key} not found.")

        return self.from_descriptor(descriptor)
