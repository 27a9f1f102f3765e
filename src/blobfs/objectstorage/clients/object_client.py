"""Object client contract consumed by the storage core.

The storage core only ever talks to the object store through these
primitives: get, stat, put, prefix listing, copy, delete and a non-atomic
batch. Keys handled here are ObjectKeys, i.e. strings starting with '/'.
"""

from concurrent.futures import Future
from dataclasses import dataclass, field
from datetime import datetime
from typing import BinaryIO, Iterator, Optional, Protocol, Union

DIRECTORY_CONTENT_TYPE = "application/x-directory"


@dataclass(frozen=True)
class BlobDescriptor:
    """Description of a stored object as reported by the object store.

    Attributes:
        name: Object key of the blob
        size: Length of the blob in bytes
        content_type: Declared content type, if the listing reports one
        create_time: Creation time, if known
        update_time: Last modification time, if known
        metadata: User metadata attached to the blob
    """

    name: str
    size: int = 0
    content_type: Optional[str] = None
    create_time: Optional[datetime] = None
    update_time: Optional[datetime] = None
    metadata: dict[str, str] = field(default_factory=dict)


class Batch(Protocol):
    """Pending operations submitted together, without cross-object atomicity."""

    def copy(self, source_key: str, dest_key: str) -> "Future[bool]":
        """Enqueue a copy; the future resolves once the batch is submitted."""
        ...

    def delete(self, key: str) -> "Future[bool]":
        """Enqueue a delete; the future resolves once the batch is submitted."""
        ...

    def submit(self) -> None:
        """Send every enqueued operation to the object store."""
        ...


class ObjectClient(Protocol):
    """Protocol for the flat, key-addressed object store."""

    def get(self, key: str) -> Optional[BinaryIO]:
        """Open a blob for reading, or return None if it does not exist."""
        ...

    def stat(self, key: str) -> Optional[BlobDescriptor]:
        """Describe a blob, or return None if it does not exist."""
        ...

    def exists(self, key: str) -> bool:
        """Check whether a blob exists at exactly this key."""
        ...

    def put(
        self,
        key: str,
        data: Union[bytes, BinaryIO],
        content_type: Optional[str] = None,
    ) -> BlobDescriptor:
        """Write a blob and return its committed descriptor."""
        ...

    def list(
        self,
        prefix: str,
        page_size: Optional[int] = None,
        immediate_children_only: bool = False,
    ) -> Iterator[BlobDescriptor]:
        """Lazily iterate over the blobs whose key starts with prefix."""
        ...

    def copy(self, source_key: str, dest_key: str) -> None:
        """Copy a blob to another key."""
        ...

    def delete(self, key: str) -> bool:
        """Delete a blob; False when nothing was stored at the key."""
        ...

    def batch(self) -> Batch:
        """Start a new batch."""
        ...

    def close(self) -> None:
        """Release the underlying connection resources."""
        ...
