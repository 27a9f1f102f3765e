"""Filesystem-like storage for tenants on top of S3-compatible object stores.

Object stores have no directories, no rename and no multi-object
transactions. This package emulates them: directories are zero-length
marker objects, listing filters prefix queries down to immediate children,
moves are batched copy and delete pairs, and prefix deletes report every
object that could not be removed.

Recommended Usage:
    >>> from blobfs import BlobStorage, S3StorageConfig
    >>> storage = BlobStorage.from_config(S3StorageConfig(bucket="files"))
    >>> storage.put("acme", "/reports/2024/summary.yml", b"total: 3")
    'blobfs:///reports/2024/summary.yml'
    >>> [entry.file_name for entry in storage.list("acme", "/reports")]
    ['2024']

Advanced Usage:
    Plug another object store in by implementing the ObjectClient protocol:

    >>> from blobfs.objectstorage import ObjectClient
"""

__version__ = "0.1.0"

from .core.exceptions import (
    BlobFSError,
    InvalidPathError,
    PartialBatchFailureError,
    PathNotFoundError,
    StoreError,
    ValidationError,
)
from .objectstorage import (
    BlobDescriptor,
    ObjectClient,
    S3ClientConfig,
    S3ObjectClient,
)
from .schemas import S3StorageConfig
from .storage import BlobStorage, FileAttributes, FileType

__all__ = [
    # Storage
    "BlobStorage",
    "FileAttributes",
    "FileType",
    "S3StorageConfig",
    # Object clients
    "BlobDescriptor",
    "ObjectClient",
    "S3ClientConfig",
    "S3ObjectClient",
    # Errors
    "BlobFSError",
    "InvalidPathError",
    "PartialBatchFailureError",
    "PathNotFoundError",
    "StoreError",
    "ValidationError",
]
