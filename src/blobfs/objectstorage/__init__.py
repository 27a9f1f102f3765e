"""Object storage access for S3-compatible services."""

from .clients import (
    DIRECTORY_CONTENT_TYPE,
    Batch,
    BlobDescriptor,
    ObjectClient,
    S3Batch,
    S3ClientConfig,
    S3ClientManager,
    S3ObjectClient,
)

__all__ = [
    "DIRECTORY_CONTENT_TYPE",
    "Batch",
    "BlobDescriptor",
    "ObjectClient",
    "S3Batch",
    "S3ClientConfig",
    "S3ClientManager",
    "S3ObjectClient",
]
