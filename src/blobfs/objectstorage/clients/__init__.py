"""Object store clients."""

from .object_client import DIRECTORY_CONTENT_TYPE, Batch, BlobDescriptor, ObjectClient
from .s3_client import S3ClientConfig, S3ClientManager
from .s3_object_client import S3Batch, S3ObjectClient

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
