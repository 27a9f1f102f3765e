"""Core utilities and shared components for blobfs."""

from .config import settings
from .exceptions import BlobFSError, ValidationError
from .observability import get_logger, get_tracer

__all__ = ["settings", "BlobFSError", "ValidationError", "get_logger", "get_tracer"]
