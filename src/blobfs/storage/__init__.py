"""Directory-oriented storage emulated on top of an object store."""

from .attributes import AttributesResolver, FileAttributes, FileType
from .batch import BatchDeleteEngine, collect_failures, confirm_batch
from .blob_storage import BlobStorage
from .directories import DirectoryEmulator, parent_directory
from .listing import ListingEngine
from .moves import MoveEngine
from .paths import PathResolver

__all__ = [
    "AttributesResolver",
    "BatchDeleteEngine",
    "BlobStorage",
    "DirectoryEmulator",
    "FileAttributes",
    "FileType",
    "ListingEngine",
    "MoveEngine",
    "PathResolver",
    "collect_failures",
    "confirm_batch",
    "parent_directory",
]
