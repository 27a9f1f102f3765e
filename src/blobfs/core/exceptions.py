"""Exception hierarchy for blobfs."""


class BlobFSError(Exception):
    """Base exception for all blobfs errors."""

    pass


class ValidationError(BlobFSError):
    """Raised when validation fails."""

    pass


class InvalidPathError(ValidationError):
    """Raised when a path tries to escape its location with '..' segments."""

    pass


class PathNotFoundError(BlobFSError):
    """Raised when a file or directory is not found."""

    pass


class StoreError(BlobFSError):
    """Raised when the underlying object store call fails."""

    pass


class PartialBatchFailureError(BlobFSError):
    """Raised when some operations of a submitted batch were not confirmed.

    Attributes:
        failed: URIs of every object whose operation did not succeed
    """

    def __init__(self, message: str, failed: list[str]):
        super().__init__(message)
        self.failed = failed
