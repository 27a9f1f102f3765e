"""Directory emulation through zero-length marker objects."""

from blobfs.core import get_logger
from blobfs.core.exceptions import StoreError
from blobfs.objectstorage.clients import DIRECTORY_CONTENT_TYPE, ObjectClient

logger = get_logger(__name__)


def parent_directory(key: str) -> str:
    """Return the directory key holding key, e.g. '/a/b/' for '/a/b/c'."""
    trimmed = key.rstrip("/")
    return trimmed[: trimmed.rfind("/") + 1] or "/"


class DirectoryEmulator:
    """Writes marker objects so every ancestor directory exists on its own."""

    def __init__(self, client: ObjectClient):
        self.client = client

    def ensure_directory_markers(self, path_key: str) -> int:
        """Create the markers of path_key and all of its ancestors.

        Markers are only written when missing, so calling this repeatedly is
        harmless. The root never gets a marker.

        Args:
            path_key: Object key of the directory

        Returns:
            Number of markers written
        """
        if not path_key.endswith("/"):
            path_key += "/"

        if self._has_content(path_key):
            return 0

        created = 0
        current = "/"
        for segment in filter(None, path_key.split("/")):
            current += segment + "/"
            if self.client.exists(current):
                continue
            self.client.put(current, b"", content_type=DIRECTORY_CONTENT_TYPE)
            created += 1

        if created:
            logger.info("Directory markers created", path=path_key, created=created)
        return created

    def _has_content(self, path_key: str) -> bool:
        try:
            first = next(iter(self.client.list(path_key, page_size=1)), None)
        except StoreError as e:
            logger.warning(
                "Directory pre-check failed, creating markers",
                path=path_key,
                error=str(e),
            )
            return False
        return first is not None
