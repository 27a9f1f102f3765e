"""Filesystem-like storage over a flat object store.

BlobStorage is the public entry point. Every operation resolves its URI
into an object key first; file reads go straight to the object client,
while listing, move and delete fan out through the listing, move and
batch delete engines. Writes make sure every ancestor directory has its
marker object.
"""

from __future__ import annotations

from typing import BinaryIO, Optional, Union

from blobfs.core import get_logger
from blobfs.core.exceptions import PathNotFoundError
from blobfs.objectstorage.clients import ObjectClient, S3ObjectClient
from blobfs.schemas import S3StorageConfig

from .attributes import AttributesResolver, FileAttributes, FileType
from .batch import BatchDeleteEngine
from .directories import DirectoryEmulator, parent_directory
from .listing import ListingEngine
from .moves import MoveEngine
from .paths import PathResolver

logger = get_logger(__name__)


class BlobStorage:
    """Tenant-scoped directory-oriented storage backed by an object client.

    Holds no state besides its collaborators and is safe to share between
    threads as long as the object client is.

    Example:
        storage = BlobStorage.from_config(S3StorageConfig(bucket="files"))
        storage.put("tenant", "/reports/2024/summary.yml", b"...")
        storage.list("tenant", "/reports")
    """

    def __init__(self, client: ObjectClient, scheme: Optional[str] = None):
        """Initialize the storage.

        Args:
            client: Configured object client, used for every I/O
            scheme: URI scheme of returned locations, defaults to settings
        """
        self.client = client
        self.resolver = PathResolver(scheme)
        self.attributes = AttributesResolver(client)
        self.listing = ListingEngine(client, self.resolver)
        self.directories = DirectoryEmulator(client)
        self.mover = MoveEngine(
            client, self.resolver, self.attributes, self.directories
        )
        self.deleter = BatchDeleteEngine(client, self.resolver)

    @classmethod
    def from_config(
        cls, config: S3StorageConfig, scheme: Optional[str] = None
    ) -> "BlobStorage":
        """Create a storage over the S3 bucket described by config."""
        return cls(S3ObjectClient(config.client_config(), config.bucket), scheme)

    def close(self) -> None:
        """Release the object client."""
        try:
            self.client.close()
        except Exception as e:
            logger.warning("Failed to close object client", error=str(e))

    def get(self, tenant_id: Optional[str], uri: str) -> BinaryIO:
        """Open a file for reading.

        Raises:
            PathNotFoundError: If no file exists at uri
        """
        key = self.resolver.resolve(tenant_id, uri)
        stream = self.client.get(key)
        if stream is None:
            raise PathNotFoundError(f"{uri} (File not found)")
        return stream

    def exists(self, tenant_id: Optional[str], uri: str) -> bool:
        """Check whether a file or directory exists at uri."""
        key = self.resolver.resolve(tenant_id, uri)
        if self.client.exists(key):
            return True
        return not key.endswith("/") and self.client.exists(key + "/")

    def size(self, tenant_id: Optional[str], uri: str) -> int:
        """Size in bytes of the file at uri."""
        key = self.resolver.resolve(tenant_id, uri)
        descriptor = self.client.stat(key)
        if descriptor is None:
            raise PathNotFoundError(f"{uri} (File not found)")
        return descriptor.size

    def last_modified_time(self, tenant_id: Optional[str], uri: str) -> int:
        """Last modification time of uri in epoch millis, 0 when unknown."""
        return self.get_attributes(tenant_id, uri).last_modified_time

    def get_attributes(self, tenant_id: Optional[str], uri: str) -> FileAttributes:
        """Attributes of the file or directory at uri.

        A file wins over a directory of the same name.

        Raises:
            PathNotFoundError: If neither exists
        """
        key = self.resolver.resolve(tenant_id, uri)
        return self.attributes.lookup(key, uri)

    def put(
        self, tenant_id: Optional[str], uri: str, data: Union[bytes, BinaryIO]
    ) -> str:
        """Write a file, creating the markers of its parent directories.

        Returns:
            URI of the written file
        """
        key = self.resolver.resolve(tenant_id, uri)
        self.directories.ensure_directory_markers(parent_directory(key))
        descriptor = self.client.put(key, data)

        logger.info("File stored", key=key, size=descriptor.size)
        return self.resolver.to_uri(self.resolver.uri_path(uri))

    def list(self, tenant_id: Optional[str], uri: str) -> list[FileAttributes]:
        """List the immediate children of a directory.

        Raises:
            PathNotFoundError: If the directory does not exist
        """
        key = self.resolver.resolve(tenant_id, uri)
        prefix = key if key.endswith("/") else key + "/"

        entries = [
            AttributesResolver.from_descriptor(descriptor)
            for descriptor in self.listing.list(
                prefix, recursive=False, include_directories=True
            )
        ]
        if not entries:
            # An empty directory still has its marker; raises when it has none
            self.get_attributes(tenant_id, uri)
        return entries

    def all_by_prefix(
        self,
        tenant_id: Optional[str],
        prefix_uri: str,
        include_directories: bool = False,
    ) -> list[str]:
        """URIs of every object under a prefix, at any depth."""
        return self.listing.all_by_prefix(tenant_id, prefix_uri, include_directories)

    def create_directory(self, tenant_id: Optional[str], uri: str) -> str:
        """Create a directory and all of its missing ancestors.

        Returns:
            URI of the directory
        """
        key = self.resolver.resolve(tenant_id, uri)
        self.directories.ensure_directory_markers(key)
        return self.resolver.to_uri(self.resolver.uri_path(uri))

    def move(self, tenant_id: Optional[str], from_uri: str, to_uri: str) -> str:
        """Move a file or a directory tree, see MoveEngine.move."""
        return self.mover.move(tenant_id, from_uri, to_uri)

    def delete(self, tenant_id: Optional[str], uri: str) -> bool:
        """Delete a file or a directory with everything under it.

        Returns:
            False if nothing existed at uri, otherwise whether anything was
            removed
        """
        try:
            attributes = self.get_attributes(tenant_id, uri)
        except PathNotFoundError:
            return False

        if attributes.type == FileType.DIRECTORY:
            path = self.resolver.uri_path(uri)
            directory = path if path.endswith("/") else path + "/"
            return len(self.delete_by_prefix(tenant_id, directory)) > 0

        return self.client.delete(self.resolver.resolve(tenant_id, uri))

    def delete_by_prefix(self, tenant_id: Optional[str], prefix_uri: str) -> list[str]:
        """Delete every object under a prefix, see BatchDeleteEngine."""
        return self.deleter.delete_by_prefix(tenant_id, prefix_uri)
