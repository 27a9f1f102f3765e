"""Prefix listing with filesystem-like filtering."""

from __future__ import annotations

from typing import Optional

from blobfs.core import get_logger
from blobfs.objectstorage.clients import BlobDescriptor, ObjectClient

from .paths import PathResolver

logger = get_logger(__name__)


def _keep(prefix: str, name: str, recursive: bool, include_directories: bool) -> bool:
    """Decide whether a listed key belongs to the listing of prefix."""
    remainder = name[len(prefix) :]

    # The prefix object itself and self-reference artifacts
    if not remainder or remainder == prefix or remainder == "/":
        return False

    if not recursive and "/" in remainder.rstrip("/"):
        return False

    if not include_directories and remainder.endswith("/"):
        return False

    return True


class ListingEngine:
    """Lists immediate children or all descendants of a key prefix."""

    def __init__(self, client: ObjectClient, resolver: PathResolver):
        self.client = client
        self.resolver = resolver

    def list(
        self, prefix_key: str, recursive: bool, include_directories: bool
    ) -> list[BlobDescriptor]:
        """List the blobs under prefix_key.

        Args:
            prefix_key: Object key prefix to list
            recursive: False to only keep immediate children
            include_directories: False to drop directory markers

        Returns:
            Descriptors of the matching blobs, never the prefix itself
        """
        descriptors = [
            descriptor
            for descriptor in self.client.list(
                prefix_key, immediate_children_only=not recursive
            )
            if _keep(prefix_key, descriptor.name, recursive, include_directories)
        ]

        logger.debug(
            "Prefix listed",
            prefix=prefix_key,
            recursive=recursive,
            count=len(descriptors),
        )
        return descriptors

    def all_by_prefix(
        self,
        tenant_id: Optional[str],
        prefix_uri: Optional[str],
        include_directories: bool = False,
    ) -> list[str]:
        """List every descendant of a prefix as caller-visible URIs."""
        prefix_key = self.resolver.resolve(tenant_id, prefix_uri)
        uri_prefix = self.resolver.uri_path(prefix_uri)

        return [
            self.resolver.to_uri(uri_prefix + descriptor.name[len(prefix_key) :])
            for descriptor in self.list(
                prefix_key, recursive=True, include_directories=include_directories
            )
        ]
