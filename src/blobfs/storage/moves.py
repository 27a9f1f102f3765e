"""Move of files and directory trees as copy and delete pairs."""

from concurrent.futures import Future
from typing import Optional

from blobfs.core import get_logger, get_tracer
from blobfs.core.exceptions import ValidationError
from blobfs.objectstorage.clients import Batch, ObjectClient

from .attributes import AttributesResolver, FileType
from .batch import confirm_batch
from .directories import DirectoryEmulator, parent_directory
from .paths import PathResolver

logger = get_logger(__name__)
tracer = get_tracer(__name__)


class MoveEngine:
    """Relocates a single object or a whole subtree.

    There is no rollback: when a copy fails its error propagates and the
    objects already copied stay in both locations.
    """

    def __init__(
        self,
        client: ObjectClient,
        resolver: PathResolver,
        attributes: AttributesResolver,
        directories: DirectoryEmulator,
    ):
        self.client = client
        self.resolver = resolver
        self.attributes = attributes
        self.directories = directories

    def move(self, tenant_id: Optional[str], from_uri: str, to_uri: str) -> str:
        """Move a file or directory.

        Args:
            tenant_id: Tenant namespace
            from_uri: Current location
            to_uri: New location

        Returns:
            URI of the new location

        Raises:
            PathNotFoundError: If nothing exists at from_uri
            ValidationError: If a directory would be moved into itself
            StoreError: If a copy fails, leaving the move partial
            PartialBatchFailureError: If a source was not deleted
        """
        from_key = self.resolver.resolve(tenant_id, from_uri)
        to_key = self.resolver.resolve(tenant_id, to_uri)
        attributes = self.attributes.lookup(from_key, from_uri)
        target_uri = self.resolver.to_uri(self.resolver.uri_path(to_uri))

        # Same location, nothing to move
        if from_key.rstrip("/") == to_key.rstrip("/"):
            return target_uri

        with tracer.start_as_current_span("blobfs.move") as span:
            span.set_attribute("blobfs.source", from_key)
            span.set_attribute("blobfs.target", to_key)

            batch = self.client.batch()
            results: dict[str, "Future[bool]"] = {}

            if attributes.type == FileType.FILE:
                self.directories.ensure_directory_markers(parent_directory(to_key))
                self._enqueue(batch, tenant_id, from_key, to_key, results)
            else:
                source_prefix = from_key.rstrip("/") + "/"
                target_prefix = to_key.rstrip("/") + "/"
                if target_prefix.startswith(source_prefix):
                    raise ValidationError(
                        f"Cannot move directory '{from_uri}' into itself: {to_uri}"
                    )

                self.directories.ensure_directory_markers(
                    parent_directory(target_prefix)
                )
                for descriptor in self.client.list(source_prefix):
                    suffix = descriptor.name[len(source_prefix) :]
                    self._enqueue(
                        batch,
                        tenant_id,
                        descriptor.name,
                        target_prefix + suffix,
                        results,
                    )

            span.set_attribute("blobfs.objects", len(results))
            batch.submit()
            confirm_batch(results, "move")

        logger.info(
            "Moved",
            source=from_key,
            target=to_key,
            type=attributes.type.value,
            objects=len(results),
        )
        return target_uri

    def _enqueue(
        self,
        batch: Batch,
        tenant_id: Optional[str],
        source_key: str,
        target_key: str,
        results: dict[str, "Future[bool]"],
    ) -> None:
        # The copy is enqueued before the delete of the same object
        batch.copy(source_key, target_key)
        results[self.resolver.key_to_uri(tenant_id, source_key)] = batch.delete(
            source_key
        )
        logger.debug("Move enqueued", source=source_key, target=target_key)
