"""Prefix-scoped batch deletion and batch result aggregation."""

from concurrent.futures import Future
from typing import Optional

from blobfs.core import get_logger, get_tracer
from blobfs.core.exceptions import PartialBatchFailureError
from blobfs.objectstorage.clients import ObjectClient

from .paths import PathResolver

logger = get_logger(__name__)
tracer = get_tracer(__name__)


def _confirmed(future: "Optional[Future[bool]]") -> bool:
    if future is None or not future.done() or future.cancelled():
        return False
    if future.exception() is not None:
        return False
    return future.result() is True


def collect_failures(results: dict[str, "Future[bool]"]) -> list[str]:
    """Return the URIs whose batched operation was not confirmed."""
    return [uri for uri, future in results.items() if not _confirmed(future)]


def confirm_batch(results: dict[str, "Future[bool]"], action: str) -> None:
    """Check every result of a submitted batch.

    Raises:
        PartialBatchFailureError: If any operation is unresolved or failed,
            even though others may have succeeded
    """
    failed = collect_failures(results)
    if not failed:
        return

    error_msg = f"Unable to {action} all files, failed on [{', '.join(failed)}]"
    logger.error(error_msg, failed=len(failed), total=len(results))
    raise PartialBatchFailureError(error_msg, failed)


class BatchDeleteEngine:
    """Deletes every object under a prefix in one batch."""

    def __init__(self, client: ObjectClient, resolver: PathResolver):
        self.client = client
        self.resolver = resolver

    def delete_by_prefix(
        self, tenant_id: Optional[str], prefix_uri: Optional[str]
    ) -> list[str]:
        """Delete every object, directory markers included, under a prefix.

        Args:
            tenant_id: Tenant namespace
            prefix_uri: Prefix to delete, usually a directory ending with '/'

        Returns:
            URIs of all deleted objects, in no particular order

        Raises:
            PartialBatchFailureError: If any delete was not confirmed
        """
        prefix_key = self.resolver.resolve(tenant_id, prefix_uri)

        with tracer.start_as_current_span("blobfs.delete_by_prefix") as span:
            span.set_attribute("blobfs.prefix", prefix_key)

            batch = self.client.batch()
            results: dict[str, "Future[bool]"] = {}
            for descriptor in self.client.list(prefix_key):
                uri = self.resolver.key_to_uri(tenant_id, descriptor.name)
                results[uri] = batch.delete(descriptor.name)

            if not results:
                logger.info("Nothing to delete", prefix=prefix_key)
                return []

            span.set_attribute("blobfs.objects", len(results))
            batch.submit()
            confirm_batch(results, "delete")

        logger.info("Prefix deleted", prefix=prefix_key, deleted=len(results))
        return list(results)
