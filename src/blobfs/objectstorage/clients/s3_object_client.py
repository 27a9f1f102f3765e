"""S3 implementation of the object client contract.

ObjectKeys always start with '/'. S3 keys are the same string without that
leading '/', so 's3://bucket/tenant/dir/file.txt' is addressed by the
ObjectKey '/tenant/dir/file.txt'.
"""

from __future__ import annotations

from concurrent.futures import Future
from datetime import datetime
from typing import Any, BinaryIO, Iterator, Optional, Union

from botocore.exceptions import BotoCoreError, ClientError

from blobfs.core import get_logger
from blobfs.core.exceptions import StoreError

from .object_client import DIRECTORY_CONTENT_TYPE, BlobDescriptor
from .s3_client import S3ClientConfig, S3ClientManager

logger = get_logger(__name__)

# DeleteObjects accepts at most 1000 keys per request
MAX_DELETE_KEYS = 1000

_NOT_FOUND_CODES = ("404", "NoSuchKey", "NotFound")


def _to_s3_key(key: str) -> str:
    return key[1:] if key.startswith("/") else key


def _to_object_key(s3_key: str) -> str:
    return "/" + s3_key


def _is_not_found(error: ClientError) -> bool:
    return error.response.get("Error", {}).get("Code") in _NOT_FOUND_CODES


class S3ObjectClient:
    """Object client backed by a single S3 bucket."""

    def __init__(self, config: S3ClientConfig, bucket: str):
        """Initialize the S3 object client.

        Args:
            config: S3 client configuration
            bucket: Bucket holding every object of this client
        """
        self.bucket = bucket
        self.client_manager = S3ClientManager(config)
        logger.info("S3 object client initialized", bucket=bucket)

    @property
    def s3(self):
        """The underlying boto3 client."""
        return self.client_manager.client

    def get(self, key: str) -> Optional[BinaryIO]:
        # The bucket root is never an object
        if not _to_s3_key(key):
            return None

        try:
            response = self.s3.get_object(Bucket=self.bucket, Key=_to_s3_key(key))
        except ClientError as e:
            if _is_not_found(e):
                return None
            raise self._store_error("get", key, e)
        except BotoCoreError as e:
            raise self._store_error("get", key, e)

        return response["Body"]

    def stat(self, key: str) -> Optional[BlobDescriptor]:
        if not _to_s3_key(key):
            return None

        try:
            response = self.s3.head_object(Bucket=self.bucket, Key=_to_s3_key(key))
        except ClientError as e:
            if _is_not_found(e):
                return None
            raise self._store_error("stat", key, e)
        except BotoCoreError as e:
            raise self._store_error("stat", key, e)

        last_modified: Optional[datetime] = response.get("LastModified")
        # S3 objects are immutable, the current version was created when it
        # was last written
        return BlobDescriptor(
            name=key,
            size=response.get("ContentLength", 0),
            content_type=response.get("ContentType"),
            create_time=last_modified,
            update_time=last_modified,
            metadata=dict(response.get("Metadata", {})),
        )

    def exists(self, key: str) -> bool:
        return self.stat(key) is not None

    def put(
        self,
        key: str,
        data: Union[bytes, BinaryIO],
        content_type: Optional[str] = None,
    ) -> BlobDescriptor:
        s3_key = _to_s3_key(key)
        extra_args: dict[str, Any] = {}
        if content_type:
            extra_args["ContentType"] = content_type

        try:
            if isinstance(data, (bytes, bytearray)):
                self.s3.put_object(
                    Bucket=self.bucket, Key=s3_key, Body=bytes(data), **extra_args
                )
            else:
                self.s3.upload_fileobj(
                    data, self.bucket, s3_key, ExtraArgs=extra_args or None
                )
        except (BotoCoreError, ClientError) as e:
            raise self._store_error("put", key, e)

        descriptor = self.stat(key)
        if descriptor is None:
            raise StoreError(f"Object '{key}' is missing right after being written")

        logger.debug("Object written", key=key, size=descriptor.size)
        return descriptor

    def list(
        self,
        prefix: str,
        page_size: Optional[int] = None,
        immediate_children_only: bool = False,
    ) -> Iterator[BlobDescriptor]:
        kwargs: dict[str, Any] = {"Bucket": self.bucket, "Prefix": _to_s3_key(prefix)}
        if immediate_children_only:
            kwargs["Delimiter"] = "/"
        if page_size:
            kwargs["PaginationConfig"] = {"PageSize": page_size}

        try:
            paginator = self.s3.get_paginator("list_objects_v2")
            for page in paginator.paginate(**kwargs):
                for obj in page.get("Contents", []):
                    yield BlobDescriptor(
                        name=_to_object_key(obj["Key"]),
                        size=obj.get("Size", 0),
                        create_time=obj.get("LastModified"),
                        update_time=obj.get("LastModified"),
                    )

                # Grouped sub-prefixes carry no object of their own, hence no
                # timestamps
                for prefix_info in page.get("CommonPrefixes", []):
                    yield BlobDescriptor(
                        name=_to_object_key(prefix_info["Prefix"]),
                        content_type=DIRECTORY_CONTENT_TYPE,
                    )
        except (BotoCoreError, ClientError) as e:
            raise self._store_error("list", prefix, e)

    def copy(self, source_key: str, dest_key: str) -> None:
        try:
            self.s3.copy(
                {"Bucket": self.bucket, "Key": _to_s3_key(source_key)},
                self.bucket,
                _to_s3_key(dest_key),
            )
        except (BotoCoreError, ClientError) as e:
            raise self._store_error("copy", source_key, e)

        logger.debug("Object copied", source=source_key, target=dest_key)

    def delete(self, key: str) -> bool:
        # DeleteObject succeeds on missing keys, so check first to report
        # whether anything was removed
        if not self.exists(key):
            return False

        try:
            self.s3.delete_object(Bucket=self.bucket, Key=_to_s3_key(key))
        except (BotoCoreError, ClientError) as e:
            raise self._store_error("delete", key, e)

        logger.debug("Object deleted", key=key)
        return True

    def delete_many(self, keys: list[str]) -> dict[str, bool]:
        """Delete up to MAX_DELETE_KEYS objects in a single request.

        Returns:
            Mapping of object key to whether S3 confirmed its deletion; keys
            S3 did not report on are absent
        """
        try:
            response = self.s3.delete_objects(
                Bucket=self.bucket,
                Delete={
                    "Objects": [{"Key": _to_s3_key(key)} for key in keys],
                    "Quiet": False,
                },
            )
        except (BotoCoreError, ClientError) as e:
            raise self._store_error("delete_objects", keys[0], e)

        outcome: dict[str, bool] = {}
        for deleted in response.get("Deleted", []):
            outcome[_to_object_key(deleted["Key"])] = True
        for error in response.get("Errors", []):
            key = _to_object_key(error["Key"])
            outcome[key] = False
            logger.warning(
                "Object delete rejected",
                key=key,
                code=error.get("Code"),
                message=error.get("Message"),
            )
        return outcome

    def batch(self) -> "S3Batch":
        return S3Batch(self)

    def close(self) -> None:
        self.client_manager.close()

    def _store_error(self, operation: str, key: str, error: Exception) -> StoreError:
        error_msg = (
            f"S3 {operation} failed for '{key}' in bucket '{self.bucket}': {error}"
        )
        logger.error(error_msg, error=str(error))
        return StoreError(error_msg)


class S3Batch:
    """Collects copies and deletes and sends them when submitted.

    Copies run first, one by one in enqueue order; deletes follow, grouped
    into DeleteObjects requests. A delete is therefore never sent before a
    copy enqueued ahead of it. If a copy fails, its StoreError propagates and
    no delete is sent.
    """

    def __init__(self, client: S3ObjectClient):
        self._client = client
        self._copies: list[tuple[str, str, "Future[bool]"]] = []
        self._deletes: dict[str, list["Future[bool]"]] = {}

    def copy(self, source_key: str, dest_key: str) -> "Future[bool]":
        future: "Future[bool]" = Future()
        self._copies.append((source_key, dest_key, future))
        return future

    def delete(self, key: str) -> "Future[bool]":
        future: "Future[bool]" = Future()
        self._deletes.setdefault(key, []).append(future)
        return future

    def submit(self) -> None:
        logger.info(
            "Submitting batch",
            bucket=self._client.bucket,
            copies=len(self._copies),
            deletes=len(self._deletes),
        )

        copies, self._copies = self._copies, []
        for source_key, dest_key, future in copies:
            try:
                self._client.copy(source_key, dest_key)
            except StoreError as e:
                future.set_exception(e)
                raise
            future.set_result(True)

        deletes, self._deletes = self._deletes, {}
        keys = list(deletes)
        for start in range(0, len(keys), MAX_DELETE_KEYS):
            chunk = keys[start : start + MAX_DELETE_KEYS]
            outcome = self._client.delete_many(chunk)
            for key in chunk:
                if key not in outcome:
                    logger.warning("Object delete not acknowledged", key=key)
                for future in deletes[key]:
                    future.set_result(outcome.get(key, False))
