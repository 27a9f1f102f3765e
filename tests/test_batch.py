"""Tests for batch result aggregation and prefix deletion."""

from concurrent.futures import Future
from unittest.mock import Mock

import pytest
from conftest import resolved

from blobfs.core.exceptions import PartialBatchFailureError
from blobfs.objectstorage.clients import BlobDescriptor
from blobfs.storage.batch import BatchDeleteEngine, collect_failures, confirm_batch
from blobfs.storage.paths import PathResolver


def _failed(error):
    future = Future()
    future.set_exception(error)
    return future


class TestConfirmBatch:
    """Test aggregation of per-object results."""

    def test_all_confirmed(self):
        """Test a fully successful batch passes."""
        results = {"blobfs:///a": resolved(True), "blobfs:///b": resolved(True)}

        assert collect_failures(results) == []
        confirm_batch(results, "delete")

    def test_false_unresolved_and_errored_results_fail(self):
        """Test anything but a confirmed True counts as a failure."""
        results = {
            "blobfs:///ok": resolved(True),
            "blobfs:///false": resolved(False),
            "blobfs:///pending": Future(),
            "blobfs:///error": _failed(RuntimeError("boom")),
        }

        assert collect_failures(results) == [
            "blobfs:///false",
            "blobfs:///pending",
            "blobfs:///error",
        ]

    def test_partial_failure_names_every_failed_uri(self):
        """Test the raised error lists each failed URI."""
        results = {
            "blobfs:///a": resolved(False),
            "blobfs:///b": resolved(True),
            "blobfs:///c": resolved(False),
        }

        with pytest.raises(PartialBatchFailureError) as exc_info:
            confirm_batch(results, "delete")

        assert "failed on [blobfs:///a, blobfs:///c]" in str(exc_info.value)
        assert exc_info.value.failed == ["blobfs:///a", "blobfs:///c"]


class TestBatchDeleteEngine:
    """Test prefix deletion against a mocked object client."""

    def _client(self, names, outcome=True):
        client = Mock()
        client.list.return_value = iter([BlobDescriptor(name=n) for n in names])
        batch = client.batch.return_value
        batch.delete.side_effect = lambda key: resolved(
            outcome(key) if callable(outcome) else outcome
        )
        return client, batch

    def test_no_objects_skips_submission(self):
        """Test an empty prefix returns without a round trip."""
        client, batch = self._client([])
        engine = BatchDeleteEngine(client, PathResolver("blobfs"))

        assert engine.delete_by_prefix("t", "/dir/") == []
        batch.submit.assert_not_called()

    def test_deletes_everything_under_prefix(self):
        """Test every listed object is deleted in one submission."""
        client, batch = self._client(["/t/dir/", "/t/dir/a.yml", "/t/dir/sub/"])
        engine = BatchDeleteEngine(client, PathResolver("blobfs"))

        deleted = engine.delete_by_prefix("t", "/dir/")

        assert sorted(deleted) == [
            "blobfs:///dir/",
            "blobfs:///dir/a.yml",
            "blobfs:///dir/sub/",
        ]
        client.list.assert_called_once_with("/t/dir/")
        batch.submit.assert_called_once()
        assert batch.delete.call_count == 3

    def test_partial_failure(self):
        """Test partial success is reported as a failure."""
        client, _ = self._client(
            ["/t/dir/a.yml", "/t/dir/b.yml", "/t/dir/c.yml"],
            outcome=lambda key: key != "/t/dir/b.yml",
        )
        engine = BatchDeleteEngine(client, PathResolver("blobfs"))

        with pytest.raises(PartialBatchFailureError) as exc_info:
            engine.delete_by_prefix("t", "/dir/")

        assert exc_info.value.failed == ["blobfs:///dir/b.yml"]
