"""Tests that annotations of classes defining a 'list' method resolve.

Inside such a class body a bare 'list' names the method, so an annotation
like 'list[str]' must not be evaluated there.
"""

from typing import get_type_hints

import pytest

from blobfs.objectstorage.clients import S3ObjectClient
from blobfs.storage import BlobStorage, ListingEngine


class TestAnnotations:
    """Test type hints resolve to the builtin containers."""

    @pytest.mark.parametrize(
        "method, expected",
        [
            (
                S3ObjectClient.delete_many,
                {"keys": list[str], "return": dict[str, bool]},
            ),
            (ListingEngine.all_by_prefix, {"return": list[str]}),
            (BlobStorage.all_by_prefix, {"return": list[str]}),
            (BlobStorage.delete_by_prefix, {"return": list[str]}),
        ],
    )
    def test_container_hints(self, method, expected):
        """Test container annotations are the builtins, not the method."""
        hints = get_type_hints(method)

        for name, hint in expected.items():
            assert hints[name] == hint
