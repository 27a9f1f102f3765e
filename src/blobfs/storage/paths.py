"""Translation between caller-visible URIs and object keys.

An object key is '/' + tenant + path when a tenant is given, or just the
path otherwise. Callers see scheme URIs such as 'blobfs:///dir/file.yml'
that never include the tenant. Their path is percent-encoded, so any key
survives the round trip through a URI.
"""

import re
from typing import Optional
from urllib.parse import quote, unquote, urlsplit

from blobfs.core import get_logger, settings
from blobfs.core.exceptions import InvalidPathError, ValidationError

logger = get_logger(__name__)

_SCHEME_PREFIX = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")


class PathResolver:
    """Canonicalizes tenant-scoped URIs into object keys and back."""

    def __init__(self, scheme: Optional[str] = None):
        self.scheme = scheme or settings.scheme

    @staticmethod
    def uri_path(uri: Optional[str]) -> str:
        """Return the path component of a URI, always starting with '/'.

        Only input starting with '<scheme>://' is parsed as a URI: its
        authority, query and fragment are dropped and the path is
        percent-decoded. Anything else is a bare path taken literally, so
        '#', '?' and ';' are ordinary file name characters there.

        Args:
            uri: Scheme URI ('blobfs:///a/b') or bare path ('/a/b', 'a/b')

        Raises:
            InvalidPathError: If the path contains '..'
        """
        if not uri:
            return "/"

        if _SCHEME_PREFIX.match(uri):
            path = unquote(urlsplit(uri).path)
        else:
            path = uri

        # The object store would take '..' as a literal key segment and
        # quietly miss, so refuse it outright
        if ".." in uri or ".." in path:
            raise InvalidPathError(
                f"Files must be accessed with their full path, relative '..' "
                f"segments are not allowed: {uri}"
            )

        if not path.startswith("/"):
            path = "/" + path
        return path

    def resolve(self, tenant_id: Optional[str], uri: Optional[str]) -> str:
        """Resolve a tenant and URI into an object key.

        Args:
            tenant_id: Tenant namespace, or None for the shared namespace
            uri: URI or path of the file or directory

        Returns:
            Object key for the location

        Raises:
            InvalidPathError: If the URI contains '..'
            ValidationError: If the tenant identifier is malformed
        """
        path = self.uri_path(uri)

        if tenant_id is None:
            return path

        if not tenant_id or "/" in tenant_id or ".." in tenant_id:
            raise ValidationError(f"Invalid tenant identifier: {tenant_id!r}")

        return "/" + tenant_id + path

    def to_uri(self, path: str) -> str:
        """Render a tenant-relative path as a percent-encoded scheme URI."""
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.scheme}://{quote(path, safe='/')}"

    def key_to_uri(self, tenant_id: Optional[str], key: str) -> str:
        """Translate an object key back into the caller-visible URI."""
        if tenant_id is not None:
            tenant_prefix = "/" + tenant_id
            if key.startswith(tenant_prefix + "/"):
                key = key[len(tenant_prefix) :]
        return self.to_uri(key)
