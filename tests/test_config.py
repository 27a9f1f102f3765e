"""Tests for environment-driven settings."""

from blobfs.core.config import Settings
from blobfs.storage.paths import PathResolver


class TestSettings:
    """Test settings loading."""

    def test_defaults(self, monkeypatch):
        """Test the defaults without any environment."""
        for name in ["BLOBFS_SCHEME", "BLOBFS_LOG_LEVEL", "BLOBFS_OTEL_ENABLED"]:
            monkeypatch.delenv(name, raising=False)

        settings = Settings()

        assert settings.scheme == "blobfs"
        assert settings.log_level == "INFO"
        assert settings.otel_enabled is False

    def test_environment_overrides(self, monkeypatch):
        """Test BLOBFS_ variables override the defaults."""
        monkeypatch.setenv("BLOBFS_SCHEME", "files")
        monkeypatch.setenv("BLOBFS_LOG_JSON", "false")

        settings = Settings()

        assert settings.scheme == "files"
        assert settings.log_json is False

    def test_resolver_scheme(self):
        """Test an explicit scheme wins over the settings."""
        assert PathResolver("files").to_uri("/a") == "files:///a"
