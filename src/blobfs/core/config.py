"""Runtime settings for blobfs, read from BLOBFS_* environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide settings.

    Attributes:
        log_level: Minimum level of emitted log events
        log_json: Render log events as JSON lines, else as console text
        scheme: URI scheme of the locations handed back to callers
        otel_enabled: Install a tracer provider exporting spans
        otel_service_name: service.name resource attribute of the spans
    """

    model_config = SettingsConfigDict(env_prefix="BLOBFS_", case_sensitive=False)

    log_level: str = "INFO"
    log_json: bool = True
    scheme: str = "blobfs"
    otel_enabled: bool = False
    otel_service_name: str = "blobfs"


settings = Settings()
