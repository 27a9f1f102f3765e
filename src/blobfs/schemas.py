"""Storage configuration schemas for blobfs."""

from typing import Literal

from pydantic import BaseModel, Field

from blobfs.objectstorage.clients import S3ClientConfig


class S3StorageConfig(BaseModel):
    """Configuration for a filesystem stored in an S3 bucket."""

    type: Literal["s3"] = "s3"
    bucket: str = Field(..., min_length=1, description="Bucket holding the files")
    access_key_id: str | None = Field(default=None, description="AWS access key ID")
    secret_access_key: str | None = Field(
        default=None, description="AWS secret access key"
    )
    session_token: str | None = Field(default=None, description="AWS session token")
    region_name: str | None = Field(default=None, description="AWS region")
    endpoint_url: str | None = Field(default=None, description="Custom S3 endpoint URL")
    aws_profile: str | None = Field(default=None, description="AWS profile name")
    addressing_style: Literal["auto", "virtual", "path"] = Field(
        default="auto", description="Use 'path' for most S3-compatible services"
    )

    def client_config(self) -> S3ClientConfig:
        """Build the S3 client configuration for this storage."""
        return S3ClientConfig(
            access_key_id=self.access_key_id,
            secret_access_key=self.secret_access_key,
            session_token=self.session_token,
            region_name=self.region_name or "us-east-1",
            endpoint_url=self.endpoint_url,
            aws_profile=self.aws_profile,
            addressing_style=self.addressing_style,
        )
