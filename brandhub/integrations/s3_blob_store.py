"""
Blob storage for uploaded asset files.

S3BlobStore wraps a boto3 S3 client. Services depend on the BlobStore
protocol so tests can inject an in-memory store.

Object URLs have the form https://{bucket}.s3.{region}.amazonaws.com/{key}.
"""

import os
import logging
from typing import Optional, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel

from brandhub.errors import DependencyError

logger = logging.getLogger(__name__)


DEFAULT_PRESIGN_TTL_SECONDS = 3600


class BlobStore(Protocol):
    def put(self, data: bytes, key: str, content_type: str) -> str: ...

    def delete(self, key: str) -> None: ...

    def presign(self, key: str, ttl: int = DEFAULT_PRESIGN_TTL_SECONDS) -> str: ...


class S3Config(BaseModel):
    """Configuration for the S3 bucket holding asset files."""
    bucket: str
    region: str = "us-east-1"

    @classmethod
    def from_env(cls) -> "S3Config":
        bucket = os.getenv("AWS_S3_BUCKET")
        if not bucket:
            raise ValueError("AWS_S3_BUCKET environment variable is required")
        return cls(bucket=bucket, region=os.getenv("AWS_REGION", "us-east-1"))


class S3BlobStore:
    """
    Thin wrapper around S3 for uploads, deletes and presigned GETs.

    Credentials come from the standard AWS chain (env vars, profile, role).
    Every botocore failure is raised as DependencyError.
    """

    def __init__(self, config: Optional[S3Config] = None, client=None):
        self.config = config or S3Config.from_env()
        self.client = client or boto3.session.Session().client(
            "s3",
            region_name=self.config.region,
            config=Config(signature_version="s3v4"),
        )

    def object_url(self, key: str) -> str:
        return f"https://{self.config.bucket}.s3.{self.config.region}.amazonaws.com/{key}"

    def put(self, data: bytes, key: str, content_type: str) -> str:
        """Upload bytes and return the object URL."""
        try:
            self.client.put_object(
                Bucket=self.config.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(
                "S3 upload failed",
                extra={"bucket": self.config.bucket, "key": key, "error": str(e)},
            )
            raise DependencyError(f"S3 upload failed: {e}", dependency="s3")

        return self.object_url(key)

    def delete(self, key: str) -> None:
        try:
            self.client.delete_object(Bucket=self.config.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            logger.error(
                "S3 delete failed",
                extra={"bucket": self.config.bucket, "key": key, "error": str(e)},
            )
            raise DependencyError(f"S3 delete failed: {e}", dependency="s3")

    def presign(self, key: str, ttl: int = DEFAULT_PRESIGN_TTL_SECONDS) -> str:
        """Presigned GET URL valid for ttl seconds."""
        try:
            return self.client.generate_presigned_url(
                ClientMethod="get_object",
                Params={"Bucket": self.config.bucket, "Key": key},
                ExpiresIn=int(ttl),
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(
                "S3 presign failed",
                extra={"bucket": self.config.bucket, "key": key, "error": str(e)},
            )
            raise DependencyError(f"S3 presign failed: {e}", dependency="s3")


_blob_store: Optional[S3BlobStore] = None


def get_blob_store() -> BlobStore:
    """FastAPI dependency returning the shared S3 blob store."""
    global _blob_store
    if _blob_store is None:
        try:
            _blob_store = S3BlobStore()
        except ValueError as e:
            raise DependencyError(str(e), dependency="s3")
    return _blob_store
