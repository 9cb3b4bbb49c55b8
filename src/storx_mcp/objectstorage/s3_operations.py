"""Object storage operations backing the MCP tools.

Each method of ``StorxStorageClient`` performs exactly one S3 call and returns
decoded Python values, never raw boto3 responses. Any failure is re-raised as
``StorageError`` with the backend's message kept as a suffix.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from storx_mcp.core import get_logger
from storx_mcp.core.exceptions import StorageError

from .clients import S3ClientConfig, S3ClientManager

logger = get_logger(__name__)

DEFAULT_CONTENT_TYPE = "text/plain"


@dataclass(frozen=True)
class BucketInfo:
    """A bucket as reported by the backend."""

    name: str
    created_at: Optional[datetime]


@dataclass(frozen=True)
class ObjectInfo:
    """An object entry from a bucket listing."""

    key: str
    size_bytes: int
    last_modified: Optional[datetime]


class StorxStorageClient:
    """Thin typed wrapper over the S3 client, one method per tool."""

    def __init__(self, manager: S3ClientManager):
        self.manager = manager

    @classmethod
    def from_config(cls, config: S3ClientConfig) -> "StorxStorageClient":
        return cls(S3ClientManager(config))

    @property
    def client(self):
        return self.manager.client

    def list_buckets(self) -> List[BucketInfo]:
        """List all buckets visible to the configured credentials."""
        logger.info("Listing buckets")

        try:
            response = self.client.list_buckets()
        except Exception as e:
            error_msg = f"Failed to list buckets: {e}"
            logger.error(error_msg, error=str(e))
            raise StorageError(error_msg)

        buckets = [
            BucketInfo(name=b["Name"], created_at=b.get("CreationDate"))
            for b in response.get("Buckets", [])
        ]
        logger.info("Buckets listed", bucket_count=len(buckets))
        return buckets

    def list_objects(self, bucket: str, prefix: str = "") -> List[ObjectInfo]:
        """List objects in a bucket from a single ``list_objects_v2`` call.

        Only the first page is returned. An empty list is a valid result.
        """
        logger.info("Listing objects", bucket=bucket, prefix=prefix)

        try:
            response = self.client.list_objects_v2(Bucket=bucket, Prefix=prefix)
        except Exception as e:
            error_msg = f"Failed to list objects: {e}"
            logger.error(error_msg, bucket=bucket, error=str(e))
            raise StorageError(error_msg)

        objects = [
            ObjectInfo(
                key=obj["Key"],
                size_bytes=obj.get("Size", 0),
                last_modified=obj.get("LastModified"),
            )
            for obj in response.get("Contents", [])
        ]
        logger.info(
            "Objects listed", bucket=bucket, prefix=prefix, object_count=len(objects)
        )
        return objects

    def put_object(
        self,
        bucket: str,
        key: str,
        content: str,
        content_type: str = DEFAULT_CONTENT_TYPE,
    ) -> None:
        """Upload text content, overwriting any existing object at ``key``."""
        logger.info("Uploading object", bucket=bucket, key=key, content_type=content_type)

        try:
            self.client.put_object(
                Bucket=bucket,
                Key=key,
                Body=content.encode("utf-8"),
                ContentType=content_type,
            )
        except Exception as e:
            error_msg = f"Failed to upload object: {e}"
            logger.error(error_msg, bucket=bucket, key=key, error=str(e))
            raise StorageError(error_msg)

        logger.info("Object uploaded", bucket=bucket, key=key)

    def get_object(self, bucket: str, key: str) -> str:
        """Download an object and decode it as UTF-8 text.

        Binary objects are not supported and fail with ``StorageError``.
        """
        logger.info("Downloading object", bucket=bucket, key=key)

        try:
            response = self.client.get_object(Bucket=bucket, Key=key)
            with response["Body"] as stream:
                body = stream.read()
        except Exception as e:
            error_msg = f"Failed to download object: {e}"
            logger.error(error_msg, bucket=bucket, key=key, error=str(e))
            raise StorageError(error_msg)

        try:
            content = body.decode("utf-8")
        except UnicodeDecodeError as e:
            error_msg = (
                f"Failed to download object: '{key}' is not UTF-8 text "
                f"and binary content is not supported ({e})"
            )
            logger.warning(error_msg, bucket=bucket, key=key)
            raise StorageError(error_msg)

        logger.info("Object downloaded", bucket=bucket, key=key, size_bytes=len(body))
        return content

    def delete_object(self, bucket: str, key: str) -> None:
        """Delete an object; the backend decides what a missing key means."""
        logger.info("Deleting object", bucket=bucket, key=key)

        try:
            self.client.delete_object(Bucket=bucket, Key=key)
        except Exception as e:
            error_msg = f"Failed to delete object: {e}"
            logger.error(error_msg, bucket=bucket, key=key, error=str(e))
            raise StorageError(error_msg)

        logger.info("Object deleted", bucket=bucket, key=key)

    def create_bucket(self, name: str) -> None:
        """Create a bucket. Name rules are enforced by the backend only."""
        logger.info("Creating bucket", bucket=name)

        try:
            self.client.create_bucket(Bucket=name)
        except Exception as e:
            error_msg = f"Failed to create bucket: {e}"
            logger.error(error_msg, bucket=name, error=str(e))
            raise StorageError(error_msg)

        logger.info("Bucket created", bucket=name)
