"""Object storage operations for S3-compatible services."""

from .clients import S3ClientConfig, S3ClientManager
from .s3_operations import (
    DEFAULT_CONTENT_TYPE,
    BucketInfo,
    ObjectInfo,
    StorxStorageClient,
)

__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "BucketInfo",
    "ObjectInfo",
    "S3ClientConfig",
    "S3ClientManager",
    "StorxStorageClient",
]
