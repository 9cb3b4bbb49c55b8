"""S3 client configuration and management.

This module builds the single boto3 S3 client used to talk to the Storx
gateway (or any other S3-compatible endpoint).

Storx, like MinIO and most S3-compatible gateways, expects path-style
addressing, so the client is created with ``addressing_style="path"`` unless
configured otherwise. Credentials are always explicit; there is no profile or
default-chain lookup, since the MCP process receives its keys through the
client's configuration file.
"""

import threading
from typing import Any, Dict, Literal, Optional

import boto3
from botocore.config import Config
from pydantic import BaseModel, ConfigDict, Field

from storx_mcp.core import get_logger
from storx_mcp.core.exceptions import StorageError

logger = get_logger(__name__)


class S3ClientConfig(BaseModel):
    """Configuration for S3 client connections.

    Example:
        # Storx gateway
        config = S3ClientConfig(
            access_key_id="jx4...",
            secret_access_key="j3q...",
            endpoint_url="https://gateway.storx.io",
        )

        # Local MinIO
        config = S3ClientConfig(
            endpoint_url="http://localhost:9000",
            access_key_id="minioadmin",
            secret_access_key="minioadmin",
        )
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    access_key_id: str = Field(..., min_length=1, description="Access key ID")
    secret_access_key: str = Field(..., min_length=1, description="Secret access key")
    region_name: str = Field("us-east-1", description="Region name")
    endpoint_url: Optional[str] = Field(
        None, description="Custom S3 endpoint URL for S3-compatible services"
    )
    addressing_style: Literal["path", "virtual", "auto"] = Field(
        "path", description="Bucket addressing style"
    )


class S3ClientManager:
    """Owns the boto3 S3 client for one endpoint and set of credentials."""

    def __init__(self, config: S3ClientConfig):
        """Initialize S3 client manager.

        Args:
            config: S3 client configuration
        """
        self.config = config
        self._client = None
        self._lock = threading.Lock()
        logger.info(
            "S3 client manager initialized",
            region=config.region_name,
            endpoint=config.endpoint_url,
        )

    @property
    def client(self):
        """Get or create S3 client instance."""
        if self._client is None:
            with self._lock:
                if self._client is None:
                    self._client = self._create_client()
        return self._client

    def _create_client(self):
        """Create boto3 S3 client with the configured settings."""
        kwargs: Dict[str, Any] = {
            "region_name": self.config.region_name,
            "aws_access_key_id": self.config.access_key_id,
            "aws_secret_access_key": self.config.secret_access_key,
            "config": Config(s3={"addressing_style": self.config.addressing_style}),
        }

        if self.config.endpoint_url:
            kwargs["endpoint_url"] = self.config.endpoint_url

        # Private session; the boto3 default session is not thread-safe
        session = boto3.session.Session()
        client = session.client("s3", **kwargs)  # type: ignore
        logger.info(
            "S3 client created",
            endpoint=self.config.endpoint_url,
            addressing_style=self.config.addressing_style,
        )
        return client

    def test_connection(self) -> bool:
        """Test S3 connection by listing buckets.

        Returns:
            True if connection successful

        Raises:
            StorageError: If connection fails
        """
        try:
            self.client.list_buckets()
            logger.info("S3 connection test successful")
            return True
        except Exception as e:
            error_msg = f"S3 connection test failed: {e}"
            logger.error(error_msg)
            raise StorageError(error_msg)
