"""An MCP server for Storx decentralized object storage.

This package exposes bucket and object management on the Storx S3-compatible
gateway as Model Context Protocol tools. Each tool call is validated against
its input schema, mapped onto one S3 call, and answered with human-readable
text.

Key Features:
    - Six tools: list_buckets, list_objects, upload_object,
      download_object, delete_object, create_bucket
    - Typed failures mapped onto MCP protocol error codes
    - Credential discovery from claude_desktop_config.json
    - CLI for serving, inspection and one-off calls

Recommended Usage:
    Run the server from an MCP client configuration::

        storx-mcp serve

    Or drive the dispatcher directly:

    >>> from storx_mcp import Dispatcher, StorxStorageClient, load_credentials
    >>> from storx_mcp.storage_config import to_client_config
    >>> client_config = to_client_config(load_credentials())
    >>> dispatcher = Dispatcher(StorxStorageClient.from_config(client_config))
    >>> outcome = dispatcher.dispatch("list_buckets", {})
"""

__version__ = "0.1.0"

from .dispatcher import (
    Dispatcher,
    DispatchOutcome,
    ErrorKind,
    ToolCallResult,
    ToolFailure,
)
from .objectstorage import (
    BucketInfo,
    ObjectInfo,
    S3ClientConfig,
    S3ClientManager,
    StorxStorageClient,
)
from .registry import ToolRegistry, default_registry
from .schemas import StorxCredentials, ToolDefinition
from .storage_config import load_credentials

__all__ = [
    # Dispatch
    "Dispatcher",
    "DispatchOutcome",
    "ErrorKind",
    "ToolCallResult",
    "ToolFailure",
    # Registry
    "ToolDefinition",
    "ToolRegistry",
    "default_registry",
    # Storage
    "BucketInfo",
    "ObjectInfo",
    "S3ClientConfig",
    "S3ClientManager",
    "StorxStorageClient",
    # Configuration
    "StorxCredentials",
    "load_credentials",
]
