"""Core utilities and shared components for storx-mcp."""

from .config import settings
from .exceptions import (
    ConfigurationError,
    InvalidArgumentsError,
    StorageError,
    StorxMCPError,
    UnknownToolError,
)
from .observability import get_logger, get_tracer

__all__ = [
    "settings",
    "StorxMCPError",
    "ConfigurationError",
    "StorageError",
    "UnknownToolError",
    "InvalidArgumentsError",
    "get_logger",
    "get_tracer",
]
