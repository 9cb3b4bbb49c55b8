"""Exception hierarchy for storx-mcp."""

from typing import Sequence


class StorxMCPError(Exception):
    """Base exception for all storx-mcp errors."""

    pass


class ConfigurationError(StorxMCPError):
    """Raised when storage credentials cannot be resolved."""

    def __init__(self, message: str, searched: Sequence[str] = ()):
        super().__init__(message)
        self.searched = list(searched)


class StorageError(StorxMCPError):
    """Raised when a call against the storage backend fails.

    The message keeps the backend's diagnostic text verbatim.
    """

    pass


class UnknownToolError(StorxMCPError):
    """Raised when a tool name is not in the registry."""

    pass


class InvalidArgumentsError(StorxMCPError):
    """Raised when tool arguments do not satisfy the tool's input schema."""

    pass
