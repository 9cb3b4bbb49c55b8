"""Static catalog of the tools this server exposes."""

from typing import Dict, Iterator, Optional, Sequence, Tuple

from .schemas import ToolDefinition

_BUCKET = {"type": "string", "description": "Name of the bucket"}
_KEY = {"type": "string", "description": "Object key/filename"}

TOOL_DEFINITIONS: Tuple[ToolDefinition, ...] = (
    ToolDefinition(
        name="list_buckets",
        description="List all buckets in Storx storage",
        inputSchema={"type": "object", "properties": {}},
    ),
    ToolDefinition(
        name="list_objects",
        description="List objects in a specific bucket",
        inputSchema={
            "type": "object",
            "properties": {
                "bucket": {
                    "type": "string",
                    "description": "Name of the bucket to list objects from",
                },
                "prefix": {
                    "type": "string",
                    "description": "Optional prefix to filter objects",
                },
            },
            "required": ["bucket"],
        },
    ),
    ToolDefinition(
        name="upload_object",
        description="Upload an object to Storx storage",
        inputSchema={
            "type": "object",
            "properties": {
                "bucket": _BUCKET,
                "key": _KEY,
                "content": {
                    "type": "string",
                    "description": "Content to upload (text)",
                },
                "contentType": {
                    "type": "string",
                    "description": "MIME type of the content",
                    "default": "text/plain",
                },
            },
            "required": ["bucket", "key", "content"],
        },
    ),
    ToolDefinition(
        name="download_object",
        description="Download an object from Storx storage",
        inputSchema={
            "type": "object",
            "properties": {"bucket": _BUCKET, "key": _KEY},
            "required": ["bucket", "key"],
        },
    ),
    ToolDefinition(
        name="delete_object",
        description="Delete an object from Storx storage",
        inputSchema={
            "type": "object",
            "properties": {
                "bucket": _BUCKET,
                "key": {"type": "string", "description": "Object key/filename to delete"},
            },
            "required": ["bucket", "key"],
        },
    ),
    ToolDefinition(
        name="create_bucket",
        description="Create a new bucket in Storx storage",
        inputSchema={
            "type": "object",
            "properties": {
                "bucket": {
                    "type": "string",
                    "description": "Name of the bucket to create",
                },
            },
            "required": ["bucket"],
        },
    ),
)


class ToolRegistry:
    """Read-only lookup table of tool definitions, in catalog order."""

    def __init__(self, definitions: Sequence[ToolDefinition] = TOOL_DEFINITIONS):
        self._definitions = tuple(definitions)
        self._by_name: Dict[str, ToolDefinition] = {}
        for definition in self._definitions:
            if definition.name in self._by_name:
                raise ValueError(f"Duplicate tool name: {definition.name}")
            self._by_name[definition.name] = definition

    def list(self) -> Tuple[ToolDefinition, ...]:
        return self._definitions

    def get(self, name: str) -> Optional[ToolDefinition]:
        return self._by_name.get(name)

    def names(self) -> Tuple[str, ...]:
        return tuple(d.name for d in self._definitions)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)


default_registry = ToolRegistry()
