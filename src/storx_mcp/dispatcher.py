"""Tool dispatch: validation, storage call, formatting and error translation.

A dispatch never raises for expected failures. It returns either a
``ToolCallResult`` or a ``ToolFailure`` carrying an ``ErrorKind`` tag and the
original diagnostic message. The MCP server turns failures into protocol
errors at the transport boundary.

Example:
    >>> storage = StorxStorageClient.from_config(S3ClientConfig(...))
    >>> outcome = Dispatcher(storage).dispatch("list_buckets", {})
    >>> if isinstance(outcome, ToolFailure):
    ...     outcome.raise_for_error()
    >>> print(outcome.text)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Mapping, NoReturn, Optional, Tuple, Union

from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND, ErrorData
from opentelemetry.trace import Status, StatusCode
from pydantic import ValidationError

from .core import get_logger, get_tracer
from .core.exceptions import InvalidArgumentsError, StorageError, UnknownToolError
from .formatters import (
    format_bucket_list,
    format_create_bucket,
    format_delete,
    format_download,
    format_object_list,
    format_upload,
)
from .objectstorage import DEFAULT_CONTENT_TYPE, StorxStorageClient
from .registry import ToolRegistry, default_registry
from .schemas import (
    ARGUMENT_MODELS,
    CreateBucketArgs,
    DeleteObjectArgs,
    DownloadObjectArgs,
    ListBucketsArgs,
    ListObjectsArgs,
    UploadObjectArgs,
)

logger = get_logger(__name__)
tracer = get_tracer(__name__)

FAILURE_PREFIX = "Tool execution failed: "


class ErrorKind(str, Enum):
    """Failure categories of a tool call."""

    UNKNOWN_TOOL = "unknown_tool"
    INVALID_ARGUMENTS = "invalid_arguments"
    STORAGE_ERROR = "storage_error"


_ERROR_CODES = {
    ErrorKind.UNKNOWN_TOOL: METHOD_NOT_FOUND,
    ErrorKind.INVALID_ARGUMENTS: INVALID_PARAMS,
    ErrorKind.STORAGE_ERROR: INTERNAL_ERROR,
}

_EXCEPTIONS = {
    ErrorKind.UNKNOWN_TOOL: UnknownToolError,
    ErrorKind.INVALID_ARGUMENTS: InvalidArgumentsError,
    ErrorKind.STORAGE_ERROR: StorageError,
}


@dataclass(frozen=True)
class TextContent:
    text: str
    type: str = "text"


@dataclass(frozen=True)
class ToolCallResult:
    """Successful outcome of a tool call."""

    content: Tuple[TextContent, ...]

    @classmethod
    def from_text(cls, text: str) -> "ToolCallResult":
        return cls(content=(TextContent(text=text),))

    @property
    def text(self) -> str:
        return "\n".join(c.text for c in self.content)


@dataclass(frozen=True)
class ToolFailure:
    """Failed outcome of a tool call."""

    kind: ErrorKind
    message: str
    tool: str
    fields: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def error_code(self) -> int:
        return _ERROR_CODES[self.kind]

    @property
    def protocol_message(self) -> str:
        if self.kind is ErrorKind.UNKNOWN_TOOL:
            return self.message
        return FAILURE_PREFIX + self.message

    def to_error_data(self) -> ErrorData:
        data: Dict[str, Any] = {"tool": self.tool, "kind": self.kind.value}
        if self.fields:
            data["fields"] = list(self.fields)
        return ErrorData(code=self.error_code, message=self.protocol_message, data=data)

    def raise_for_protocol(self) -> NoReturn:
        raise McpError(self.to_error_data())

    def raise_for_error(self) -> NoReturn:
        raise _EXCEPTIONS[self.kind](self.message)


DispatchOutcome = Union[ToolCallResult, ToolFailure]


def _describe_validation_error(tool: str, exc: ValidationError) -> Tuple[str, Tuple[str, ...]]:
    """Build a message naming missing and malformed arguments."""
    missing = []
    invalid = {}
    for error in exc.errors():
        name = ".".join(str(part) for part in error["loc"]) or "arguments"
        if error["type"] == "missing":
            missing.append(name)
        else:
            invalid[name] = error["msg"]

    parts = []
    if missing:
        parts.append(
            f"Missing required argument(s) for '{tool}': {', '.join(missing)}"
        )
    if invalid:
        details = ", ".join(f"{name} ({msg})" for name, msg in invalid.items())
        parts.append(f"Invalid argument(s) for '{tool}': {details}")

    return "; ".join(parts), tuple(missing) + tuple(invalid)


class Dispatcher:
    """Maps tool calls onto the storage client.

    Holds no per-call state; one instance serves every request.
    """

    def __init__(
        self,
        storage: StorxStorageClient,
        registry: ToolRegistry = default_registry,
    ):
        self.storage = storage
        self.registry = registry
        self._handlers: Dict[str, Callable[[Any], str]] = {
            "list_buckets": self._list_buckets,
            "list_objects": self._list_objects,
            "upload_object": self._upload_object,
            "download_object": self._download_object,
            "delete_object": self._delete_object,
            "create_bucket": self._create_bucket,
        }

    def dispatch(
        self, name: str, arguments: Optional[Mapping[str, Any]] = None
    ) -> DispatchOutcome:
        """Run one tool call and return its result or failure."""
        with tracer.start_as_current_span(f"tool.{name}") as span:
            span.set_attribute("tool.name", name)
            outcome = self._dispatch(name, arguments)
            if isinstance(outcome, ToolFailure):
                span.set_attribute("tool.error_kind", outcome.kind.value)
                span.set_status(Status(StatusCode.ERROR, outcome.message))
            return outcome

    def _dispatch(
        self, name: str, arguments: Optional[Mapping[str, Any]]
    ) -> DispatchOutcome:
        log = logger.bind(tool=name)

        definition = self.registry.get(name)
        handler = self._handlers.get(name)
        if definition is None or handler is None:
            log.warning("tool_call_failed", kind=ErrorKind.UNKNOWN_TOOL.value)
            return ToolFailure(
                kind=ErrorKind.UNKNOWN_TOOL, message=f"Unknown tool: {name}", tool=name
            )

        log.info("tool_call_started")

        try:
            args = ARGUMENT_MODELS[name].model_validate(dict(arguments or {}))
        except ValidationError as e:
            message, fields = _describe_validation_error(name, e)
            log.warning(
                "tool_call_failed",
                kind=ErrorKind.INVALID_ARGUMENTS.value,
                fields=list(fields),
            )
            return ToolFailure(
                kind=ErrorKind.INVALID_ARGUMENTS,
                message=message,
                tool=name,
                fields=fields,
            )

        try:
            text = handler(args)
        except StorageError as e:
            log.error("tool_call_failed", kind=ErrorKind.STORAGE_ERROR.value, error=str(e))
            return ToolFailure(kind=ErrorKind.STORAGE_ERROR, message=str(e), tool=name)

        log.info("tool_call_succeeded")
        return ToolCallResult.from_text(text)

    # Handlers

    def _list_buckets(self, args: ListBucketsArgs) -> str:
        return format_bucket_list(self.storage.list_buckets())

    def _list_objects(self, args: ListObjectsArgs) -> str:
        prefix = args.prefix or ""
        objects = self.storage.list_objects(args.bucket, prefix=prefix)
        return format_object_list(args.bucket, objects, prefix=prefix)

    def _upload_object(self, args: UploadObjectArgs) -> str:
        self.storage.put_object(
            args.bucket,
            args.key,
            args.content,
            content_type=args.content_type or DEFAULT_CONTENT_TYPE,
        )
        return format_upload(args.bucket, args.key)

    def _download_object(self, args: DownloadObjectArgs) -> str:
        content = self.storage.get_object(args.bucket, args.key)
        return format_download(args.bucket, args.key, content)

    def _delete_object(self, args: DeleteObjectArgs) -> str:
        self.storage.delete_object(args.bucket, args.key)
        return format_delete(args.bucket, args.key)

    def _create_bucket(self, args: CreateBucketArgs) -> str:
        self.storage.create_bucket(args.bucket)
        return format_create_bucket(args.bucket)


__all__ = [
    "Dispatcher",
    "DispatchOutcome",
    "ErrorKind",
    "FAILURE_PREFIX",
    "TextContent",
    "ToolCallResult",
    "ToolFailure",
]
