"""Pydantic models for credentials, tool definitions and tool arguments."""

from typing import Any, Dict, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_ENDPOINT = "https://gateway.storx.io"
DEFAULT_REGION = "us-east-1"


class StorxCredentials(BaseModel):
    """Credentials and endpoint for the Storx gateway."""

    model_config = ConfigDict(frozen=True)

    access_key: str = Field(..., min_length=1, description="Storx access key")
    secret_key: str = Field(..., min_length=1, description="Storx secret key")
    endpoint: str = Field(default=DEFAULT_ENDPOINT, description="S3 gateway URL")
    region: str = Field(default=DEFAULT_REGION, description="Region name")
    source: Optional[str] = Field(
        default=None, description="Config file the credentials were read from"
    )


class ToolDefinition(BaseModel):
    """A tool as advertised to MCP clients."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str
    input_schema: Dict[str, Any] = Field(alias="inputSchema")

    @property
    def properties(self) -> Dict[str, Any]:
        return dict(self.input_schema.get("properties", {}))

    @property
    def required(self) -> Tuple[str, ...]:
        return tuple(self.input_schema.get("required", ()))

    @property
    def optional(self) -> Tuple[str, ...]:
        return tuple(p for p in self.properties if p not in self.required)


# Tool arguments


class ToolArguments(BaseModel):
    """Base class for tool argument models; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class ListBucketsArgs(ToolArguments):
    pass


class BucketArgs(ToolArguments):
    bucket: str


class ListObjectsArgs(BucketArgs):
    prefix: Optional[str] = None


class ObjectArgs(BucketArgs):
    key: str


class UploadObjectArgs(ObjectArgs):
    content: str
    content_type: Optional[str] = Field(default=None, alias="contentType")


class DownloadObjectArgs(ObjectArgs):
    pass


class DeleteObjectArgs(ObjectArgs):
    pass


class CreateBucketArgs(BucketArgs):
    pass


ARGUMENT_MODELS: Dict[str, Type[ToolArguments]] = {
    "list_buckets": ListBucketsArgs,
    "list_objects": ListObjectsArgs,
    "upload_object": UploadObjectArgs,
    "download_object": DownloadObjectArgs,
    "delete_object": DeleteObjectArgs,
    "create_bucket": CreateBucketArgs,
}
