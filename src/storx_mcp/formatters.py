"""Human-readable text for successful tool calls."""

from datetime import datetime
from typing import Optional, Sequence

from .objectstorage import BucketInfo, ObjectInfo


def format_timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return "unknown"
    return value.isoformat()


def format_bucket_list(buckets: Sequence[BucketInfo]) -> str:
    lines = "\n".join(
        f"- {b.name} (created: {format_timestamp(b.created_at)})" for b in buckets
    )
    return f"Found {len(buckets)} buckets:\n{lines}"


def format_object_list(
    bucket: str, objects: Sequence[ObjectInfo], prefix: str = ""
) -> str:
    if not objects:
        text = f"No objects found in bucket '{bucket}'"
        if prefix:
            text += f" with prefix '{prefix}'"
        return text

    lines = "\n".join(
        f"- {o.key} ({o.size_bytes} bytes, "
        f"modified: {format_timestamp(o.last_modified)})"
        for o in objects
    )
    return f"Found {len(objects)} objects in '{bucket}':\n{lines}"


def format_upload(bucket: str, key: str) -> str:
    return f"Successfully uploaded '{key}' to bucket '{bucket}'"


def format_download(bucket: str, key: str, content: str) -> str:
    return f"Content of '{key}' from bucket '{bucket}':\n\n{content}"


def format_delete(bucket: str, key: str) -> str:
    return f"Successfully deleted '{key}' from bucket '{bucket}'"


def format_create_bucket(bucket: str) -> str:
    return f"Successfully created bucket '{bucket}'"
