"""
Result types returned by the storage facade.

These are thin views over boto3 response dicts; nothing here is persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from oss_template.exceptions import CallerMisuseError


def _strip_etag(etag: Optional[str]) -> Optional[str]:
    return etag.strip('"') if etag else etag


@dataclass(frozen=True)
class BucketInfo:
    """A bucket as reported by ListBuckets."""
    name: str
    creation_date: Optional[datetime] = None

    @classmethod
    def from_response(cls, entry: dict) -> "BucketInfo":
        return cls(name=entry["Name"], creation_date=entry.get("CreationDate"))


@dataclass(frozen=True)
class ObjectSummary:
    """One entry of a ListObjects page."""
    bucket_name: str
    key: str
    size: int = 0
    etag: Optional[str] = None
    last_modified: Optional[datetime] = None
    storage_class: Optional[str] = None

    @classmethod
    def from_response(cls, bucket_name: str, entry: dict) -> "ObjectSummary":
        return cls(
            bucket_name=bucket_name,
            key=entry["Key"],
            size=entry.get("Size", 0),
            etag=_strip_etag(entry.get("ETag")),
            last_modified=entry.get("LastModified"),
            storage_class=entry.get("StorageClass"),
        )


@dataclass(frozen=True)
class PutResult:
    """Outcome of a single PutObject call."""
    bucket_name: str
    key: str
    etag: Optional[str] = None
    version_id: Optional[str] = None

    @classmethod
    def from_response(cls, bucket_name: str, key: str, response: dict) -> "PutResult":
        return cls(
            bucket_name=bucket_name,
            key=key,
            etag=_strip_etag(response.get("ETag")),
            version_id=response.get("VersionId"),
        )


@dataclass(frozen=True)
class ObjectInfo:
    """Object metadata from HeadObject (no content)."""
    bucket_name: str
    key: str
    content_type: Optional[str] = None
    content_length: int = 0
    etag: Optional[str] = None
    last_modified: Optional[datetime] = None
    metadata: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_response(cls, bucket_name: str, key: str, response: dict) -> "ObjectInfo":
        return cls(
            bucket_name=bucket_name,
            key=key,
            content_type=response.get("ContentType"),
            content_length=response.get("ContentLength", 0),
            etag=_strip_etag(response.get("ETag")),
            last_modified=response.get("LastModified"),
            metadata=dict(response.get("Metadata") or {}),
        )


class ObjectHandle:
    """
    An object fetched with GetObject.

    The body is streamed from the backend connection. The caller owns the
    handle and must close it (or use it as a context manager) to release the
    connection. Reading after close raises ``CallerMisuseError``.
    """

    def __init__(self, info: ObjectInfo, body: Any):
        self.info = info
        self._body = body
        self._closed = False

    @classmethod
    def from_response(cls, bucket_name: str, key: str, response: dict) -> "ObjectHandle":
        return cls(ObjectInfo.from_response(bucket_name, key, response), response["Body"])

    @property
    def bucket_name(self) -> str:
        return self.info.bucket_name

    @property
    def key(self) -> str:
        return self.info.key

    @property
    def content_type(self) -> Optional[str]:
        return self.info.content_type

    @property
    def content_length(self) -> int:
        return self.info.content_length

    @property
    def closed(self) -> bool:
        return self._closed

    def read(self, amt: Optional[int] = None) -> bytes:
        if self._closed:
            raise CallerMisuseError(f"object body already closed: {self.bucket_name}/{self.key}")
        return self._body.read(amt)

    def iter_chunks(self, chunk_size: int = 32 * 1024):
        """Yield the body in chunks of at most ``chunk_size`` bytes."""
        while True:
            chunk = self.read(chunk_size)
            if not chunk:
                return
            yield chunk

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._body.close()

    def __enter__(self) -> "ObjectHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<ObjectHandle {self.bucket_name}/{self.key} ({state})>"
