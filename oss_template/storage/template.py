"""
OSS Template - S3-compatible Storage Facade

Wraps a boto3 S3 client with bucket/object operations, presigned URLs, and
public URL formatting. Every method that takes ``bucket_name`` falls back to
the configured default bucket when it is omitted; a missing default raises
``ConfigurationError`` before the client is called.

Backend failures (``ClientError``/``BotoCoreError``) propagate unchanged.
"""

import io
from enum import Enum
from typing import BinaryIO, Optional, Union

import structlog
from botocore.exceptions import ClientError

from oss_template.config import OssSettings
from oss_template.exceptions import CallerMisuseError
from oss_template.storage.expiry import (
    DEFAULT_EXPIRY_MINUTES,
    MAX_PRESIGN_EXPIRY,
    Expiry,
    TimeUnit,
    expiration_from,
    to_seconds,
)
from oss_template.storage.models import (
    BucketInfo,
    ObjectHandle,
    ObjectInfo,
    ObjectSummary,
    PutResult,
)
from oss_template.storage.policy import PolicyType, get_policy
from oss_template.storage.urls import build_gateway_url, build_object_url

logger = structlog.get_logger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# HeadBucket error codes
_BUCKET_MISSING_CODES = {"404", "NoSuchBucket", "NotFound"}
_BUCKET_FORBIDDEN_CODES = {"403", "AccessDenied", "Forbidden"}

ObjectData = Union[bytes, bytearray, memoryview, BinaryIO]


class HttpMethod(str, Enum):
    """Operations a presigned URL can authorize."""
    GET = "GET"
    PUT = "PUT"


_PRESIGN_CLIENT_METHODS = {
    HttpMethod.GET: "get_object",
    HttpMethod.PUT: "put_object",
}


class OssTemplate:
    """
    Facade over an S3 client.

    Holds no state beyond the frozen settings and the client handle, so a
    single instance can be shared across threads.
    """

    def __init__(self, settings: OssSettings, client):
        """
        Args:
            settings: Storage settings (default bucket, URL style, domain)
            client: boto3 S3 client, see ``get_s3_client``
        """
        self.settings = settings
        self.client = client

    def _bucket(self, bucket_name: Optional[str]) -> str:
        if bucket_name:
            return bucket_name
        return self.settings.get_default_bucket()

    # =========================================================================
    # Buckets
    # =========================================================================
    def bucket_exists(self, bucket_name: Optional[str] = None) -> bool:
        """
        Check whether a bucket exists.

        A 403 counts as existing: the name is taken, just not by us.
        """
        bucket_name = self._bucket(bucket_name)
        try:
            self.client.head_bucket(Bucket=bucket_name)
            return True
        except ClientError as e:
            code = str(e.response.get("Error", {}).get("Code", ""))
            if code in _BUCKET_MISSING_CODES:
                return False
            if code in _BUCKET_FORBIDDEN_CODES:
                return True
            raise

    def create_bucket(
        self,
        bucket_name: Optional[str] = None,
        policy_type: Optional[PolicyType] = None,
    ) -> bool:
        """
        Create a bucket unless it already exists.

        Args:
            bucket_name: Bucket to create (default bucket if omitted)
            policy_type: Optional access preset applied after creation

        Returns:
            True once the bucket exists
        """
        bucket_name = self._bucket(bucket_name)
        if not self.bucket_exists(bucket_name):
            kwargs = {"Bucket": bucket_name}
            region = self.settings.REGION
            if region and region != "us-east-1":
                kwargs["CreateBucketConfiguration"] = {"LocationConstraint": region}
            self.client.create_bucket(**kwargs)
            logger.info("bucket_created", bucket=bucket_name)

        if policy_type is not None:
            policy = get_policy(policy_type, bucket_name)
            if policy is not None:
                self.client.put_bucket_policy(Bucket=bucket_name, Policy=policy)
                logger.info("bucket_policy_applied", bucket=bucket_name, policy=PolicyType(policy_type).value)
        return True

    def list_buckets(self) -> list[BucketInfo]:
        """All buckets visible to the configured credentials."""
        response = self.client.list_buckets()
        return [BucketInfo.from_response(b) for b in response.get("Buckets", [])]

    def get_bucket(self, bucket_name: Optional[str] = None) -> Optional[BucketInfo]:
        """Find a bucket by exact name in the full listing."""
        bucket_name = self._bucket(bucket_name)
        for bucket in self.list_buckets():
            if bucket.name == bucket_name:
                return bucket
        return None

    def remove_bucket(self, bucket_name: Optional[str] = None) -> None:
        """Delete a bucket. The backend refuses non-empty buckets."""
        bucket_name = self._bucket(bucket_name)
        self.client.delete_bucket(Bucket=bucket_name)
        logger.info("bucket_deleted", bucket=bucket_name)

    delete_bucket = remove_bucket

    # =========================================================================
    # Objects
    # =========================================================================
    def list_objects_by_prefix(
        self,
        prefix: str = "",
        bucket_name: Optional[str] = None,
    ) -> list[ObjectSummary]:
        """
        List objects under ``prefix``.

        Only the first page is returned; large buckets give partial results.
        """
        bucket_name = self._bucket(bucket_name)
        response = self.client.list_objects(Bucket=bucket_name, Prefix=prefix or "")
        if response.get("IsTruncated"):
            logger.debug("object_listing_truncated", bucket=bucket_name, prefix=prefix)
        return [
            ObjectSummary.from_response(bucket_name, entry)
            for entry in response.get("Contents", [])
        ]

    def put_object(
        self,
        key: str,
        data: ObjectData,
        bucket_name: Optional[str] = None,
        size: Optional[int] = None,
        content_type: Optional[str] = None,
    ) -> PutResult:
        """
        Upload an object in a single request.

        Args:
            key: Object key
            data: bytes, or a binary file-like object
            bucket_name: Target bucket (default bucket if omitted)
            size: Content length; inferred from bytes or seekable streams
            content_type: MIME type, ``application/octet-stream`` if omitted

        Raises:
            CallerMisuseError: If ``size`` is omitted for a non-seekable stream,
                or a seekable stream is not at offset 0.
        """
        bucket_name = self._bucket(bucket_name)
        body, size = _prepare_body(data, size)
        response = self.client.put_object(
            Bucket=bucket_name,
            Key=key,
            Body=body,
            ContentLength=size,
            ContentType=content_type or DEFAULT_CONTENT_TYPE,
        )
        logger.info("object_uploaded", bucket=bucket_name, key=key, size=size)
        return PutResult.from_response(bucket_name, key, response)

    def get_object(self, key: str, bucket_name: Optional[str] = None) -> ObjectHandle:
        """
        Fetch an object. The caller must close the returned handle.
        """
        bucket_name = self._bucket(bucket_name)
        response = self.client.get_object(Bucket=bucket_name, Key=key)
        return ObjectHandle.from_response(bucket_name, key, response)

    def get_object_info(self, key: str, bucket_name: Optional[str] = None) -> ObjectInfo:
        bucket_name = self._bucket(bucket_name)
        response = self.client.head_object(Bucket=bucket_name, Key=key)
        return ObjectInfo.from_response(bucket_name, key, response)

    def remove_object(self, key: str, bucket_name: Optional[str] = None) -> None:
        bucket_name = self._bucket(bucket_name)
        self.client.delete_object(Bucket=bucket_name, Key=key)
        logger.info("object_deleted", bucket=bucket_name, key=key)

    delete_object = remove_object

    # =========================================================================
    # URLs
    # =========================================================================
    def get_object_url(self, key: str, bucket_name: Optional[str] = None) -> str:
        """
        Unsigned URL at the client's endpoint.

        Only usable when the object (or its bucket) allows public reads.
        """
        bucket_name = self._bucket(bucket_name)
        return build_object_url(
            self.client.meta.endpoint_url,
            bucket_name,
            key,
            path_style_access=self.settings.PATH_STYLE_ACCESS,
        )

    def get_presigned_url(
        self,
        key: str,
        bucket_name: Optional[str] = None,
        expires: Expiry = DEFAULT_EXPIRY_MINUTES,
        time_unit: TimeUnit = TimeUnit.MINUTES,
        method: HttpMethod = HttpMethod.GET,
    ) -> str:
        """
        Presigned URL authorizing one ``method`` request on an object.

        Args:
            key: Object key
            bucket_name: Bucket (default bucket if omitted)
            expires: Lifetime in ``time_unit`` units, or a timedelta
            time_unit: Unit for an integer ``expires``
            method: GET (download) or PUT (upload)

        The backend rejects lifetimes beyond its maximum (7 days for SigV4);
        no local limit is enforced.
        """
        bucket_name = self._bucket(bucket_name)
        method = HttpMethod(method)
        expires_in = to_seconds(expires, time_unit)
        if expires_in > MAX_PRESIGN_EXPIRY.total_seconds():
            logger.warning(
                "presign_expiry_exceeds_backend_limit",
                bucket=bucket_name,
                key=key,
                expires_in=expires_in,
            )

        url = self.client.generate_presigned_url(
            ClientMethod=_PRESIGN_CLIENT_METHODS[method],
            Params={"Bucket": bucket_name, "Key": key},
            ExpiresIn=expires_in,
            HttpMethod=method.value,
        )
        logger.debug(
            "presigned_url_generated",
            bucket=bucket_name,
            key=key,
            method=method.value,
            expires_at=expiration_from(expires_in, TimeUnit.SECONDS).isoformat(),
        )
        return url

    def get_presigned_object_url(
        self,
        key: str,
        bucket_name: Optional[str] = None,
        expires: Expiry = DEFAULT_EXPIRY_MINUTES,
        time_unit: TimeUnit = TimeUnit.MINUTES,
    ) -> str:
        """Download link, valid for 10 minutes unless told otherwise."""
        return self.get_presigned_url(key, bucket_name, expires, time_unit, HttpMethod.GET)

    def get_presigned_object_put_url(
        self,
        key: str,
        bucket_name: Optional[str] = None,
        expires: Expiry = DEFAULT_EXPIRY_MINUTES,
        time_unit: TimeUnit = TimeUnit.MINUTES,
    ) -> str:
        """Upload link, valid for 10 minutes unless told otherwise."""
        return self.get_presigned_url(key, bucket_name, expires, time_unit, HttpMethod.PUT)

    def get_gateway_url(self, key: str, bucket_name: Optional[str] = None) -> str:
        """
        Public URL through the configured gateway.

        With CUSTOM_DOMAIN set the bucket is not part of the URL (one bucket
        per domain), but it is still resolved like everywhere else.
        """
        bucket_name = self._bucket(bucket_name)
        return build_gateway_url(
            self.settings.ENDPOINT,
            bucket_name,
            key,
            path_style_access=self.settings.PATH_STYLE_ACCESS,
            custom_domain=self.settings.CUSTOM_DOMAIN,
        )


def _prepare_body(data: ObjectData, size: Optional[int]) -> tuple[Union[bytes, BinaryIO], int]:
    """
    Resolve the request body and its content length.

    Seekable streams must start at offset 0: botocore rewinds the body with
    ``seek(0)`` before retrying a request.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        body = bytes(data)
        return body, len(body) if size is None else size

    try:
        seekable = data.seekable()
    except AttributeError:
        seekable = False

    if not seekable:
        if size is None:
            raise CallerMisuseError("size is required for streams of unknown length")
        return data, size

    try:
        position = data.tell()
        if position != 0:
            raise CallerMisuseError(
                f"stream must be positioned at offset 0, not {position}; "
                "pass the remaining bytes instead"
            )
        if size is None:
            size = data.seek(0, io.SEEK_END)
            data.seek(0)
    except (OSError, io.UnsupportedOperation) as e:
        raise CallerMisuseError("size is required for streams of unknown length") from e
    return data, size
