"""
URL formatting for objects.

Gateway URLs are built by plain string concatenation from configuration.
Unsigned object URLs additionally quote the key, matching what the SDK
would sign.
"""

from typing import Optional
from urllib.parse import quote, urlsplit

from oss_template.exceptions import ConfigurationError


def to_virtual_host_endpoint(endpoint: str, bucket_name: str) -> str:
    """
    Rewrite ``scheme://authority`` to ``scheme://bucket.authority``.

    Raises:
        ConfigurationError: If the endpoint is not an absolute URI.
    """
    try:
        parts = urlsplit(endpoint)
    except ValueError as e:
        raise ConfigurationError(f"Invalid bucket name: {bucket_name}") from e
    if not parts.scheme or not parts.netloc:
        raise ConfigurationError(
            f"Invalid bucket name: {bucket_name} (endpoint {endpoint!r} is not an absolute URI)"
        )
    return f"{parts.scheme}://{bucket_name}.{parts.netloc}"


def build_gateway_url(
    endpoint: str,
    bucket_name: str,
    key: str,
    path_style_access: bool = True,
    custom_domain: Optional[str] = None,
) -> str:
    """
    Public URL for an object; the bucket must allow anonymous reads.

    A custom domain wins outright and the bucket name is not part of the
    result. Otherwise the bucket goes in the path or the host.
    """
    if custom_domain:
        return f"{custom_domain}/{key}"
    if path_style_access:
        return f"{endpoint}/{bucket_name}/{key}"
    return f"{to_virtual_host_endpoint(endpoint, bucket_name)}/{key}"


def build_object_url(
    endpoint: str,
    bucket_name: str,
    key: str,
    path_style_access: bool = True,
) -> str:
    """Unsigned URL of an object at the client's endpoint."""
    endpoint = endpoint.rstrip("/")
    quoted_key = quote(key, safe="/~")
    if path_style_access:
        return f"{endpoint}/{bucket_name}/{quoted_key}"
    return f"{to_virtual_host_endpoint(endpoint, bucket_name)}/{quoted_key}"
