"""
OSS Template Exceptions

Errors raised locally by the storage facade. Anything the backend reports
(auth failures, missing objects, network errors) is raised by botocore and
passes through untouched; ``BACKEND_ERRORS`` names those types for callers.
"""

from botocore.exceptions import BotoCoreError, ClientError


class OssError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(OssError, ValueError):
    """
    Storage configuration is missing or unusable.

    Raised for a missing default bucket, a malformed endpoint URI, or
    invalid settings. Never retryable.
    """


class CallerMisuseError(OssError, ValueError):
    """The caller used the API in a way it cannot honour (e.g. reading a closed body)."""


BACKEND_ERRORS = (ClientError, BotoCoreError)
