"""
OSS Template

Configure S3-compatible storage once, then call simple bucket/object methods.

    from oss_template import create_oss_template

    oss = create_oss_template()
    oss.put_object("reports/q1.pdf", data, content_type="application/pdf")
    url = oss.get_presigned_object_url("reports/q1.pdf")
"""

from oss_template.config import OssSettings, get_settings, load_settings
from oss_template.exceptions import (
    BACKEND_ERRORS,
    CallerMisuseError,
    ConfigurationError,
    OssError,
)
from oss_template.factory import create_oss_template
from oss_template.logging_config import configure_logging
from oss_template.storage import (
    BucketInfo,
    HttpMethod,
    ObjectHandle,
    ObjectInfo,
    ObjectSummary,
    OssTemplate,
    PolicyType,
    PutResult,
    TimeUnit,
    get_s3_client,
)

__all__ = [
    "OssSettings",
    "get_settings",
    "load_settings",
    "OssError",
    "ConfigurationError",
    "CallerMisuseError",
    "BACKEND_ERRORS",
    "create_oss_template",
    "configure_logging",
    "OssTemplate",
    "get_s3_client",
    "HttpMethod",
    "PolicyType",
    "TimeUnit",
    "BucketInfo",
    "ObjectSummary",
    "ObjectInfo",
    "ObjectHandle",
    "PutResult",
]
