"""
Storage module for S3-compatible object storage.

Exports:
    OssTemplate: Bucket/object facade over a boto3 client
    get_s3_client: Build a boto3 S3 client from settings
    HttpMethod: Presigned URL method (GET/PUT)
    PolicyType: Canned bucket access presets
    TimeUnit: Units for presigned URL expiry
    BucketInfo, ObjectSummary, ObjectInfo, ObjectHandle, PutResult: Result types
"""

from oss_template.storage.client import get_s3_client
from oss_template.storage.expiry import TimeUnit
from oss_template.storage.models import (
    BucketInfo,
    ObjectHandle,
    ObjectInfo,
    ObjectSummary,
    PutResult,
)
from oss_template.storage.policy import PolicyType, get_policy
from oss_template.storage.template import HttpMethod, OssTemplate

__all__ = [
    "OssTemplate",
    "get_s3_client",
    "HttpMethod",
    "PolicyType",
    "get_policy",
    "TimeUnit",
    "BucketInfo",
    "ObjectSummary",
    "ObjectInfo",
    "ObjectHandle",
    "PutResult",
]
