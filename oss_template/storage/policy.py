"""
Canned bucket access policies.

``PolicyType`` is a closed set; each member maps to an anonymous-access
bucket policy document scoped to a single bucket.
"""

import json
from enum import Enum
from typing import Optional


class PolicyType(str, Enum):
    """Anonymous access granted to a bucket."""
    PRIVATE = "private"
    READ = "read-only"
    WRITE = "write-only"
    READ_WRITE = "read-write"


_READ_BUCKET_ACTIONS = ["s3:GetBucketLocation", "s3:ListBucket"]
_READ_OBJECT_ACTIONS = ["s3:GetObject"]
_WRITE_BUCKET_ACTIONS = ["s3:GetBucketLocation", "s3:ListBucketMultipartUploads"]
_WRITE_OBJECT_ACTIONS = [
    "s3:AbortMultipartUpload",
    "s3:DeleteObject",
    "s3:ListMultipartUploadParts",
    "s3:PutObject",
]


def _statement(actions: list[str], resource: str) -> dict:
    return {
        "Effect": "Allow",
        "Principal": {"AWS": ["*"]},
        "Action": actions,
        "Resource": [resource],
    }


def _merge(*action_lists: list[str]) -> list[str]:
    # Union preserving first-seen order
    return list(dict.fromkeys(a for actions in action_lists for a in actions))


def get_policy(policy_type: PolicyType, bucket_name: str) -> Optional[str]:
    """
    Build the bucket policy document for ``policy_type``.

    Args:
        policy_type: Access preset
        bucket_name: Bucket the policy is scoped to

    Returns:
        Policy JSON string, or None for ``PolicyType.PRIVATE`` (no policy).
    """
    policy_type = PolicyType(policy_type)
    if policy_type is PolicyType.PRIVATE:
        return None

    bucket_arn = f"arn:aws:s3:::{bucket_name}"
    objects_arn = f"arn:aws:s3:::{bucket_name}/*"

    if policy_type is PolicyType.READ:
        bucket_actions = _READ_BUCKET_ACTIONS
        object_actions = _READ_OBJECT_ACTIONS
    elif policy_type is PolicyType.WRITE:
        bucket_actions = _WRITE_BUCKET_ACTIONS
        object_actions = _WRITE_OBJECT_ACTIONS
    else:
        bucket_actions = _merge(_READ_BUCKET_ACTIONS, _WRITE_BUCKET_ACTIONS)
        object_actions = _merge(_READ_OBJECT_ACTIONS, _WRITE_OBJECT_ACTIONS)

    document = {
        "Version": "2012-10-17",
        "Statement": [
            _statement(bucket_actions, bucket_arn),
            _statement(object_actions, objects_arn),
        ],
    }
    return json.dumps(document)
