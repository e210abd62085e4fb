"""
Shared pytest fixtures.

Provides:
- A clean environment (no stray OSS_* variables or .env file)
- Settings factory
- OssTemplate over a MagicMock boto3 client
- Live S3 fixtures, skipped unless OSS_TEST_ENDPOINT points at a server
"""

import os
import uuid
from unittest.mock import MagicMock

import pytest

from oss_template.config import OssSettings, get_settings
from oss_template.storage.template import OssTemplate

ENDPOINT = "https://store.example.com"


# =============================================================================
# Environment isolation
# =============================================================================
@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Strip OSS_* variables and run from an empty directory (no .env)."""
    for name in list(os.environ):
        if name.upper().startswith("OSS_") and not name.upper().startswith("OSS_TEST_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Settings / template with a mocked client
# =============================================================================
@pytest.fixture()
def make_settings():
    """Build OssSettings with sane defaults, overridable per test."""
    def _make(**overrides) -> OssSettings:
        values = dict(
            ENDPOINT=ENDPOINT,
            ACCESS_KEY="test-access",
            SECRET_KEY="test-secret",
            BUCKET_NAME="default-bucket",
        )
        values.update(overrides)
        return OssSettings(**values)
    return _make


@pytest.fixture()
def mock_client():
    """MagicMock standing in for a boto3 S3 client."""
    client = MagicMock()
    client.meta.endpoint_url = ENDPOINT
    return client


@pytest.fixture()
def template(make_settings, mock_client) -> OssTemplate:
    return OssTemplate(make_settings(), mock_client)


@pytest.fixture()
def unconfigured_template(make_settings, mock_client) -> OssTemplate:
    """Template whose settings have no default bucket."""
    return OssTemplate(make_settings(BUCKET_NAME=None), mock_client)


# =============================================================================
# Live S3-compatible server (e.g. MinIO via docker)
# =============================================================================
@pytest.fixture(scope="session")
def live_settings():
    """Settings for a real server.  Skips dependent tests when unset."""
    endpoint = os.environ.get("OSS_TEST_ENDPOINT")
    if not endpoint:
        pytest.skip("OSS_TEST_ENDPOINT not set")
    return OssSettings(
        ENDPOINT=endpoint,
        REGION=os.environ.get("OSS_TEST_REGION", "us-east-1"),
        ACCESS_KEY=os.environ.get("OSS_TEST_ACCESS_KEY", "minioadmin"),
        SECRET_KEY=os.environ.get("OSS_TEST_SECRET_KEY", "minioadmin"),
        BUCKET_NAME=f"oss-test-{uuid.uuid4().hex[:12]}",
        PATH_STYLE_ACCESS=True,
    )


@pytest.fixture(scope="session")
def live_template(live_settings):
    """OssTemplate against the live server.  Removes its bucket on teardown."""
    from oss_template.factory import create_oss_template

    oss = create_oss_template(live_settings)
    try:
        oss.list_buckets()
    except Exception as exc:
        pytest.skip(f"S3 server not available: {exc}")
        return

    yield oss

    bucket = live_settings.BUCKET_NAME
    if oss.bucket_exists(bucket):
        for summary in oss.list_objects_by_prefix(bucket_name=bucket):
            oss.remove_object(summary.key, bucket_name=bucket)
        oss.remove_bucket(bucket)
