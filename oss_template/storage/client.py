"""
boto3 S3 client construction.

The endpoint URL makes the client work against MinIO and other
S3-compatible services; the addressing style follows PATH_STYLE_ACCESS.
"""

from typing import Optional

import boto3
import structlog
from botocore.config import Config

from oss_template.config import OssSettings, get_settings

logger = structlog.get_logger(__name__)


def get_s3_client(settings: Optional[OssSettings] = None):
    """
    Create and return a boto3 S3 client configured from settings.

    Retries are left at the botocore defaults; this package adds none.
    """
    if settings is None:
        settings = get_settings()

    client_config = Config(
        signature_version="s3v4",
        s3={"addressing_style": "path" if settings.PATH_STYLE_ACCESS else "virtual"},
    )

    client_kwargs = {
        "service_name": "s3",
        "aws_access_key_id": settings.ACCESS_KEY,
        "aws_secret_access_key": settings.SECRET_KEY,
        "region_name": settings.REGION,
        "config": client_config,
    }

    if settings.ENDPOINT:
        client_kwargs["endpoint_url"] = settings.ENDPOINT

    logger.debug(
        "s3_client_created",
        endpoint=settings.ENDPOINT,
        region=settings.REGION,
        path_style=settings.PATH_STYLE_ACCESS,
    )
    return boto3.client(**client_kwargs)
