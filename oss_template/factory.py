"""
Wiring for the storage facade.

``create_oss_template`` is the single entry point applications use at
startup: it honours OSS_ENABLED and builds whatever the caller did not
inject.
"""

from typing import Optional

import structlog

from oss_template.config import OssSettings, get_settings
from oss_template.storage.client import get_s3_client
from oss_template.storage.template import OssTemplate

logger = structlog.get_logger(__name__)


def create_oss_template(
    settings: Optional[OssSettings] = None,
    client=None,
) -> Optional[OssTemplate]:
    """
    Build an ``OssTemplate`` from settings.

    Args:
        settings: Storage settings; loaded from the environment if omitted
        client: Pre-built S3 client; created from settings if omitted

    Returns:
        The facade, or None when storage is disabled (no client is built).
    """
    if settings is None:
        settings = get_settings()

    if not settings.ENABLED:
        logger.info("oss_disabled")
        return None

    if client is None:
        client = get_s3_client(settings)

    logger.info(
        "oss_template_ready",
        endpoint=settings.ENDPOINT,
        default_bucket=settings.BUCKET_NAME,
        path_style=settings.PATH_STYLE_ACCESS,
    )
    return OssTemplate(settings, client)
