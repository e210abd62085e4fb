"""
OSS Template Configuration

Uses pydantic-settings to load storage configuration from environment
variables (prefix ``OSS_``) and a .env file. Settings are validated once
at load time and are immutable afterwards.
"""

from functools import lru_cache
from typing import Optional

from pydantic import ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from oss_template.exceptions import ConfigurationError


class OssSettings(BaseSettings):
    """
    Object storage settings.

    All settings can be overridden via ``OSS_*`` environment variables or a
    .env file. When ``ENABLED`` is true the endpoint and credential pair are
    required.
    """

    model_config = SettingsConfigDict(
        env_prefix="OSS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # =========================================================================
    # Gate
    # =========================================================================
    ENABLED: bool = True

    # =========================================================================
    # Backend
    # =========================================================================
    ENDPOINT: str = ""
    REGION: str = "us-east-1"
    ACCESS_KEY: str = ""
    SECRET_KEY: str = ""

    # =========================================================================
    # Buckets / URLs
    # =========================================================================
    BUCKET_NAME: Optional[str] = None  # Implicit bucket when callers omit one
    CUSTOM_DOMAIN: Optional[str] = None  # e.g. https://cdn.example.com
    # True:  https://{endpoint}/{bucket}  (MinIO, nginx proxies, S3 default)
    # False: https://{bucket}.{endpoint}  (Aliyun, Qiniu and similar)
    PATH_STYLE_ACCESS: bool = True

    # =========================================================================
    # Application
    # =========================================================================
    LOG_LEVEL: str = "INFO"

    @field_validator("BUCKET_NAME", "CUSTOM_DOMAIN", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _require_backend_when_enabled(self) -> "OssSettings":
        if not self.ENABLED:
            return self
        missing = [
            name
            for name in ("ENDPOINT", "ACCESS_KEY", "SECRET_KEY")
            if not getattr(self, name).strip()
        ]
        if missing:
            raise ValueError(f"missing required storage settings: {', '.join(missing)}")
        return self

    def get_default_bucket(self) -> str:
        """
        Return the configured default bucket.

        Raises:
            ConfigurationError: If no default bucket is configured.
        """
        if not self.BUCKET_NAME:
            raise ConfigurationError("no default bucket configured (set OSS_BUCKET_NAME)")
        return self.BUCKET_NAME


def load_settings(**overrides) -> OssSettings:
    """
    Load settings from the environment, applying keyword overrides.

    Validation failures are reported as ``ConfigurationError``.
    """
    try:
        return OssSettings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e


@lru_cache
def get_settings() -> OssSettings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return load_settings()
