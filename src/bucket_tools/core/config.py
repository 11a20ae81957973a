"""Configuration management for bucket-tools."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support.

    These cover the tool itself (logging and tracing); object storage
    connection settings live in ``bucket_tools.storage_config``.
    """

    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"
    otel_enabled: bool = False
    otel_service_name: str = "bucket-tools"

    model_config = SettingsConfigDict(
        env_prefix="BUCKET_TOOLS_",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
