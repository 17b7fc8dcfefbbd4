"""
Module: settings.py
Description: Queue manager configuration using pydantic-settings.

Reads credentials and client options from SQS_* environment variables
or a local .env file. Credentials are optional here; their absence is
reported by QueueManager at construction time.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Queue manager settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SQS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Credentials
    access_key: Optional[str] = Field(default=None, description="AWS access key id")
    secret_key: Optional[str] = Field(default=None, description="AWS secret access key")

    # Reserved for table-name scoping
    table_prefix: Optional[str] = Field(
        default=None,
        description="Optional prefix reserved for future table-name scoping"
    )

    # Client settings
    aws_region: str = Field(default="us-east-1", description="AWS region")
    endpoint_url: Optional[str] = Field(
        default=None,
        description="Override endpoint, e.g. a local SQS emulator"
    )
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator('endpoint_url')
    @classmethod
    def validate_endpoint_url(cls, v: Optional[str]) -> Optional[str]:
        """Validate endpoint override is an HTTP(S) URL."""
        if v is None:
            return v
        if not v.startswith(('http://', 'https://')):
            raise ValueError("endpoint_url must be a valid HTTP/HTTPS URL")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
