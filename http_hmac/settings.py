"""Configuration management using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class HmacSettings(BaseSettings):
    """Signing and verification settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HTTP_HMAC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    timestamp_tolerance: int = Field(
        default=900,
        ge=0,
        description="Accepted clock difference for X-Authorization-Timestamp, in seconds",
    )
    realm: str = Field(
        default="",
        description="Realm placed in Authorization headers created by this process",
    )
    legacy_digest: str = Field(
        default="SHA1",
        description="HMAC digest for the legacy (Acquia) scheme",
    )
    current_digest: str = Field(
        default="SHA256",
        description="HMAC digest for the acquia-http-hmac 2.0 scheme",
    )
    legacy_headers: list[str] = Field(
        default_factory=list,
        description="Additional header names signed by the legacy scheme, in order",
    )
    allowed_signed_headers: list[str] = Field(
        default_factory=list,
        description="Header names that may be added to the 2.0 signed headers list (empty allows any)",
    )


@lru_cache
def get_settings() -> HmacSettings:
    """Get cached settings instance."""
    return HmacSettings()
