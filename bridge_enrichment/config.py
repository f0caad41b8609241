"""Enrichment service configuration loaded from environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings

from bridge_schema import ThumbnailSize

DEFAULT_CODE_CONTEXT_WORDS = [
    "code",
    "verify",
    "verification",
    "confirm",
    "otp",
    "pin",
    "password",
    "passcode",
    "2fa",
    "mfa",
    "security",
    "authentication",
    "login",
    "sign in",
]


class ProcessorConfig(BaseSettings):
    """Settings for the message processors."""

    model_config = {"env_prefix": "PROCESSOR_"}

    phone_region: str = Field(
        default="US",
        description="Default region (ISO 3166-1 alpha-2) for numbers written without a country code",
    )
    phone_leniency: str = Field(
        default="possible",
        description="phonenumbers matcher leniency: possible, valid, strict_grouping, exact_grouping",
    )
    emoji_max_count: int = Field(
        default=5,
        ge=1,
        description="Largest number of emoji still rendered as an enlarged emoji-only message",
    )
    code_context_words: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CODE_CONTEXT_WORDS),
        description="Words that mark a message as carrying a verification code",
    )


class ThumbnailConfig(BaseSettings):
    """Settings for thumbnail generation and delivery."""

    model_config = {"env_prefix": "THUMBNAIL_"}

    max_width: int = Field(default=300, gt=0, description="Default thumbnail bounding width")
    max_height: int = Field(default=300, gt=0, description="Default thumbnail bounding height")
    quality: int = Field(default=70, ge=1, le=95, description="JPEG quality of encoded thumbnails")
    allow_upscale: bool = Field(
        default=False,
        description="Enlarge images smaller than the requested bounding box",
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Wall-clock bound on one handler invocation",
    )
    cache_max_age_seconds: int = Field(
        default=86400,
        description="Cache-Control max-age for thumbnail responses",
    )

    @property
    def default_size(self) -> ThumbnailSize:
        return ThumbnailSize(width=self.max_width, height=self.max_height)


class EnrichmentConfig(BaseSettings):
    """Top-level enrichment service configuration."""

    model_config = {"env_prefix": "ENRICHMENT_"}

    host: str = Field(default="0.0.0.0", description="Bind address of the API server")
    port: int = Field(default=8080, description="Bind port of the API server")
    attachments_root: str = Field(
        default="attachments",
        description="Directory attachment ids are resolved against",
    )
    log_level: str = Field(default="INFO", description="Log level")
    log_json: bool = Field(
        default=True,
        description="Use JSON log output (True for prod, False for dev)",
    )
    processors: ProcessorConfig = Field(default_factory=ProcessorConfig)
    thumbnail: ThumbnailConfig = Field(default_factory=ThumbnailConfig)
