"""Attachment schema — files referenced by messages and what handlers extract from them."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class AttachmentType(str, Enum):
    """Coarse category of an attachment, derived from its MIME type."""

    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"


class Attachment(BaseModel):
    """A file attachment already resolved to readable local storage."""

    model_config = {"frozen": True}

    id: str = Field(description="Attachment identifier")
    file_path: str = Field(description="Absolute path of the file on local storage")
    mime_type: str | None = Field(
        default=None,
        description="Declared MIME type (e.g. image/jpeg); may be missing",
    )
    size: int = Field(default=0, ge=0, description="File size in bytes")
    filename: str | None = Field(default=None, description="Original filename")

    @property
    def attachment_type(self) -> AttachmentType:
        mime = (self.mime_type or "").lower()
        if mime.startswith("image/"):
            return AttachmentType.IMAGE
        if mime.startswith("video/"):
            return AttachmentType.VIDEO
        if mime.startswith("audio/"):
            return AttachmentType.AUDIO
        return AttachmentType.DOCUMENT


class AttachmentMetadata(BaseModel):
    """Metadata extracted by an attachment handler.

    Which fields are set depends on the handler: images report dimensions,
    videos dimensions and duration, audio only duration.  Every field may be
    unset.
    """

    width: int | None = Field(default=None, description="Width in pixels")
    height: int | None = Field(default=None, description="Height in pixels")
    duration_seconds: float | None = Field(default=None, description="Duration in seconds")
    thumbnail_path: str | None = Field(default=None, description="Cached thumbnail location")

    @property
    def is_empty(self) -> bool:
        return all(value is None for value in self.model_dump().values())


class ThumbnailSize(BaseModel):
    """Bounding box a thumbnail must fit in."""

    width: int = Field(gt=0)
    height: int = Field(gt=0)
