"""Attachment handlers and the registry that dispatches to them."""

from .base import BaseAttachmentHandler
from .image import ImageHandler
from .mime import mime_type_matches
from .registry import AttachmentRegistry
from .video import VideoHandler

__all__ = [
    "AttachmentRegistry",
    "BaseAttachmentHandler",
    "ImageHandler",
    "VideoHandler",
    "mime_type_matches",
]
