"""Abstract base class for attachment handlers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bridge_schema import AttachmentMetadata, ThumbnailSize

from .mime import mime_type_matches


class BaseAttachmentHandler(ABC):
    """Produce a thumbnail and metadata for one family of MIME types.

    Handlers are stateless, so one instance may serve concurrent calls for
    different attachments.  Both operations are coroutines because decoding
    is slow; implementations push the work onto a worker thread.
    """

    @property
    @abstractmethod
    def id(self) -> str:
        """Unique identifier, e.g. ``"image-handler"``."""

    @property
    @abstractmethod
    def supported_mime_types(self) -> list[str]:
        """Exact (``video/mp4``) or wildcard (``image/*``) MIME patterns."""

    def matches(self, mime_type: str) -> bool:
        """True if any supported pattern matches *mime_type*."""
        return any(mime_type_matches(mime_type, p) for p in self.supported_mime_types)

    @abstractmethod
    async def generate_thumbnail(self, file_path: str, max_size: ThumbnailSize) -> bytes | None:
        """Return JPEG bytes fitting within *max_size*, keeping the aspect ratio.

        ``None`` means the handler applies but nothing could be rendered
        (missing or corrupt file).  Unexpected I/O faults are raised.
        """

    @abstractmethod
    async def extract_metadata(self, file_path: str) -> AttachmentMetadata:
        """Return dimensions / duration for the file at *file_path*."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, mime_types={self.supported_mime_types!r})"
