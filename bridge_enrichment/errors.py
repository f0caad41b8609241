"""Attachment dispatch errors.

Three outcomes are kept apart so callers can report each one differently:

* no handler for the MIME type -> :class:`UnsupportedAttachmentError`
* handler found, nothing renderable -> ``None`` thumbnail (not an error)
* unexpected I/O or decoder fault -> the original exception, propagated
"""

from __future__ import annotations


class AttachmentError(Exception):
    """Base class for attachment dispatch errors."""


class UnsupportedAttachmentError(AttachmentError):
    """No registered handler matches the attachment's MIME type."""

    def __init__(self, mime_type: str | None) -> None:
        self.mime_type = mime_type
        super().__init__(f"No attachment handler for MIME type {mime_type!r}")


class ThumbnailUnavailableError(AttachmentError):
    """The file opened but holds nothing a thumbnail can be taken from."""

    def __init__(self, file_path: str, reason: str) -> None:
        self.file_path = file_path
        self.reason = reason
        super().__init__(f"No thumbnail for {file_path}: {reason}")
