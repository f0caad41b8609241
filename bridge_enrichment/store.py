"""Attachment lookup — resolve attachment ids to readable local files."""

from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Protocol

import structlog

from bridge_schema import Attachment

logger = structlog.get_logger()


class AttachmentStore(Protocol):
    """Resolve an attachment id to an :class:`Attachment`, or ``None`` if unknown."""

    def get(self, attachment_id: str) -> Attachment | None:
        ...


class DirectoryAttachmentStore:
    """Serve attachments from a directory tree.

    The attachment id is the file's path relative to *root*.  Ids that
    escape the root (``../``, absolute paths) resolve to nothing.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def get(self, attachment_id: str) -> Attachment | None:
        path = (self._root / attachment_id).resolve()
        if not path.is_relative_to(self._root):
            logger.warning("attachment_path_outside_root", attachment_id=attachment_id)
            return None
        if not path.is_file():
            return None

        mime_type, _ = mimetypes.guess_type(path.name)
        return Attachment(
            id=attachment_id,
            file_path=str(path),
            mime_type=mime_type,
            size=path.stat().st_size,
            filename=path.name,
        )
