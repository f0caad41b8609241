"""Video handler — first-frame thumbnails, duration and dimensions via PyAV."""

from __future__ import annotations

import asyncio

import av
import av.error
import structlog
from PIL import Image

from bridge_schema import AttachmentMetadata, ThumbnailSize

from ..errors import ThumbnailUnavailableError
from .base import BaseAttachmentHandler
from .imaging import encode_jpeg

logger = structlog.get_logger()


class VideoHandler(BaseAttachmentHandler):
    """Handle MP4, QuickTime, Matroska and anything else FFmpeg can demux."""

    def __init__(self, *, quality: int = 70) -> None:
        self._quality = quality

    @property
    def id(self) -> str:
        return "video-handler"

    @property
    def supported_mime_types(self) -> list[str]:
        return ["video/*"]

    async def generate_thumbnail(self, file_path: str, max_size: ThumbnailSize) -> bytes | None:
        return await asyncio.to_thread(self._render_thumbnail, file_path, max_size)

    async def extract_metadata(self, file_path: str) -> AttachmentMetadata:
        return await asyncio.to_thread(self._read_metadata, file_path)

    # ------------------------------------------------------------------
    # Blocking work (runs on a worker thread)
    # ------------------------------------------------------------------

    def _render_thumbnail(self, file_path: str, max_size: ThumbnailSize) -> bytes | None:
        container = self._open(file_path)
        if container is None:
            return None

        with container:
            if not container.streams.video:
                raise ThumbnailUnavailableError(file_path, "no video stream")
            stream = container.streams.video[0]
            try:
                frame = next(container.decode(stream), None)
            except av.error.InvalidDataError as exc:
                logger.warning("video_decode_failed", path=file_path, error=str(exc))
                return None
            if frame is None:
                raise ThumbnailUnavailableError(file_path, "no decodable frame")

            image = frame.to_image()
            rotation = frame.rotation

        # Display matrix rotation is counter-clockwise, as is Image.rotate
        if rotation:
            image = image.rotate(rotation, expand=True)
        image.thumbnail((max_size.width, max_size.height), Image.Resampling.LANCZOS)

        logger.debug(
            "video_thumbnail_rendered",
            path=file_path,
            rotation=rotation,
            thumbnail=f"{image.width}x{image.height}",
        )
        return encode_jpeg(image, self._quality)

    def _read_metadata(self, file_path: str) -> AttachmentMetadata:
        container = self._open(file_path)
        if container is None:
            return AttachmentMetadata()

        with container:
            duration: float | None = None
            if container.duration is not None:
                duration = container.duration / av.time_base

            width: int | None = None
            height: int | None = None
            if container.streams.video:
                stream = container.streams.video[0]
                width = stream.codec_context.width or None
                height = stream.codec_context.height or None
                if duration is None and stream.duration is not None and stream.time_base:
                    duration = float(stream.duration * stream.time_base)

        return AttachmentMetadata(width=width, height=height, duration_seconds=duration)

    @staticmethod
    def _open(file_path: str) -> av.container.InputContainer | None:
        """Open the media container, or return ``None`` if missing or not media.

        Other FFmpeg and OS errors propagate.
        """
        try:
            return av.open(file_path)
        except FileNotFoundError:
            logger.info("attachment_file_missing", path=file_path)
            return None
        except av.error.InvalidDataError:
            logger.info("video_container_unreadable", path=file_path)
            return None
