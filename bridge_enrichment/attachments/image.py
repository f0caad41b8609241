"""Image handler — JPEG thumbnails and dimensions for every ``image/*`` type."""

from __future__ import annotations

import asyncio

import structlog
from PIL import ExifTags, Image, ImageOps, UnidentifiedImageError

from bridge_schema import AttachmentMetadata, ThumbnailSize

from .base import BaseAttachmentHandler
from .imaging import encode_jpeg, scale_to_fit

logger = structlog.get_logger()

# EXIF orientations that rotate the picture by 90 or 270 degrees
_TRANSPOSED_ORIENTATIONS = {5, 6, 7, 8}


class ImageHandler(BaseAttachmentHandler):
    """Handle JPEG, PNG, GIF, HEIC (with a Pillow plugin), WebP, ..."""

    def __init__(self, *, quality: int = 70, allow_upscale: bool = False) -> None:
        self._quality = quality
        self._allow_upscale = allow_upscale

    @property
    def id(self) -> str:
        return "image-handler"

    @property
    def supported_mime_types(self) -> list[str]:
        return ["image/*"]

    async def generate_thumbnail(self, file_path: str, max_size: ThumbnailSize) -> bytes | None:
        return await asyncio.to_thread(self._render_thumbnail, file_path, max_size)

    async def extract_metadata(self, file_path: str) -> AttachmentMetadata:
        return await asyncio.to_thread(self._read_metadata, file_path)

    # ------------------------------------------------------------------
    # Blocking work (runs on a worker thread)
    # ------------------------------------------------------------------

    def _render_thumbnail(self, file_path: str, max_size: ThumbnailSize) -> bytes | None:
        image = self._open(file_path)
        if image is None:
            return None

        with image:
            try:
                image.load()
            except OSError as exc:
                logger.warning("image_decode_failed", path=file_path, error=str(exc))
                return None

            oriented = ImageOps.exif_transpose(image)
            size = scale_to_fit(
                oriented.width,
                oriented.height,
                max_size,
                allow_upscale=self._allow_upscale,
            )
            scaled = oriented.resize(size, Image.Resampling.LANCZOS)

        logger.debug(
            "image_thumbnail_rendered",
            path=file_path,
            original=f"{oriented.width}x{oriented.height}",
            thumbnail=f"{size[0]}x{size[1]}",
        )
        return encode_jpeg(scaled, self._quality)

    def _read_metadata(self, file_path: str) -> AttachmentMetadata:
        image = self._open(file_path)
        if image is None:
            return AttachmentMetadata()

        with image:
            width, height = image.size
            orientation = image.getexif().get(ExifTags.Base.Orientation)

        if orientation in _TRANSPOSED_ORIENTATIONS:
            width, height = height, width
        return AttachmentMetadata(width=width, height=height)

    @staticmethod
    def _open(file_path: str) -> Image.Image | None:
        """Open the image header, or return ``None`` if missing or not an image.

        Other ``OSError``s (permissions, I/O errors) propagate.
        """
        try:
            return Image.open(file_path)
        except FileNotFoundError:
            logger.info("attachment_file_missing", path=file_path)
            return None
        except UnidentifiedImageError:
            logger.info("image_unidentified", path=file_path)
            return None
