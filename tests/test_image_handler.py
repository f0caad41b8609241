"""Tests for bridge_enrichment.attachments.image and imaging helpers."""

from __future__ import annotations

import io

import pytest
from PIL import Image

from bridge_schema import ThumbnailSize

from bridge_enrichment.attachments.image import ImageHandler
from bridge_enrichment.attachments.imaging import encode_jpeg, scale_to_fit

from tests.conftest import write_image

BOX = ThumbnailSize(width=300, height=300)


def _decode(data: bytes) -> Image.Image:
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


class TestScaleToFit:
    def test_landscape(self):
        assert scale_to_fit(1200, 600, BOX) == (300, 150)

    def test_portrait(self):
        assert scale_to_fit(400, 800, BOX) == (150, 300)

    def test_never_upscales_by_default(self):
        assert scale_to_fit(50, 20, BOX) == (50, 20)

    def test_upscale_when_allowed(self):
        assert scale_to_fit(50, 20, BOX, allow_upscale=True) == (300, 120)

    def test_minimum_one_pixel(self):
        assert scale_to_fit(10000, 1, BOX) == (300, 1)


class TestEncodeJpeg:
    def test_transparent_becomes_white(self):
        image = Image.new("RGBA", (10, 10), (0, 0, 0, 0))
        decoded = _decode(encode_jpeg(image, 70))

        assert decoded.format == "JPEG"
        assert decoded.mode == "RGB"
        assert all(channel > 245 for channel in decoded.getpixel((5, 5)))


class TestImageHandler:
    def test_identity(self):
        handler = ImageHandler()
        assert handler.id == "image-handler"
        assert handler.supported_mime_types == ["image/*"]
        assert handler.matches("image/webp")
        assert not handler.matches("video/mp4")

    async def test_thumbnail_fits_box(self, png_file):
        data = await ImageHandler().generate_thumbnail(str(png_file), BOX)

        thumb = _decode(data)
        assert thumb.format == "JPEG"
        assert thumb.size == (300, 150)

    async def test_thumbnail_portrait(self, jpeg_file):
        data = await ImageHandler().generate_thumbnail(str(jpeg_file), BOX)
        assert _decode(data).size == (150, 300)

    async def test_small_image_not_upscaled(self, small_png_file):
        data = await ImageHandler().generate_thumbnail(str(small_png_file), BOX)
        assert _decode(data).size == (50, 20)

    async def test_small_image_upscaled_when_allowed(self, small_png_file):
        data = await ImageHandler(allow_upscale=True).generate_thumbnail(str(small_png_file), BOX)
        assert _decode(data).size == (300, 120)

    async def test_exif_orientation_applied(self, rotated_jpeg_file):
        data = await ImageHandler().generate_thumbnail(str(rotated_jpeg_file), BOX)
        assert _decode(data).size == (40, 80)

    async def test_missing_file(self, tmp_path):
        result = await ImageHandler().generate_thumbnail(str(tmp_path / "nope.jpg"), BOX)
        assert result is None

    async def test_not_an_image(self, corrupt_image_file):
        result = await ImageHandler().generate_thumbnail(str(corrupt_image_file), BOX)
        assert result is None

    async def test_truncated_image(self, tmp_path):
        full = write_image(tmp_path / "full.jpg", (400, 400), quality=95)
        truncated = tmp_path / "truncated.jpg"
        truncated.write_bytes(full.read_bytes()[: full.stat().st_size // 2])

        result = await ImageHandler().generate_thumbnail(str(truncated), BOX)
        assert result is None

    async def test_metadata(self, png_file):
        meta = await ImageHandler().extract_metadata(str(png_file))
        assert (meta.width, meta.height) == (1200, 600)
        assert meta.duration_seconds is None

    async def test_metadata_respects_orientation(self, rotated_jpeg_file):
        meta = await ImageHandler().extract_metadata(str(rotated_jpeg_file))
        assert (meta.width, meta.height) == (40, 80)

    @pytest.mark.parametrize("name", ["nope.jpg", "corrupt.jpg"])
    async def test_metadata_unreadable(self, tmp_path, corrupt_image_file, name):
        meta = await ImageHandler().extract_metadata(str(tmp_path / name))
        assert meta.is_empty
