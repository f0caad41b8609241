"""Tests for bridge_enrichment.attachments.video."""

from __future__ import annotations

import io

import pytest
from PIL import Image

from bridge_schema import ThumbnailSize

from bridge_enrichment.attachments.video import VideoHandler
from bridge_enrichment.errors import ThumbnailUnavailableError


def _size(data: bytes) -> tuple[int, int]:
    return Image.open(io.BytesIO(data)).size


class TestVideoHandler:
    def test_identity(self):
        handler = VideoHandler()
        assert handler.id == "video-handler"
        assert handler.supported_mime_types == ["video/*"]
        assert handler.matches("video/quicktime")

    async def test_first_frame_thumbnail(self, video_file):
        data = await VideoHandler().generate_thumbnail(str(video_file), ThumbnailSize(width=300, height=300))

        assert data[:2] == b"\xff\xd8"
        assert _size(data) == (64, 48)

    async def test_thumbnail_scaled_down(self, video_file):
        data = await VideoHandler().generate_thumbnail(str(video_file), ThumbnailSize(width=32, height=32))
        assert _size(data) == (32, 24)

    async def test_no_video_stream(self, audio_file):
        with pytest.raises(ThumbnailUnavailableError) as exc_info:
            await VideoHandler().generate_thumbnail(str(audio_file), ThumbnailSize(width=300, height=300))
        assert exc_info.value.reason == "no video stream"

    async def test_missing_file(self, tmp_path):
        result = await VideoHandler().generate_thumbnail(
            str(tmp_path / "nope.mp4"), ThumbnailSize(width=300, height=300)
        )
        assert result is None

    async def test_not_a_video(self, tmp_path):
        path = tmp_path / "garbage.mp4"
        path.write_bytes(b"\x00\x01garbage" * 64)

        result = await VideoHandler().generate_thumbnail(str(path), ThumbnailSize(width=300, height=300))
        assert result is None

    async def test_metadata(self, video_file):
        meta = await VideoHandler().extract_metadata(str(video_file))

        assert (meta.width, meta.height) == (64, 48)
        assert meta.duration_seconds == pytest.approx(0.5, abs=0.25)

    async def test_metadata_audio_only(self, audio_file):
        meta = await VideoHandler().extract_metadata(str(audio_file))

        assert meta.width is None
        assert meta.height is None
        assert meta.duration_seconds == pytest.approx(0.5, abs=0.1)

    async def test_metadata_missing_file(self, tmp_path):
        meta = await VideoHandler().extract_metadata(str(tmp_path / "nope.mov"))
        assert meta.is_empty
