"""Shared test fixtures for the enrichment service test suite."""

from __future__ import annotations

import wave
from datetime import datetime, timezone
from pathlib import Path

import av
import pytest
from PIL import ExifTags, Image

from bridge_schema import Attachment, Message

from bridge_enrichment.config import EnrichmentConfig, ProcessorConfig, ThumbnailConfig


@pytest.fixture
def processor_config() -> ProcessorConfig:
    return ProcessorConfig(phone_region="US", emoji_max_count=5)


@pytest.fixture
def thumbnail_config() -> ThumbnailConfig:
    return ThumbnailConfig(max_width=300, max_height=300, timeout_seconds=5.0)


@pytest.fixture
def enrichment_config(
    processor_config: ProcessorConfig,
    thumbnail_config: ThumbnailConfig,
    tmp_path: Path,
) -> EnrichmentConfig:
    return EnrichmentConfig(
        attachments_root=str(tmp_path),
        log_json=False,
        processors=processor_config,
        thumbnail=thumbnail_config,
    )


# ------------------------------------------------------------------
# Sample messages
# ------------------------------------------------------------------


def make_message(
    text: str | None = "Hello, World!",
    *,
    id: int = 1,
    guid: str | None = "msg-guid-001",
    date: datetime | None = None,
    is_from_me: bool = False,
    conversation_id: str = "chat-001",
    handle_id: int | None = 7,
) -> Message:
    """Build a stored message with sensible defaults."""
    return Message(
        id=id,
        guid=guid,
        text=text,
        date=date or datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc),
        is_from_me=is_from_me,
        conversation_id=conversation_id,
        handle_id=handle_id,
    )


def make_attachment(path: Path, mime_type: str | None = None, *, id: str = "att-001") -> Attachment:
    return Attachment(
        id=id,
        file_path=str(path),
        mime_type=mime_type,
        size=path.stat().st_size if path.exists() else 0,
        filename=path.name,
    )


# ------------------------------------------------------------------
# Sample media files
# ------------------------------------------------------------------


def write_image(path: Path, size: tuple[int, int] = (1200, 600), mode: str = "RGB", **save_kwargs) -> Path:
    color = (200, 40, 40, 128) if mode == "RGBA" else (200, 40, 40)
    Image.new(mode, size, color).save(path, **save_kwargs)
    return path


def write_video(path: Path, *, width: int = 64, height: int = 48, frames: int = 5, rate: int = 10) -> Path:
    with av.open(str(path), mode="w") as container:
        stream = container.add_stream("mpeg4", rate=rate)
        stream.width = width
        stream.height = height
        stream.pix_fmt = "yuv420p"
        for i in range(frames):
            image = Image.new("RGB", (width, height), (i * 40, 120, 200))
            for packet in stream.encode(av.VideoFrame.from_image(image)):
                container.mux(packet)
        for packet in stream.encode():
            container.mux(packet)
    return path


def write_wav(path: Path, *, seconds: float = 0.5, rate: int = 8000) -> Path:
    with wave.open(str(path), "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(rate)
        wav.writeframes(b"\x00\x00" * int(seconds * rate))
    return path


@pytest.fixture
def png_file(tmp_path: Path) -> Path:
    return write_image(tmp_path / "photo.png", (1200, 600), "RGBA")


@pytest.fixture
def jpeg_file(tmp_path: Path) -> Path:
    return write_image(tmp_path / "photo.jpg", (400, 800))


@pytest.fixture
def rotated_jpeg_file(tmp_path: Path) -> Path:
    """80x40 pixels stored, displayed as 40x80 (EXIF orientation 6)."""
    exif = Image.Exif()
    exif[ExifTags.Base.Orientation] = 6
    return write_image(tmp_path / "rotated.jpg", (80, 40), exif=exif)


@pytest.fixture
def small_png_file(tmp_path: Path) -> Path:
    return write_image(tmp_path / "small.png", (50, 20))


@pytest.fixture
def corrupt_image_file(tmp_path: Path) -> Path:
    path = tmp_path / "corrupt.jpg"
    path.write_bytes(b"definitely not an image")
    return path


@pytest.fixture
def video_file(tmp_path: Path) -> Path:
    return write_video(tmp_path / "clip.mp4")


@pytest.fixture
def audio_file(tmp_path: Path) -> Path:
    return write_wav(tmp_path / "tone.wav")
