"""Pillow helpers shared by the image and video handlers."""

from __future__ import annotations

import io

from PIL import Image

from bridge_schema import ThumbnailSize

_ALPHA_MODES = {"RGBA", "LA", "PA"}


def scale_to_fit(
    width: int,
    height: int,
    max_size: ThumbnailSize,
    *,
    allow_upscale: bool = False,
) -> tuple[int, int]:
    """Size of a *width* x *height* image scaled uniformly into *max_size*.

    The scale factor is ``min(max_w / w, max_h / h)``, capped at 1.0 unless
    *allow_upscale* is set.  Neither side drops below one pixel.
    """
    scale = min(max_size.width / width, max_size.height / height)
    if not allow_upscale:
        scale = min(scale, 1.0)
    return max(1, round(width * scale)), max(1, round(height * scale))


def _to_rgb(image: Image.Image) -> Image.Image:
    if image.mode == "RGB":
        return image
    if image.mode == "P" and "transparency" in image.info:
        image = image.convert("RGBA")
    if image.mode in _ALPHA_MODES:
        # JPEG has no alpha channel; composite onto white
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    return image.convert("RGB")


def encode_jpeg(image: Image.Image, quality: int) -> bytes:
    """Encode *image* as baseline JPEG bytes."""
    buffer = io.BytesIO()
    _to_rgb(image).save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()
