"""Nearest-neighbor upscaling and PNG serialization."""

from __future__ import annotations

import base64
from io import BytesIO

import numpy as np
from PIL import Image

from .models import ExportArtifact, PixelBuffer


MIN_EXPORT_SIZE = 20
MAX_EXPORT_SIZE = 4096
PREVIEW_SIZE = 200


def clamp_size(size: int) -> int:
    return max(MIN_EXPORT_SIZE, min(MAX_EXPORT_SIZE, int(size)))


def source_indices(src_len: int, dst_len: int) -> np.ndarray:
    """Nearest source index for each destination pixel, sampled at pixel centers."""
    centers = (np.arange(dst_len, dtype=np.float64) + 0.5) * src_len / dst_len
    return np.minimum(np.floor(centers).astype(np.intp), src_len - 1)


def buffer_to_array(buffer: PixelBuffer) -> np.ndarray:
    return np.frombuffer(buffer.rgba, dtype=np.uint8).reshape((buffer.height, buffer.width, 4))


def upscale(buffer: PixelBuffer, size: int) -> Image.Image:
    src = buffer_to_array(buffer)
    rows = source_indices(buffer.height, size)
    cols = source_indices(buffer.width, size)
    scaled = src[rows[:, None], cols[None, :]]
    return Image.fromarray(np.ascontiguousarray(scaled))


def encode_png(image: Image.Image) -> bytes:
    buf = BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def to_data_uri(png: bytes) -> str:
    b64 = base64.b64encode(png).decode("ascii")
    return f"data:image/png;base64,{b64}"


def export_png(buffer: PixelBuffer, size: int, filename: str | None = None) -> ExportArtifact:
    size = clamp_size(size)
    return ExportArtifact(size=size, png=encode_png(upscale(buffer, size)), filename=filename)
