"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


CANVAS_SIZE = 20


class Variant(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class VariantMode(str, Enum):
    AUTO = "auto"
    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class PixelBuffer:
    """Row-major RGBA samples for the fixed low-resolution canvas."""

    width: int
    height: int
    rgba: bytes

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        i = (y * self.width + x) * 4
        return tuple(self.rgba[i : i + 4])  # type: ignore[return-value]


@dataclass(frozen=True)
class RenderRequest:
    color: str
    variant: Variant
    noise_intensity: int


@dataclass(frozen=True)
class ExportArtifact:
    size: int
    png: bytes
    filename: str | None = None
