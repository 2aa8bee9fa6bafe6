"""Hex color parsing, WCAG luminance, and contrast-based variant choice."""

from __future__ import annotations

import re

from .models import Variant


HEX_RE = re.compile(r"^#[0-9a-fA-F]{6}$")
_LOOSE_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# Dark backgrounds get the light sprite, light backgrounds the dark one.
LIGHT_VARIANT_THRESHOLD = 0.4


def is_valid_hex(value: str) -> bool:
    return HEX_RE.fullmatch(value) is not None


def coerce_hex_input(value: str) -> str | None:
    """Turn free text from a hex field into a committable color, or None."""
    text = value.strip()
    if not text.startswith("#"):
        text = "#" + text
    return text if is_valid_hex(text) else None


def parse_hex(value: str) -> tuple[int, int, int]:
    match = _LOOSE_HEX_RE.fullmatch(value.strip())
    if match is None:
        raise ValueError(f"Malformed hex color: {value!r}")
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02x}{g:02x}{b:02x}"


def normalize_hex(value: str) -> str:
    return rgb_to_hex(*parse_hex(value))


def _linearize(channel: int) -> float:
    c = channel / 255
    return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(r: int, g: int, b: int) -> float:
    rs, gs, bs = (_linearize(c) for c in (r, g, b))
    return 0.2126 * rs + 0.7152 * gs + 0.0722 * bs


def best_variant(hex_color: str) -> Variant:
    lum = relative_luminance(*parse_hex(hex_color))
    return Variant.LIGHT if lum < LIGHT_VARIANT_THRESHOLD else Variant.DARK
