"""Sprite variant resolution."""

from __future__ import annotations

from .colors import best_variant
from .models import Variant, VariantMode


def parse_mode(value: str | VariantMode | None) -> VariantMode:
    if isinstance(value, VariantMode):
        return value
    try:
        return VariantMode((value or "auto").lower())
    except ValueError:
        return VariantMode.AUTO


def resolve_variant(mode: VariantMode | str, color: str) -> Variant:
    mode = parse_mode(mode)
    if mode == VariantMode.AUTO:
        return best_variant(color)
    return Variant(mode.value)
