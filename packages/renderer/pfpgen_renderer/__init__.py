"""Renderer package for deterministic profile picture composition."""

from .colors import (
    best_variant,
    coerce_hex_input,
    is_valid_hex,
    normalize_hex,
    parse_hex,
    relative_luminance,
    rgb_to_hex,
)
from .compositor import Compositor
from .exporter import MAX_EXPORT_SIZE, MIN_EXPORT_SIZE, PREVIEW_SIZE, clamp_size, export_png, to_data_uri, upscale
from .models import CANVAS_SIZE, ExportArtifact, PixelBuffer, RenderRequest, Variant, VariantMode
from .noise import NOISE_SEED, NoiseGenerator
from .sprites import SpriteAsset, SpriteSet, empty_sprites, load_sprites
from .variants import parse_mode, resolve_variant

__all__ = [
    "CANVAS_SIZE",
    "Compositor",
    "ExportArtifact",
    "MAX_EXPORT_SIZE",
    "MIN_EXPORT_SIZE",
    "NOISE_SEED",
    "NoiseGenerator",
    "PREVIEW_SIZE",
    "PixelBuffer",
    "RenderRequest",
    "SpriteAsset",
    "SpriteSet",
    "Variant",
    "VariantMode",
    "best_variant",
    "clamp_size",
    "coerce_hex_input",
    "empty_sprites",
    "export_png",
    "is_valid_hex",
    "load_sprites",
    "normalize_hex",
    "parse_hex",
    "parse_mode",
    "relative_luminance",
    "resolve_variant",
    "rgb_to_hex",
    "to_data_uri",
    "upscale",
]
