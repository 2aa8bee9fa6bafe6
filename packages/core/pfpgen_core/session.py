"""Profile picture editing session: current state plus render/export entry points."""

from __future__ import annotations

import threading
from pathlib import Path

from pfpgen_renderer import (
    PREVIEW_SIZE,
    Compositor,
    ExportArtifact,
    PixelBuffer,
    RenderRequest,
    SpriteSet,
    Variant,
    VariantMode,
    coerce_hex_input,
    is_valid_hex,
    load_sprites,
    normalize_hex,
    parse_mode,
    resolve_variant,
    to_data_uri,
)
from pfpgen_renderer.exporter import clamp_size, export_png

from .brand import BrandLookupResult
from .config import DEFAULT_NOISE_INTENSITY, DEFAULT_THEME_COLOR, AppConfig
from .logging_setup import get_logger
from .naming import export_filename


logger = get_logger("session")


class InvalidColorError(ValueError):
    pass


class ProfileSession:
    """Holds theme color, variant mode, and noise; renders on demand.

    Render and export calls are serialized so each composite consumes its own
    noise stream from the first draw.
    """

    def __init__(
        self,
        theme_color: str = DEFAULT_THEME_COLOR,
        variant_mode: VariantMode | str = VariantMode.AUTO,
        noise_intensity: int = DEFAULT_NOISE_INTENSITY,
        sprites: SpriteSet | None = None,
        preview_size: int = PREVIEW_SIZE,
    ) -> None:
        self.theme_color = DEFAULT_THEME_COLOR
        self.set_color(theme_color)
        self.variant_mode = parse_mode(variant_mode)
        self.noise_intensity = DEFAULT_NOISE_INTENSITY
        self.set_noise_intensity(noise_intensity)
        self.preview_size = clamp_size(preview_size)
        self.brand_name = ""
        self.brand_query = ""
        self._compositor = Compositor(sprites if sprites is not None else load_sprites())
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, cfg: AppConfig, sprites: SpriteSet | None = None) -> "ProfileSession":
        if sprites is None:
            sprite_dir = Path(cfg.render.sprite_dir).expanduser() if cfg.render.sprite_dir else None
            sprites = load_sprites(sprite_dir)
        return cls(
            theme_color=cfg.render.theme_color,
            variant_mode=cfg.render.variant_mode,
            noise_intensity=cfg.render.noise_intensity,
            sprites=sprites,
            preview_size=cfg.render.preview_size,
        )

    def to_config(self, cfg: AppConfig) -> AppConfig:
        cfg.render.theme_color = self.theme_color
        cfg.render.variant_mode = self.variant_mode.value
        cfg.render.noise_intensity = self.noise_intensity
        cfg.brand.last_brand = self.brand_name or None
        return cfg

    @property
    def sprites(self) -> SpriteSet:
        return self._compositor.sprites

    def set_sprites(self, sprites: SpriteSet) -> None:
        """Swap in newly loaded sprites; the next render picks them up."""
        with self._lock:
            self._compositor = Compositor(sprites)

    # --- state changes ---

    def set_color(self, hex_color: str, keep_brand: bool = False) -> None:
        if not is_valid_hex(hex_color):
            raise InvalidColorError(f"Expected #RRGGBB color, got {hex_color!r}")
        self.theme_color = normalize_hex(hex_color)
        if not keep_brand:
            self.brand_name = ""

    def set_hex_input(self, text: str) -> bool:
        """Commit hex-field text if it is a full color; partial input is ignored."""
        value = coerce_hex_input(text)
        if value is None:
            return False
        self.set_color(value)
        return True

    def set_variant_mode(self, mode: VariantMode | str) -> None:
        self.variant_mode = parse_mode(mode)

    def set_noise_intensity(self, value: int) -> None:
        self.noise_intensity = max(0, min(100, int(value)))

    def apply_brand(self, result: BrandLookupResult, index: int = 0) -> str:
        """Use one of the brand's colors as the theme; returns the status text."""
        color = result.colors[index]
        try:
            committed = normalize_hex(color.hex)
        except ValueError as exc:
            raise InvalidColorError(f"Brand color {color.hex!r} is not a hex color") from exc
        self.set_color(committed)
        self.brand_name = result.brand_name
        self.brand_query = result.query
        logger.info("brand color applied", extra={"event": "brand_applied"})
        return result.status_text(color)

    # --- rendering ---

    def resolved_variant(self) -> Variant:
        return resolve_variant(self.variant_mode, self.theme_color)

    def render_request(self) -> RenderRequest:
        return RenderRequest(
            color=self.theme_color,
            variant=self.resolved_variant(),
            noise_intensity=self.noise_intensity,
        )

    def render_buffer(self) -> PixelBuffer:
        with self._lock:
            return self._compositor.render(self.render_request())

    def export(self, size: int) -> ExportArtifact:
        size = clamp_size(size)
        with self._lock:
            buffer = self._compositor.render(self.render_request())
            filename = export_filename(size, brand_name=self.brand_name, query=self.brand_query)
            artifact = export_png(buffer, size, filename=filename)
        logger.info("exported %s (%dx%d)", filename, size, size, extra={"event": "export"})
        return artifact

    def preview(self) -> ExportArtifact:
        return self.export(self.preview_size)

    def preview_data_uri(self) -> str:
        return to_data_uri(self.preview().png)
