"""Overlay sprite assets: built-in pixel maps and on-disk PNG variants."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

from .models import CANVAS_SIZE, Variant


logger = logging.getLogger(__name__)

SPRITE_FILES = {
    Variant.LIGHT: "base_light.png",
    Variant.DARK: "base_dark.png",
}

# Head-and-shoulders bust, one character per canvas pixel.
BUST_MAP = (
    "....................",
    "......OOOOOOOO......",
    ".....OHHHHHHHHO.....",
    "....OHHHHHHHHHHO....",
    "....OHHSSSSSSHHO....",
    "....OHSSSSSSSSHO....",
    "....OSSSSSSSSSSO....",
    "....OSSESSSSESSO....",
    "....OSSESSSSESSO....",
    "....OSSSSSSSSSSO....",
    ".....OSSSMMSSSO.....",
    "......OSSSSSSO......",
    "....OOOOSSSSOOOO....",
    "...OTTTTOSSOTTTTO...",
    "..OTTTTTTOOTTTTTTO..",
    ".OTTTTTTTTTTTTTTTTO.",
    ".OTTLTTTTTTTTTTLTTO.",
    "OTTTLTTTTTTTTTTLTTTO",
    "OTTTLTTTTTTTTTTLTTTO",
    "OTTTLTTTTTTTTTTLTTTO",
)

_SHARED_PALETTE = {
    ".": (0, 0, 0, 0),
    "O": (20, 20, 35, 255),
    "H": (60, 36, 34, 255),
    "S": (232, 170, 128, 255),
    "E": (20, 20, 35, 255),
    "M": (190, 70, 75, 255),
}

SHIRT_PALETTES = {
    Variant.LIGHT: {"T": (238, 238, 242, 255), "L": (196, 198, 210, 255)},
    Variant.DARK: {"T": (34, 34, 44, 255), "L": (62, 62, 78, 255)},
}


@dataclass(frozen=True)
class SpriteAsset:
    variant: Variant
    image: Image.Image | None = None
    source: str = "builtin"

    @property
    def is_ready(self) -> bool:
        if self.image is None:
            return False
        width, height = self.image.size
        return width > 0 and height > 0

    def canvas_image(self) -> Image.Image:
        """RGBA copy sized to the working canvas."""
        if not self.is_ready:
            raise RuntimeError(f"Sprite {self.variant.value} is not loaded")
        image = self.image.convert("RGBA")
        if image.size != (CANVAS_SIZE, CANVAS_SIZE):
            image = image.resize((CANVAS_SIZE, CANVAS_SIZE), Image.NEAREST)
        return image


@dataclass(frozen=True)
class SpriteSet:
    light: SpriteAsset
    dark: SpriteAsset

    def get(self, variant: Variant) -> SpriteAsset:
        return self.light if variant == Variant.LIGHT else self.dark

    @property
    def ready(self) -> dict[str, bool]:
        return {"light": self.light.is_ready, "dark": self.dark.is_ready}


def render_pixel_map(rows: tuple[str, ...], palette: dict[str, tuple[int, int, int, int]]) -> Image.Image:
    height = len(rows)
    width = max((len(r) for r in rows), default=0)
    img = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    px = img.load()
    for y, row in enumerate(rows):
        for x, key in enumerate(row):
            px[x, y] = palette[key]
    return img


def builtin_sprite(variant: Variant) -> SpriteAsset:
    palette = dict(_SHARED_PALETTE)
    palette.update(SHIRT_PALETTES[variant])
    return SpriteAsset(variant=variant, image=render_pixel_map(BUST_MAP, palette), source="builtin")


def load_sprite(path: Path, variant: Variant) -> SpriteAsset:
    if not path.exists():
        logger.warning("sprite missing: %s", path, extra={"event": "sprite_missing"})
        return SpriteAsset(variant=variant, image=None, source=str(path))

    try:
        with Image.open(path) as handle:
            handle.load()
            image = handle.convert("RGBA")
    except OSError as exc:
        logger.warning("sprite unreadable: %s (%s)", path, exc, extra={"event": "sprite_unreadable"})
        return SpriteAsset(variant=variant, image=None, source=str(path))

    return SpriteAsset(variant=variant, image=image, source=str(path))


def load_sprites(sprite_dir: Path | None = None) -> SpriteSet:
    if sprite_dir is None:
        return SpriteSet(light=builtin_sprite(Variant.LIGHT), dark=builtin_sprite(Variant.DARK))
    return SpriteSet(
        light=load_sprite(sprite_dir / SPRITE_FILES[Variant.LIGHT], Variant.LIGHT),
        dark=load_sprite(sprite_dir / SPRITE_FILES[Variant.DARK], Variant.DARK),
    )


def empty_sprites() -> SpriteSet:
    return SpriteSet(light=SpriteAsset(Variant.LIGHT), dark=SpriteAsset(Variant.DARK))
