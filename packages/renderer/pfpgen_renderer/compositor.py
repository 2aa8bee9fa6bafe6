"""Low-resolution profile picture composition."""

from __future__ import annotations

import logging

from PIL import Image

from .colors import parse_hex
from .models import CANVAS_SIZE, PixelBuffer, RenderRequest, Variant
from .noise import NOISE_SEED, NoiseGenerator
from .sprites import SpriteSet


logger = logging.getLogger(__name__)

MAX_NOISE_OFFSET = 80


def _clamp_channel(value: float) -> int:
    # 8-bit canvas stores clamp then round half to even, same as round().
    return round(max(0.0, min(255.0, value)))


def noise_background(color: str, noise_intensity: int, size: int = CANVAS_SIZE) -> Image.Image:
    r, g, b = parse_hex(color)
    intensity = noise_intensity / 100
    rng = NoiseGenerator(NOISE_SEED)

    data = bytearray(size * size * 4)
    for y in range(size):
        for x in range(size):
            i = (y * size + x) * 4
            offset = (rng.next_float() - 0.5) * 2 * intensity * MAX_NOISE_OFFSET
            data[i] = _clamp_channel(r + offset)
            data[i + 1] = _clamp_channel(g + offset)
            data[i + 2] = _clamp_channel(b + offset)
            data[i + 3] = 255
    return Image.frombytes("RGBA", (size, size), bytes(data))


class Compositor:
    """Builds the 20x20 RGBA canvas: seeded noise plus the variant sprite."""

    def __init__(self, sprites: SpriteSet) -> None:
        self.sprites = sprites

    def compose_image(self, color: str, variant: Variant, noise_intensity: int) -> Image.Image:
        image = noise_background(color, noise_intensity)

        sprite = self.sprites.get(variant)
        if sprite.is_ready:
            image = Image.alpha_composite(image, sprite.canvas_image())
        else:
            logger.debug("sprite %s not ready, rendering noise only", variant.value, extra={"event": "sprite_skipped"})
        return image

    def build_buffer(self, color: str, variant: Variant, noise_intensity: int) -> PixelBuffer:
        image = self.compose_image(color, variant, noise_intensity)
        return PixelBuffer(width=CANVAS_SIZE, height=CANVAS_SIZE, rgba=image.tobytes())

    def render(self, request: RenderRequest) -> PixelBuffer:
        return self.build_buffer(request.color, request.variant, request.noise_intensity)
