"""Deterministic mulberry32 noise source."""

from __future__ import annotations


NOISE_SEED = 42

_MASK = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK


class NoiseGenerator:
    """Seeded uint32 stream yielding floats in [0, 1).

    Create a fresh instance per render; the sequence for a given seed never
    changes, so every composite starts from the same draw.
    """

    def __init__(self, seed: int = NOISE_SEED) -> None:
        self._state = seed & _MASK

    def next_float(self) -> float:
        self._state = (self._state + _INCREMENT) & _MASK
        a = self._state
        t = _imul(a ^ (a >> 15), 1 | a)
        t = ((t + _imul(t ^ (t >> 7), 61 | t)) & _MASK) ^ t
        return ((t ^ (t >> 14)) & _MASK) / 4294967296
