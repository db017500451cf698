# allrgb/palette_data.py
from __future__ import annotations

"""
Palette builders.

Exports:
  make_palette(size) -> uint8 [size,3]
  ColorTransform     # one of the 48 orientations of the colour cube
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .constants import NUM_COLORS
from .core_types import U8Image, ints_to_rgb
from .hilbert import decode_array


def make_palette(size: int) -> U8Image:
    """
    Colours evenly spread through the RGB cube, one per output pixel.

    size == 2**24 gives every colour once, in counting order. Any other size
    samples the Hilbert curve at even spacing, always including its first and
    last colour; above 2**24 colours repeat.
    """
    size = int(size)
    if size == NUM_COLORS:
        return ints_to_rgb(np.arange(NUM_COLORS, dtype=np.uint32))
    if size < 2:
        raise ValueError(f"palette size must be at least 2, got {size}")

    # Evenly spaced samples along the curve rather than every n-th colour in
    # counting order, which would only quantize the blue channel.
    delta = NUM_COLORS / float(size - 1)
    steps = np.arange(size - 1, dtype=np.float64) * delta
    indices = np.empty(size, dtype=np.uint32)
    indices[:-1] = steps.astype(np.uint32)
    indices[-1] = NUM_COLORS - 1
    return decode_array(indices)


@dataclass(frozen=True)
class ColorTransform:
    """
    A map from the colour cube onto a reoriented copy of itself.

    Treating RGB as coordinates there are 48 orientations: the origin in any
    of 8 corners, with 6 axis orders each.
    """

    axis_order: Tuple[int, int, int] = (0, 1, 2)
    axis_inverted: Tuple[bool, bool, bool] = (False, False, False)

    @classmethod
    def random(cls, rng: np.random.Generator) -> "ColorTransform":
        order = tuple(int(k) for k in rng.permutation(3))
        inverted = tuple(bool(f) for f in rng.integers(0, 2, size=3))
        return cls(order, inverted)  # type: ignore[arg-type]

    def __call__(self, colors: np.ndarray) -> U8Image:
        arr = np.asarray(colors, dtype=np.uint8)
        chans = [
            arr[..., k] ^ np.uint8(0xFF) if self.axis_inverted[k] else arr[..., k]
            for k in range(3)
        ]
        out = np.empty(arr.shape, dtype=np.uint8)
        for k in range(3):
            out[..., k] = chans[self.axis_order[k]]
        return out


__all__ = ["make_palette", "ColorTransform"]
