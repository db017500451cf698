# allrgb/core_types.py
from __future__ import annotations

"""
Core type aliases and lightweight colour helpers.
"""

from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .constants import CHANNEL_MAX, NUM_COLORS

# Basic aliases

RGBTuple = Tuple[int, int, int]
LabTuple = Tuple[float, float, float]

U8Image = NDArray[np.uint8]  # (H, W, 3) or (N, 3)
RGBFloat = NDArray[np.float64]  # (..., 3) float colour, 0..255 scale
XYZ = NDArray[np.float64]  # (..., 3) CIE XYZ, 0..100 scale
Lab = NDArray[np.float64]  # (..., 3) CIE Lab
IndexArray = NDArray[np.int64]  # (N,) linear cell indices


# Small helpers


def rgb_to_int(rgb: RGBTuple) -> int:
    """Pack an RGB tuple into a 24-bit web colour, e.g. (255, 0, 0) -> 0xFF0000."""
    return (int(rgb[0]) << 16) | (int(rgb[1]) << 8) | int(rgb[2])


def int_to_rgb(value: int) -> RGBTuple:
    """Unpack a 24-bit web colour into an RGB tuple."""
    if not 0 <= value < NUM_COLORS:
        raise ValueError(f"colour value out of range: {value}")
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def ints_to_rgb(values: np.ndarray) -> U8Image:
    """Vectorized int_to_rgb: (N,) ints -> (N,3) uint8."""
    v = np.asarray(values, dtype=np.uint32)
    out = np.empty(v.shape + (3,), dtype=np.uint8)
    out[..., 0] = (v >> 16) & 0xFF
    out[..., 1] = (v >> 8) & 0xFF
    out[..., 2] = v & 0xFF
    return out


def rgb_to_ints(rgb: np.ndarray) -> NDArray[np.uint32]:
    """Vectorized rgb_to_int: (..., 3) uint8 -> (...) uint32."""
    arr = np.asarray(rgb, dtype=np.uint32)
    return (arr[..., 0] << 16) | (arr[..., 1] << 8) | arr[..., 2]


def coerce_to_rgb_tuple(value: Union[Sequence[int], NDArray[np.generic]]) -> RGBTuple:
    """
    Coerce a 3-length sequence or array to an (int, int, int) RGB tuple.
    Channels must already be in 0..255.
    """
    if len(value) < 3:
        raise ValueError("sequence too small for RGB")
    r, g, b = int(value[0]), int(value[1]), int(value[2])
    for c in (r, g, b):
        if not 0 <= c <= CHANNEL_MAX:
            raise ValueError(f"channel out of range: {c}")
    return (r, g, b)


def assert_u8_image_rgb(image: np.ndarray) -> U8Image:
    """Validate a uint8 (H,W,3) image and return it typed as U8Image."""
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] != 3:
        raise TypeError("expected uint8 (H,W,3) image")
    return image  # type: ignore[return-value]


__all__ = [
    # aliases / types
    "RGBTuple",
    "LabTuple",
    "U8Image",
    "RGBFloat",
    "XYZ",
    "Lab",
    "IndexArray",
    # helpers
    "rgb_to_int",
    "int_to_rgb",
    "ints_to_rgb",
    "rgb_to_ints",
    "coerce_to_rgb_tuple",
    "assert_u8_image_rgb",
]
