# allrgb/analysis.py
from __future__ import annotations

"""
Error metrics and colour coverage checks.
"""

import math

import numpy as np

from .colour_convert import diff2
from .constants import NUM_COLORS
from .core_types import rgb_to_ints
from .grid import PixelGrid


def total_error(reference: PixelGrid, output: PixelGrid) -> float:
    """Sum of squared Lab differences between matching cells."""
    return float(np.sum(diff2(output.lab, reference.lab)))


def rms_error(reference: PixelGrid, output: PixelGrid) -> float:
    """Root-mean-square Lab error over the whole grid."""
    if output.size == 0:
        return 0.0
    return math.sqrt(total_error(reference, output) / output.size)


def has_all_colors(colors: np.ndarray) -> bool:
    """True if all 2**24 colours are present once and only once."""
    flat = np.asarray(colors, dtype=np.uint8).reshape(-1, 3)
    if flat.shape[0] != NUM_COLORS:
        return False
    seen = np.zeros(NUM_COLORS, dtype=bool)
    seen[rgb_to_ints(flat)] = True
    return bool(seen.all())


def same_colors(lhs: np.ndarray, rhs: np.ndarray) -> bool:
    """True if both arrays hold the same multiset of colours."""
    a = np.sort(rgb_to_ints(np.asarray(lhs).reshape(-1, 3)))
    b = np.sort(rgb_to_ints(np.asarray(rhs).reshape(-1, 3)))
    return bool(np.array_equal(a, b))


__all__ = ["total_error", "rms_error", "has_all_colors", "same_colors"]
