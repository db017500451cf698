# allrgb/constants.py
"""
Colour-science constants and tunables used across the project.

- NUM_COLORS and channel helpers
- sRGB / XYZ / Lab constants (D65, 2 degree observer)
- Hilbert curve tables
- Dither kernel weights and report cadence
"""
from __future__ import annotations

from typing import Tuple

# =========================
# Colour cube
# =========================
CHANNEL_BITS = 8
CHANNEL_MAX = (1 << CHANNEL_BITS) - 1
NUM_COLORS = 1 << (3 * CHANNEL_BITS)  # 16_777_216

# =========================
# sRGB <-> XYZ
# =========================
# Companded sRGB threshold; below it the curve is linear.
SRGB_THRESHOLD = 0.04045
SRGB_SLOPE = 12.92
# The same knee on the linear side.
LINEAR_THRESHOLD = SRGB_THRESHOLD / SRGB_SLOPE

# Rows give X, Y, Z from linear R, G, B scaled to [0, 100].
SRGB_TO_XYZ: Tuple[Tuple[float, float, float], ...] = (
    (0.4124, 0.3576, 0.1805),
    (0.2126, 0.7152, 0.0722),
    (0.0193, 0.1192, 0.9505),
)

# =========================
# XYZ <-> Lab
# =========================
WHITE_X = 95.047
WHITE_Y = 100.000
WHITE_Z = 108.883

LAB_EPSILON = 0.008856
LAB_SLOPE = 7.787
LAB_OFFSET = 16.0 / 116.0

# =========================
# Hilbert curve (A26.2b.b3)
# =========================
# Order in which the curve visits each octant, indexed by octant (rgb bits).
ORDER_FOR_OCTANT: Tuple[int, ...] = (0, 7, 1, 6, 3, 4, 2, 5)
# Inverse of the above.
OCTANT_FOR_ORDER: Tuple[int, ...] = (0, 2, 6, 4, 5, 7, 3, 1)

# Per-octant rotation applied before descending a level. Each entry gives,
# for the new (r, g, b), the source channel and whether it is complemented.
ROTATE: Tuple[Tuple[Tuple[int, bool], ...], ...] = (
    ((2, False), (0, False), (1, False)),  # 0
    ((0, False), (2, True), (1, True)),  # 1
    ((1, False), (2, False), (0, False)),  # 2
    ((1, False), (2, True), (0, True)),  # 3
    ((1, True), (0, True), (2, False)),  # 4
    ((1, True), (0, True), (2, False)),  # 5
    ((1, False), (2, False), (0, False)),  # 6
    ((1, False), (2, True), (0, True)),  # 7
)

# Exact inverses of ROTATE.
IROTATE: Tuple[Tuple[Tuple[int, bool], ...], ...] = (
    ((1, False), (2, False), (0, False)),  # 0
    ((0, False), (2, True), (1, True)),  # 1
    ((2, False), (0, False), (1, False)),  # 2
    ((2, True), (0, False), (1, True)),  # 3
    ((1, True), (0, True), (2, False)),  # 4
    ((1, True), (0, True), (2, False)),  # 5
    ((2, False), (0, False), (1, False)),  # 6
    ((2, True), (0, False), (1, True)),  # 7
)

# =========================
# Dithered swap
# =========================
# Neighbour weights of the 3x3 kernel; the centre is added separately.
CORNER_WEIGHT = 1.0
EDGE_WEIGHT = 2.0
CENTER_WEIGHT = 4.0

# Print the whole-image RMS error on every Nth dither pass (0-indexed).
RMS_REPORT_EVERY = 10
