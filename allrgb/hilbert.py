# allrgb/hilbert.py
from __future__ import annotations

"""
Order RGB colours along a 3D Hilbert curve through the colour cube.

Divide the cube into octants and visit them in a fixed order; each octant is
divided again and visited in the same shape, rotated and reflected so the
curve stays continuous. The octant of a colour at a given depth is formed
from one bit of each channel (r is the high bit, b the low bit).

This is curve A26.2b.b3 from Haverkort's "An inventory of three-dimensional
Hilbert space-filling curves". The index is built three bits per level,
most significant level first.

Exports:
  encode(rgb) -> int in [0, 2**24)
  decode(index) -> RGBTuple
  compare(lhs, rhs) -> bool        # encode(lhs) < encode(rhs), early exit
  encode_array(rgb) -> uint32 [N]
  decode_array(indices) -> uint8 [N,3]
"""

from typing import List

import numpy as np
from numpy.typing import NDArray

from .constants import (
    CHANNEL_BITS,
    IROTATE,
    NUM_COLORS,
    OCTANT_FOR_ORDER,
    ORDER_FOR_OCTANT,
    ROTATE,
)
from .core_types import RGBTuple, U8Image

_MSB = 1 << (CHANNEL_BITS - 1)

# Table views for the vectorized paths: source channel and XOR mask per
# (octant, output channel).
_ROT_SRC = np.array([[src for src, _ in row] for row in ROTATE], dtype=np.uint8)
_ROT_XOR = np.array(
    [[0xFF if inv else 0 for _, inv in row] for row in ROTATE], dtype=np.uint8
)
_IROT_SRC = np.array([[src for src, _ in row] for row in IROTATE], dtype=np.uint8)
_IROT_XOR = np.array(
    [[0xFF if inv else 0 for _, inv in row] for row in IROTATE], dtype=np.uint8
)
_ORDER_FOR_OCTANT = np.array(ORDER_FOR_OCTANT, dtype=np.uint32)
_OCTANT_FOR_ORDER = np.array(OCTANT_FOR_ORDER, dtype=np.uint8)


# Scalar path


def _octant(c: List[int], step: int) -> int:
    """Octant of colour c at the given depth; step 0 is the top level."""
    mask = _MSB >> step
    return (
        (4 if c[0] & mask else 0) | (2 if c[1] & mask else 0) | (1 if c[2] & mask else 0)
    )


def _apply(table, octant: int, c: List[int]) -> List[int]:
    return [(c[src] ^ 0xFF) if inv else c[src] for src, inv in table[octant]]


def encode(rgb: RGBTuple) -> int:
    """Hilbert index of a colour."""
    c = [int(rgb[0]), int(rgb[1]), int(rgb[2])]
    index = 0
    for step in range(CHANNEL_BITS):
        octant = _octant(c, step)
        index |= ORDER_FOR_OCTANT[octant] << (3 * (CHANNEL_BITS - 1 - step))
        c = _apply(ROTATE, octant, c)
    return index


def decode(index: int) -> RGBTuple:
    """Colour at a Hilbert index; inverse of encode."""
    if not 0 <= index < NUM_COLORS:
        raise ValueError(f"hilbert index out of range: {index}")
    c = [0, 0, 0]
    d = int(index)
    # Deepest level first: inverse-rotate the partial colour, then push the
    # octant bits in at the top.
    for _ in range(CHANNEL_BITS):
        octant = OCTANT_FOR_ORDER[d & 0b111]
        c = _apply(IROTATE, octant, c)
        c = [
            (c[0] >> 1) | (_MSB if octant & 0b100 else 0),
            (c[1] >> 1) | (_MSB if octant & 0b010 else 0),
            (c[2] >> 1) | (_MSB if octant & 0b001 else 0),
        ]
        d >>= 3
    return (c[0], c[1], c[2])


def compare(lhs: RGBTuple, rhs: RGBTuple) -> bool:
    """True if lhs comes before rhs on the curve. Equal colours compare False."""
    a = [int(lhs[0]), int(lhs[1]), int(lhs[2])]
    b = [int(rhs[0]), int(rhs[1]), int(rhs[2])]
    for step in range(CHANNEL_BITS):
        oa = _octant(a, step)
        ob = _octant(b, step)
        if oa != ob:
            return ORDER_FOR_OCTANT[oa] < ORDER_FOR_OCTANT[ob]
        a = _apply(ROTATE, oa, a)
        b = _apply(ROTATE, ob, b)
    return False


# Vectorized path


def _apply_array(
    src: NDArray[np.uint8], xor: NDArray[np.uint8], octant: np.ndarray, chans
) -> List[NDArray[np.uint8]]:
    """Rotate channel arrays by per-element octant using a (8,3) table pair."""
    src_rows = src[octant]
    xor_rows = xor[octant]
    out = []
    for k in range(3):
        s = src_rows[:, k]
        picked = np.where(s == 0, chans[0], np.where(s == 1, chans[1], chans[2]))
        out.append(picked ^ xor_rows[:, k])
    return out


def encode_array(rgb: np.ndarray) -> NDArray[np.uint32]:
    """Vectorized encode: (N,3) uint8 -> (N,) uint32."""
    arr = np.asarray(rgb, dtype=np.uint8).reshape(-1, 3)
    chans = [arr[:, 0].copy(), arr[:, 1].copy(), arr[:, 2].copy()]
    index = np.zeros(arr.shape[0], dtype=np.uint32)
    for step in range(CHANNEL_BITS):
        shift = CHANNEL_BITS - 1 - step
        octant = (
            (((chans[0] >> shift) & 1) << 2)
            | (((chans[1] >> shift) & 1) << 1)
            | ((chans[2] >> shift) & 1)
        ).astype(np.intp)
        index |= _ORDER_FOR_OCTANT[octant] << np.uint32(3 * shift)
        chans = _apply_array(_ROT_SRC, _ROT_XOR, octant, chans)
    return index


def decode_array(indices: np.ndarray) -> U8Image:
    """Vectorized decode: (N,) ints -> (N,3) uint8."""
    d = np.asarray(indices, dtype=np.uint32).ravel()
    if d.size and int(d.max()) >= NUM_COLORS:
        raise ValueError("hilbert index out of range")
    n = d.shape[0]
    chans = [np.zeros(n, dtype=np.uint8) for _ in range(3)]
    for _ in range(CHANNEL_BITS):
        octant = _OCTANT_FOR_ORDER[d & np.uint32(0b111)].astype(np.intp)
        chans = _apply_array(_IROT_SRC, _IROT_XOR, octant, chans)
        for k in range(3):
            bit = ((octant >> (2 - k)) & 1).astype(np.uint8) << np.uint8(7)
            chans[k] = (chans[k] >> np.uint8(1)) | bit
        d = d >> np.uint32(3)
    return np.stack(chans, axis=1).astype(np.uint8, copy=False)


__all__ = ["encode", "decode", "compare", "encode_array", "decode_array"]
