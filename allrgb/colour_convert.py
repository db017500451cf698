# allrgb/colour_convert.py
from __future__ import annotations

"""
Colour conversions and the perceptual metric (D65).

Vectorized NumPy functions accept any shape (..., 3) and return float64 of
the same shape. RGB values are on the 0..255 scale, either uint8 or float.

Exports:
  rgb_to_linear(srgb)
  rgb_to_xyz(rgb)
  xyz_to_lab(xyz)
  rgb_to_lab(rgb)
  lab_to_xyz(lab)
  xyz_to_rgb_float(xyz)
  diff2(lab1, lab2)

Compiled scalar kernels for the optimizer loops:
  lab_of_rgb_float(r, g, b) -> (L, a, b)
  diff2_scalar(L1, a1, b1, L2, a2, b2)
"""

import numpy as np
from numba import njit

from .constants import (
    LAB_EPSILON,
    LAB_OFFSET,
    LAB_SLOPE,
    LINEAR_THRESHOLD,
    SRGB_SLOPE,
    SRGB_THRESHOLD,
    SRGB_TO_XYZ,
    WHITE_X,
    WHITE_Y,
    WHITE_Z,
)
from .core_types import Lab, RGBFloat, XYZ

_M = np.array(SRGB_TO_XYZ, dtype=np.float64)
_M_INV = np.linalg.inv(_M)
_WHITE = np.array([WHITE_X, WHITE_Y, WHITE_Z], dtype=np.float64)

# Scalar copies for the compiled kernels.
_M00, _M01, _M02 = SRGB_TO_XYZ[0]
_M10, _M11, _M12 = SRGB_TO_XYZ[1]
_M20, _M21, _M22 = SRGB_TO_XYZ[2]


# sRGB to linear


def rgb_to_linear(srgb: np.ndarray) -> np.ndarray:
    """
    Inverse sRGB companding. Vectorised.
    Args:
      srgb: array in 0..1 (float)
    Returns:
      float64 array, same shape
    """
    srgb_f = np.asarray(srgb, dtype=np.float64)
    with np.errstate(invalid="ignore"):
        return np.where(
            srgb_f > SRGB_THRESHOLD,
            ((srgb_f + 0.055) / 1.055) ** 2.4,
            srgb_f / SRGB_SLOPE,
        )


def linear_to_rgb(linear: np.ndarray) -> np.ndarray:
    """Forward sRGB companding; inverse of rgb_to_linear. Returns 0..1 floats."""
    lin = np.asarray(linear, dtype=np.float64)
    with np.errstate(invalid="ignore"):
        return np.where(
            lin > LINEAR_THRESHOLD,
            1.055 * np.maximum(lin, 0.0) ** (1.0 / 2.4) - 0.055,
            SRGB_SLOPE * lin,
        )


# sRGB <-> XYZ


def rgb_to_xyz(rgb: np.ndarray) -> XYZ:
    """sRGB (0..255, uint8 or float) to CIE XYZ on the 0..100 scale."""
    rgb_f = np.asarray(rgb, dtype=np.float64) / 255.0
    linear = rgb_to_linear(rgb_f) * 100.0
    return linear @ _M.T


def xyz_to_rgb_float(xyz: np.ndarray) -> RGBFloat:
    """
    CIE XYZ (0..100) to float sRGB on the 0..255 scale.
    Exact inverse of rgb_to_xyz; the result is neither clamped nor rounded.
    """
    linear = (np.asarray(xyz, dtype=np.float64) / 100.0) @ _M_INV.T
    return linear_to_rgb(linear) * 255.0


# XYZ <-> Lab


def xyz_to_lab(xyz: np.ndarray) -> Lab:
    """CIE XYZ (0..100) to CIE Lab, D65 white."""
    t = np.asarray(xyz, dtype=np.float64) / _WHITE
    f = np.where(t > LAB_EPSILON, np.cbrt(t), LAB_SLOPE * t + LAB_OFFSET)
    out = np.empty(f.shape, dtype=np.float64)
    out[..., 0] = 116.0 * f[..., 1] - 16.0
    out[..., 1] = 500.0 * (f[..., 0] - f[..., 1])
    out[..., 2] = 200.0 * (f[..., 1] - f[..., 2])
    return out


def lab_to_xyz(lab: np.ndarray) -> XYZ:
    """CIE Lab to CIE XYZ (0..100); exact inverse of xyz_to_lab."""
    lab_f = np.asarray(lab, dtype=np.float64)
    fy = (lab_f[..., 0] + 16.0) / 116.0
    fx = lab_f[..., 1] / 500.0 + fy
    fz = fy - lab_f[..., 2] / 200.0
    f = np.stack([fx, fy, fz], axis=-1)
    f3 = f * f * f
    t = np.where(f3 > LAB_EPSILON, f3, (f - LAB_OFFSET) / LAB_SLOPE)
    return t * _WHITE


def rgb_to_lab(rgb: np.ndarray) -> Lab:
    """
    sRGB to CIE Lab (D65).
    Accepts uint8 or float on the 0..255 scale. Preserves shape (...,3).
    """
    return xyz_to_lab(rgb_to_xyz(rgb))


# Metric


def diff2(lab1: np.ndarray, lab2: np.ndarray) -> np.ndarray:
    """
    Squared Euclidean distance in Lab over the last axis.
    Not square-rooted: only the ordering of costs matters.
    """
    d = np.asarray(lab1, dtype=np.float64) - np.asarray(lab2, dtype=np.float64)
    return np.sum(d * d, axis=-1)


# Compiled scalar kernels


@njit(cache=True)
def _inverse_companding(c: float) -> float:
    if c > SRGB_THRESHOLD:
        return ((c + 0.055) / 1.055) ** 2.4
    return c / SRGB_SLOPE


@njit(cache=True)
def _lab_f(t: float) -> float:
    if t > LAB_EPSILON:
        return t ** (1.0 / 3.0)
    return LAB_SLOPE * t + LAB_OFFSET


@njit(cache=True)
def lab_of_rgb_float(r: float, g: float, b: float):
    """Float sRGB (0..255) to Lab; scalar twin of rgb_to_lab."""
    rl = _inverse_companding(r / 255.0) * 100.0
    gl = _inverse_companding(g / 255.0) * 100.0
    bl = _inverse_companding(b / 255.0) * 100.0

    x = rl * _M00 + gl * _M01 + bl * _M02
    y = rl * _M10 + gl * _M11 + bl * _M12
    z = rl * _M20 + gl * _M21 + bl * _M22

    fx = _lab_f(x / WHITE_X)
    fy = _lab_f(y / WHITE_Y)
    fz = _lab_f(z / WHITE_Z)
    return 116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz)


@njit(cache=True)
def diff2_scalar(
    l1: float, a1: float, b1: float, l2: float, a2: float, b2: float
) -> float:
    dl = l1 - l2
    da = a1 - a2
    db = b1 - b2
    return dl * dl + da * da + db * db


__all__ = [
    "rgb_to_linear",
    "linear_to_rgb",
    "rgb_to_xyz",
    "xyz_to_rgb_float",
    "xyz_to_lab",
    "lab_to_xyz",
    "rgb_to_lab",
    "diff2",
    "lab_of_rgb_float",
    "diff2_scalar",
]
