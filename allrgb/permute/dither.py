# allrgb/permute/dither.py
from __future__ import annotations

"""
Compare-and-swap on blurred neighbourhoods, which dithers colour.

As in swap.py, random pairs of output pixels are swapped when that lowers the
summed squared Lab error. Here each output pixel is first blurred with its
neighbours by a 3x3 Gaussian

    1  2  1
    2  4  2
    1  2  1

and the blurred colour is compared with the single reference pixel. It
dithers and still keeps pixel-level detail such as fine lines.

Random pair selection makes a pre-blurred image useless, so each cell keeps
the weighted sum of its eight neighbours (the kernel with a hole in the
middle). Either candidate centre colour is added to that sum to get both
blurred versions. After a swap, the neighbours of both cells are updated.

At the borders the kernel is truncated rather than reflected or extended:
  interior  norm 16
  one edge  norm 12
  corner    norm 9
"""

from dataclasses import dataclass
from typing import List, Optional

import numpy as np
from numba import njit

from ..analysis import rms_error
from ..colour_convert import diff2_scalar, lab_of_rgb_float
from ..constants import CENTER_WEIGHT, CORNER_WEIGHT, EDGE_WEIGHT, RMS_REPORT_EVERY
from ..grid import PixelGrid
from ..utils import log
from .match import _check_same_size

# (row offset, col offset, weight) for the eight neighbours.
NEIGHBOURS = (
    (-1, -1, CORNER_WEIGHT),
    (-1, 0, EDGE_WEIGHT),
    (-1, 1, CORNER_WEIGHT),
    (0, -1, EDGE_WEIGHT),
    (0, 1, EDGE_WEIGHT),
    (1, -1, CORNER_WEIGHT),
    (1, 0, EDGE_WEIGHT),
    (1, 1, CORNER_WEIGHT),
)


def _convolve_neighbours(values: np.ndarray) -> np.ndarray:
    """Weighted neighbour sum with the truncated kernel. values: (H,W,C)."""
    rows, cols = values.shape[0], values.shape[1]
    padded = np.zeros((rows + 2, cols + 2) + values.shape[2:], dtype=np.float64)
    padded[1:-1, 1:-1] = values
    acc = np.zeros(values.shape, dtype=np.float64)
    for dr, dc, w in NEIGHBOURS:
        acc += w * padded[1 + dr : 1 + dr + rows, 1 + dc : 1 + dc + cols]
    return acc


def neighbour_sums(grid: PixelGrid) -> np.ndarray:
    """Per-cell weighted sum of neighbour colours, float64 [N,3]."""
    img = grid.rgb.reshape(grid.rows, grid.cols, 3).astype(np.float64)
    return np.ascontiguousarray(_convolve_neighbours(img).reshape(-1, 3))


def kernel_norms(rows: int, cols: int) -> np.ndarray:
    """Per-cell kernel total: centre weight plus in-bounds neighbour weights."""
    ones = np.ones((rows, cols), dtype=np.float64)
    return np.ascontiguousarray(
        (_convolve_neighbours(ones) + CENTER_WEIGHT).reshape(-1)
    )


@dataclass
class NeighbourBlur:
    """Neighbour accumulators and kernel norms for one output grid."""

    rows: int
    cols: int
    sums: np.ndarray  # float64 [N,3]
    norms: np.ndarray  # float64 [N]

    @classmethod
    def of(cls, grid: PixelGrid) -> "NeighbourBlur":
        return cls(
            grid.rows, grid.cols, neighbour_sums(grid), kernel_norms(grid.rows, grid.cols)
        )

    def blurred(self, pos: int, center) -> np.ndarray:
        """Blurred colour of cell pos if it held `center`."""
        c = np.asarray(center, dtype=np.float64)
        return (self.sums[pos] + CENTER_WEIGHT * c) / self.norms[pos]


@njit(cache=True)
def _update_neighbours(sums, pos, rows, cols, d0, d1, d2):
    row = pos // cols
    col = pos % cols
    for dr in range(-1, 2):
        r = row + dr
        if r < 0 or r >= rows:
            continue
        for dc in range(-1, 2):
            if dr == 0 and dc == 0:
                continue
            c = col + dc
            if c < 0 or c >= cols:
                continue
            w = CORNER_WEIGHT if (dr != 0 and dc != 0) else EDGE_WEIGHT
            n = r * cols + c
            sums[n, 0] += w * d0
            sums[n, 1] += w * d1
            sums[n, 2] += w * d2


@njit(cache=True)
def _blurred_error(sums, norms, ref_lab, pos, r, g, b):
    s = norms[pos]
    L, A, B = lab_of_rgb_float(
        (sums[pos, 0] + CENTER_WEIGHT * r) / s,
        (sums[pos, 1] + CENTER_WEIGHT * g) / s,
        (sums[pos, 2] + CENTER_WEIGHT * b) / s,
    )
    return diff2_scalar(L, A, B, ref_lab[pos, 0], ref_lab[pos, 1], ref_lab[pos, 2])


@njit(cache=True)
def _dither_pass(out_rgb, out_lab, sums, norms, ref_lab, here, there, rows, cols):
    swaps = 0
    for i in range(here.shape[0]):
        h = here[i]
        t = there[i]

        hr = float(out_rgb[h, 0])
        hg = float(out_rgb[h, 1])
        hb = float(out_rgb[h, 2])
        tr = float(out_rgb[t, 0])
        tg = float(out_rgb[t, 1])
        tb = float(out_rgb[t, 2])

        current = _blurred_error(sums, norms, ref_lab, h, hr, hg, hb) + _blurred_error(
            sums, norms, ref_lab, t, tr, tg, tb
        )
        swapped = _blurred_error(sums, norms, ref_lab, h, tr, tg, tb) + _blurred_error(
            sums, norms, ref_lab, t, hr, hg, hb
        )

        if swapped < current:
            # Mutual neighbours are not special-cased: the estimates above
            # used each other's old colour.
            _update_neighbours(sums, t, rows, cols, hr - tr, hg - tg, hb - tb)
            _update_neighbours(sums, h, rows, cols, tr - hr, tg - hg, tb - hb)
            for k in range(3):
                c = out_rgb[h, k]
                out_rgb[h, k] = out_rgb[t, k]
                out_rgb[t, k] = c
                v = out_lab[h, k]
                out_lab[h, k] = out_lab[t, k]
                out_lab[t, k] = v
            swaps += 1
    return swaps


@dataclass(frozen=True)
class PassReport:
    """Per-pass statistics; rms is only measured every RMS_REPORT_EVERY passes."""

    index: int
    swaps: int
    frequency: float
    rms: Optional[float] = None

    def describe(self, total: int) -> str:
        line = f"pass {self.index}: {self.swaps}/{total} {self.frequency:.6g}"
        if self.rms is not None:
            line += f" rms: {self.rms:.6g}"
        return line


def compare_and_swap_dithered(
    reference: PixelGrid,
    output: PixelGrid,
    passes: int,
    rng: np.random.Generator,
    report: bool = True,
    blur: Optional[NeighbourBlur] = None,
) -> List[PassReport]:
    """
    Run `passes` rounds of blurred compare-and-swap on output, in place.

    Args:
      reference: the photograph as a PixelGrid (only Lab is read)
      output   : the palette grid being permuted
      passes   : number of passes, each trying output.size pairs
      rng      : the run's generator
      report   : print one line per pass
      blur     : accumulators for output; built from output when omitted

    Returns:
      one PassReport per pass
    """
    _check_same_size(reference, output)
    if passes < 0:
        raise ValueError(f"passes must be non-negative, got {passes}")
    if blur is None:
        blur = NeighbourBlur.of(output)

    n = output.size
    reports: List[PassReport] = []
    for pass_idx in range(passes):
        here = rng.permutation(n)
        there = rng.permutation(n)
        swaps = int(
            _dither_pass(
                output.rgb,
                output.lab,
                blur.sums,
                blur.norms,
                reference.lab,
                here,
                there,
                output.rows,
                output.cols,
            )
        )

        rms = None
        if pass_idx % RMS_REPORT_EVERY == 0:
            rms = rms_error(reference, output)
        pass_report = PassReport(pass_idx, swaps, swaps / float(n), rms)
        reports.append(pass_report)
        if report:
            log(pass_report.describe(n))
    return reports


__all__ = [
    "NEIGHBOURS",
    "neighbour_sums",
    "kernel_norms",
    "NeighbourBlur",
    "PassReport",
    "compare_and_swap_dithered",
]
