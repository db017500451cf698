# allrgb/grid.py
from __future__ import annotations

"""
Pixel value object and the row-major pixel grid the optimizers work on.

A pixel carries its colour and the Lab of that colour. The pair is only ever
built or changed together, so Lab never goes stale.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .colour_convert import rgb_to_lab
from .core_types import IndexArray, Lab, LabTuple, RGBTuple, U8Image, coerce_to_rgb_tuple


@dataclass(frozen=True)
class Pixel:
    """A colour with its precomputed Lab."""

    rgb: RGBTuple
    lab: LabTuple

    @classmethod
    def from_rgb(cls, rgb) -> "Pixel":
        colour = coerce_to_rgb_tuple(rgb)
        lab = rgb_to_lab(np.array(colour, dtype=np.uint8))
        return cls(colour, (float(lab[0]), float(lab[1]), float(lab[2])))

    def with_color(self, rgb) -> "Pixel":
        """New pixel with a replaced colour and its recomputed Lab."""
        return Pixel.from_rgb(rgb)


class PixelGrid:
    """
    rows x cols cells held as parallel flat arrays:
      rgb: uint8 [N,3]
      lab: float64 [N,3]
    Linear index = row * cols + col. Mutators keep both arrays in step.
    """

    __slots__ = ("rows", "cols", "rgb", "lab")

    def __init__(self, rows: int, cols: int, colors: np.ndarray) -> None:
        if rows <= 0 or cols <= 0:
            raise ValueError(f"grid dimensions must be positive: {rows}x{cols}")
        flat = np.ascontiguousarray(colors, dtype=np.uint8).reshape(-1, 3)
        if flat.shape[0] != rows * cols:
            raise ValueError(
                f"expected {rows * cols} colours for a {rows}x{cols} grid, got {flat.shape[0]}"
            )
        self.rows = int(rows)
        self.cols = int(cols)
        self.rgb: U8Image = flat.copy()
        self.lab: Lab = np.ascontiguousarray(rgb_to_lab(self.rgb))

    @classmethod
    def from_image(cls, image: U8Image) -> "PixelGrid":
        height, width = int(image.shape[0]), int(image.shape[1])
        return cls(height, width, image)

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def size(self) -> int:
        return self.rows * self.cols

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, idx: int) -> Pixel:
        r, g, b = (int(v) for v in self.rgb[idx])
        L, a, bb = (float(v) for v in self.lab[idx])
        return Pixel((r, g, b), (L, a, bb))

    def index(self, row: int, col: int) -> int:
        return row * self.cols + col

    def swap(self, i: int, j: int) -> None:
        """Exchange two cells, colour and Lab together."""
        self.rgb[[i, j]] = self.rgb[[j, i]]
        self.lab[[i, j]] = self.lab[[j, i]]

    def assign(self, i: int, rgb) -> None:
        """Replace a cell's colour and recompute its Lab in the same step."""
        pixel = Pixel.from_rgb(rgb)
        self.rgb[i] = pixel.rgb
        self.lab[i] = pixel.lab

    def reorder(self, order: IndexArray) -> None:
        """Cell i takes the pixel previously at order[i]. order must be a permutation."""
        order = np.asarray(order, dtype=np.int64)
        if order.shape != (self.size,):
            raise ValueError("order must cover every cell")
        self.rgb = np.ascontiguousarray(self.rgb[order])
        self.lab = np.ascontiguousarray(self.lab[order])

    def to_image(self) -> U8Image:
        return self.rgb.reshape(self.rows, self.cols, 3).copy()

    def copy(self) -> "PixelGrid":
        out = PixelGrid.__new__(PixelGrid)
        out.rows = self.rows
        out.cols = self.cols
        out.rgb = self.rgb.copy()
        out.lab = self.lab.copy()
        return out


__all__ = ["Pixel", "PixelGrid"]
