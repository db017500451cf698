# allrgb/__init__.py
"""
allrgb package.

Purpose:
  Turn a photograph into an image that uses every 24-bit colour once (or an
  evenly spread subset, one per pixel), arranged to resemble the photograph.
  See allrgb_permute.py / allrgb.cli for the command line.

Public API:
  make_palette      : evenly spread colours along a 3D Hilbert curve.
  PixelGrid         : row-major grid of colours with their Lab values.
  match_ascending   : luminance rank matching.
  compare_and_swap  : random pairwise swap optimizer.
  compare_and_swap_dithered : swap optimizer on blurred neighbourhoods.
  colour_convert    : sRGB / XYZ / Lab transforms and diff2.
  hilbert           : Hilbert index encode / decode / compare.
  core_types        : shared type aliases and colour helpers.
  analysis          : error metrics and colour coverage checks.
  image_io          : Pillow image load / save.
  utils             : console logging helpers.

Quick start:
  import numpy as np
  from allrgb import PixelGrid, make_palette, compare_and_swap
  ref = PixelGrid.from_image(photo_rgb)
  rng = np.random.default_rng(42)
  out = PixelGrid(ref.rows, ref.cols, make_palette(ref.size)[rng.permutation(ref.size)])
  compare_and_swap(ref, out, 10, rng)
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import colour_convert
from . import core_types
from . import hilbert
from . import palette_data
from . import analysis
from . import image_io
from . import utils
from . import permute

from .grid import Pixel, PixelGrid  # noqa: E402
from .palette_data import ColorTransform, make_palette  # noqa: E402
from .permute import (  # noqa: E402
    PassReport,
    compare_and_swap,
    compare_and_swap_dithered,
    match_ascending,
)

__all__ = [
    "__version__",
    "colour_convert",
    "core_types",
    "hilbert",
    "palette_data",
    "analysis",
    "image_io",
    "utils",
    "permute",
    "Pixel",
    "PixelGrid",
    "ColorTransform",
    "make_palette",
    "match_ascending",
    "compare_and_swap",
    "compare_and_swap_dithered",
    "PassReport",
]
