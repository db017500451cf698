# allrgb/permute/__init__.py
"""
Permutation API. Every stage rearranges the output grid in place and never
changes which colours it holds.

Provides:
  match_ascending(reference, output)
    Put the n-th darkest output pixel where the n-th darkest reference pixel is.

  compare_and_swap(reference, output, passes, rng, debug=False) -> list[int]
    Random pairwise swaps that lower the per-pixel Lab error.

  compare_and_swap_dithered(reference, output, passes, rng, report=True, blur=None)
    -> list[PassReport]
    As above, but the output is judged after a 3x3 blur, which dithers.

    Args (all three):
      reference : PixelGrid of the photograph
      output    : PixelGrid of palette colours, same cell count
      passes    : int, candidate pairs per pass equal the cell count
      rng       : numpy.random.Generator owned by the run
"""

from .match import match_ascending
from .swap import compare_and_swap
from .dither import PassReport, compare_and_swap_dithered

__all__ = [
    "match_ascending",
    "compare_and_swap",
    "compare_and_swap_dithered",
    "PassReport",
]
