# allrgb/permute/swap.py
from __future__ import annotations

"""
Random compare-and-swap toward the reference image.

Pick two output pixels. If the summed squared Lab error against the matching
reference pixels would drop by swapping them, swap. One pass tries as many
pairs as there are pixels, so each pixel takes part in two candidate swaps.
Only strict improvements are accepted.
"""

from typing import List

import numpy as np
from numba import njit

from ..colour_convert import diff2_scalar
from ..grid import PixelGrid
from ..utils import debug_log
from .match import _check_same_size


@njit(cache=True)
def _swap_pass(out_rgb, out_lab, ref_lab, here, there) -> int:
    swaps = 0
    for i in range(here.shape[0]):
        h = here[i]
        t = there[i]

        current = diff2_scalar(
            out_lab[h, 0], out_lab[h, 1], out_lab[h, 2],
            ref_lab[h, 0], ref_lab[h, 1], ref_lab[h, 2],
        ) + diff2_scalar(
            out_lab[t, 0], out_lab[t, 1], out_lab[t, 2],
            ref_lab[t, 0], ref_lab[t, 1], ref_lab[t, 2],
        )
        swapped = diff2_scalar(
            out_lab[h, 0], out_lab[h, 1], out_lab[h, 2],
            ref_lab[t, 0], ref_lab[t, 1], ref_lab[t, 2],
        ) + diff2_scalar(
            out_lab[t, 0], out_lab[t, 1], out_lab[t, 2],
            ref_lab[h, 0], ref_lab[h, 1], ref_lab[h, 2],
        )

        if swapped < current:
            for k in range(3):
                c = out_rgb[h, k]
                out_rgb[h, k] = out_rgb[t, k]
                out_rgb[t, k] = c
                v = out_lab[h, k]
                out_lab[h, k] = out_lab[t, k]
                out_lab[t, k] = v
            swaps += 1
    return swaps


def compare_and_swap(
    reference: PixelGrid,
    output: PixelGrid,
    passes: int,
    rng: np.random.Generator,
    debug: bool = False,
) -> List[int]:
    """
    Run `passes` rounds of random compare-and-swap on output, in place.

    Returns the number of swaps made in each pass.
    """
    _check_same_size(reference, output)
    if passes < 0:
        raise ValueError(f"passes must be non-negative, got {passes}")

    n = output.size
    counts: List[int] = []
    for pass_idx in range(passes):
        here = rng.permutation(n)
        there = rng.permutation(n)
        swaps = int(_swap_pass(output.rgb, output.lab, reference.lab, here, there))
        counts.append(swaps)
        if debug:
            debug_log(f"swap pass {pass_idx}: {swaps:,}/{n:,}")
    return counts


__all__ = ["compare_and_swap"]
