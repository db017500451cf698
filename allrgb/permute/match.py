# allrgb/permute/match.py
from __future__ import annotations

import numpy as np

from ..grid import PixelGrid


def _check_same_size(reference: PixelGrid, output: PixelGrid) -> None:
    if reference.size != output.size:
        raise ValueError(
            f"reference has {reference.size} cells but output has {output.size}"
        )


def match_ascending(reference: PixelGrid, output: PixelGrid) -> None:
    """
    Permute output in place so that its n-th darkest pixel sits where the
    reference's n-th darkest pixel is.

    Only Lab lightness is used; hue and saturation are ignored. Ties keep
    their original index order.
    """
    _check_same_size(reference, output)
    ref_rank = np.argsort(reference.lab[:, 0], kind="stable")
    out_rank = np.argsort(output.lab[:, 0], kind="stable")

    order = np.empty(output.size, dtype=np.int64)
    order[ref_rank] = out_rank
    output.reorder(order)


__all__ = ["match_ascending"]
