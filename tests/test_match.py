"""Test ascending luminance matching.

Run:
    pytest tests/test_match.py -v
"""

import numpy as np
import pytest

from allrgb.analysis import same_colors
from allrgb.grid import PixelGrid
from allrgb.permute import match_ascending


def _grey_grid(levels, rows, cols):
    grey = np.asarray(levels, dtype=np.uint8)
    return PixelGrid(rows, cols, np.stack([grey, grey, grey], axis=-1))


def test_darkest_goes_where_darkest_is():
    reference = _grey_grid([200, 10, 120, 60], 2, 2)
    output = _grey_grid([0, 50, 100, 150], 2, 2)

    match_ascending(reference, output)

    assert output.rgb[:, 0].tolist() == [150, 0, 100, 50]


def test_luminance_order_follows_reference():
    rng = np.random.default_rng(1)
    reference = PixelGrid(8, 8, rng.integers(0, 256, size=(64, 3), dtype=np.uint8))
    output = PixelGrid(8, 8, rng.integers(0, 256, size=(64, 3), dtype=np.uint8))
    original = output.rgb.copy()

    match_ascending(reference, output)

    ref_order = np.argsort(reference.lab[:, 0], kind="stable")
    assert np.all(np.diff(output.lab[ref_order, 0]) >= 0)
    assert same_colors(output.rgb, original)


def test_ties_keep_index_order():
    reference = _grey_grid([5, 5, 5, 5], 1, 4)
    output = PixelGrid(
        1, 4, np.array([[9, 9, 9], [1, 1, 1], [9, 9, 9], [4, 4, 4]], dtype=np.uint8)
    )

    match_ascending(reference, output)

    assert output.rgb[:, 0].tolist() == [1, 4, 9, 9]


def test_size_mismatch_raises():
    with pytest.raises(ValueError):
        match_ascending(_grey_grid([1, 2], 1, 2), _grey_grid([1, 2, 3], 1, 3))
