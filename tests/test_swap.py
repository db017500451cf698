"""Test the random compare-and-swap optimizer.

Run:
    pytest tests/test_swap.py -v
"""

import numpy as np
import pytest

from allrgb.analysis import same_colors, total_error
from allrgb.grid import PixelGrid
from allrgb.palette_data import make_palette
from allrgb.permute import compare_and_swap


def _reference(rows, cols, seed=0):
    rng = np.random.default_rng(seed)
    return PixelGrid(rows, cols, rng.integers(0, 256, size=(rows * cols, 3), dtype=np.uint8))


def _shuffled_palette(reference, seed=1):
    rng = np.random.default_rng(seed)
    palette = make_palette(reference.size)
    return PixelGrid(reference.rows, reference.cols, palette[rng.permutation(reference.size)])


def test_two_by_two_converges():
    colours = np.array(
        [[0, 0, 0], [255, 255, 255], [255, 0, 0], [0, 255, 0]], dtype=np.uint8
    )
    reference = PixelGrid(2, 2, colours)
    output = PixelGrid(2, 2, colours[[3, 2, 0, 1]])

    compare_and_swap(reference, output, 60, np.random.default_rng(4))

    assert np.array_equal(output.rgb, reference.rgb)
    assert total_error(reference, output) == 0.0


def test_error_never_increases():
    reference = _reference(16, 16)
    output = _shuffled_palette(reference)
    rng = np.random.default_rng(2)

    previous = total_error(reference, output)
    for _ in range(8):
        compare_and_swap(reference, output, 1, rng)
        current = total_error(reference, output)
        assert current <= previous * (1 + 1e-12)
        previous = current


def test_swaps_improve_error_and_keep_colours():
    reference = _reference(16, 16)
    output = _shuffled_palette(reference)
    before_colours = output.rgb.copy()
    before = total_error(reference, output)

    counts = compare_and_swap(reference, output, 5, np.random.default_rng(3))

    assert len(counts) == 5
    assert counts[0] > 0
    assert total_error(reference, output) < before
    assert same_colors(output.rgb, before_colours)
    assert np.allclose(output.lab, PixelGrid(16, 16, output.rgb).lab)


def test_same_seed_same_result():
    reference = _reference(12, 10)
    a = _shuffled_palette(reference)
    b = _shuffled_palette(reference)

    compare_and_swap(reference, a, 4, np.random.default_rng(42))
    compare_and_swap(reference, b, 4, np.random.default_rng(42))

    assert np.array_equal(a.rgb, b.rgb)


def test_zero_passes_is_a_no_op():
    reference = _reference(4, 4)
    output = _shuffled_palette(reference)
    before = output.rgb.copy()
    assert compare_and_swap(reference, output, 0, np.random.default_rng(0)) == []
    assert np.array_equal(output.rgb, before)


def test_debug_logs_each_pass(capsys):
    reference = _reference(4, 4)
    output = _shuffled_palette(reference)
    compare_and_swap(reference, output, 2, np.random.default_rng(0), debug=True)
    out = capsys.readouterr().out
    assert "[debug] swap pass 0:" in out
    assert "[debug] swap pass 1:" in out


def test_bad_arguments_raise():
    reference = _reference(4, 4)
    with pytest.raises(ValueError):
        compare_and_swap(reference, _reference(2, 2), 1, np.random.default_rng(0))
    with pytest.raises(ValueError):
        compare_and_swap(reference, reference.copy(), -1, np.random.default_rng(0))
