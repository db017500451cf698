"""Test the blurred-neighbourhood (dithering) optimizer.

Test cases:
    - truncated kernel norms at corners, edges and interior
    - neighbour sums against a direct 3x3 evaluation
    - incremental accumulators stay equal to a fresh recomputation
    - RMS measured on every 10th pass only
    - colours preserved, seeded runs repeat

Run:
    pytest tests/test_dither.py -v
"""

import numpy as np
import pytest

from allrgb.analysis import rms_error, same_colors
from allrgb.colour_convert import rgb_to_lab
from allrgb.grid import PixelGrid
from allrgb.palette_data import make_palette
from allrgb.permute import PassReport, compare_and_swap_dithered
from allrgb.permute.dither import NeighbourBlur, kernel_norms, neighbour_sums

KERNEL = np.array([[1, 2, 1], [2, 4, 2], [1, 2, 1]], dtype=np.float64)


def _reference(rows, cols, seed=0):
    rng = np.random.default_rng(seed)
    return PixelGrid(rows, cols, rng.integers(0, 256, size=(rows * cols, 3), dtype=np.uint8))


def _shuffled_palette(reference, seed=1):
    rng = np.random.default_rng(seed)
    palette = make_palette(reference.size)
    return PixelGrid(reference.rows, reference.cols, palette[rng.permutation(reference.size)])


def _direct_neighbour_sum(img, row, col):
    rows, cols = img.shape[:2]
    acc = np.zeros(3)
    for dr in (-1, 0, 1):
        for dc in (-1, 0, 1):
            if dr == 0 and dc == 0:
                continue
            r, c = row + dr, col + dc
            if 0 <= r < rows and 0 <= c < cols:
                acc += KERNEL[dr + 1, dc + 1] * img[r, c]
    return acc


def test_kernel_norms_are_truncated():
    norms = kernel_norms(4, 5).reshape(4, 5)
    for r, c in [(0, 0), (0, 4), (3, 0), (3, 4)]:
        assert norms[r, c] == 9
    assert norms[0, 2] == 12
    assert norms[2, 0] == 12
    assert norms[3, 1] == 12
    assert norms[2, 4] == 12
    assert np.all(norms[1:-1, 1:-1] == 16)


def test_kernel_norms_single_row():
    norms = kernel_norms(1, 3)
    assert norms.tolist() == [6.0, 8.0, 6.0]


def test_neighbour_sums_match_direct_evaluation():
    grid = _reference(5, 6)
    img = grid.rgb.reshape(5, 6, 3).astype(np.float64)
    sums = neighbour_sums(grid).reshape(5, 6, 3)
    for r in range(5):
        for c in range(6):
            assert np.allclose(sums[r, c], _direct_neighbour_sum(img, r, c))


def test_blurred_uniform_grid_is_unchanged():
    grid = PixelGrid(3, 3, np.full((9, 3), 77, dtype=np.uint8))
    blur = NeighbourBlur.of(grid)
    for pos in range(9):
        assert np.allclose(blur.blurred(pos, (77, 77, 77)), [77, 77, 77])


def test_accumulators_track_swaps():
    reference = _reference(10, 12)
    output = _shuffled_palette(reference)
    blur = NeighbourBlur.of(output)

    compare_and_swap_dithered(
        reference, output, 6, np.random.default_rng(7), report=False, blur=blur
    )

    assert np.array_equal(blur.sums, neighbour_sums(output))


def test_colours_preserved_and_lab_in_sync():
    reference = _reference(8, 8)
    output = _shuffled_palette(reference)
    before = output.rgb.copy()

    reports = compare_and_swap_dithered(
        reference, output, 4, np.random.default_rng(5), report=False
    )

    assert len(reports) == 4
    assert reports[0].swaps > 0
    assert same_colors(output.rgb, before)
    assert np.allclose(output.lab, rgb_to_lab(output.rgb))


def test_rms_reported_every_tenth_pass():
    reference = _reference(6, 6)
    output = _shuffled_palette(reference)

    reports = compare_and_swap_dithered(
        reference, output, 12, np.random.default_rng(0), report=False
    )

    measured = [r.index for r in reports if r.rms is not None]
    assert measured == [0, 10]
    assert [r.index for r in reports] == list(range(12))
    for r in reports:
        assert r.frequency == pytest.approx(r.swaps / 36)


def test_final_rms_matches_analysis():
    reference = _reference(6, 6)
    output = _shuffled_palette(reference)
    reports = compare_and_swap_dithered(
        reference, output, 1, np.random.default_rng(0), report=False
    )
    assert reports[0].rms == pytest.approx(rms_error(reference, output))


def test_report_lines(capsys):
    reference = _reference(4, 4)
    output = _shuffled_palette(reference)
    compare_and_swap_dithered(reference, output, 2, np.random.default_rng(0))
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("pass 0: ")
    assert "/16 " in lines[0]
    assert "rms: " in lines[0]
    assert lines[1].startswith("pass 1: ")
    assert "rms" not in lines[1]


def test_describe_format():
    report = PassReport(index=3, swaps=5, frequency=0.5)
    assert report.describe(10) == "pass 3: 5/10 0.5"
    report = PassReport(index=0, swaps=5, frequency=0.5, rms=12.25)
    assert report.describe(10) == "pass 0: 5/10 0.5 rms: 12.25"


def test_same_seed_same_result():
    reference = _reference(9, 7)
    a = _shuffled_palette(reference)
    b = _shuffled_palette(reference)

    compare_and_swap_dithered(reference, a, 3, np.random.default_rng(8), report=False)
    compare_and_swap_dithered(reference, b, 3, np.random.default_rng(8), report=False)

    assert np.array_equal(a.rgb, b.rgb)


def test_bad_arguments_raise():
    reference = _reference(3, 3)
    with pytest.raises(ValueError):
        compare_and_swap_dithered(
            reference, _reference(2, 2), 1, np.random.default_rng(0), report=False
        )
    with pytest.raises(ValueError):
        compare_and_swap_dithered(
            reference, reference.copy(), -1, np.random.default_rng(0), report=False
        )
