# allrgb/cli.py
from __future__ import annotations

"""
Command line surface and pipeline driver.

  load reference -> palette -> seed -> [orient] -> [dump palette] -> shuffle
  -> [rank match] -> [swap passes] -> [dither passes] -> write output
"""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

import numpy as np
from PIL import Image, UnidentifiedImageError

from .analysis import has_all_colors, rms_error, same_colors
from .constants import NUM_COLORS
from .grid import PixelGrid
from .image_io import (
    LOSSLESS_SUFFIXES,
    is_writable_image_path,
    load_image_rgb,
    palette_to_image,
    save_image_rgb,
)
from .palette_data import ColorTransform, make_palette
from .permute import compare_and_swap, compare_and_swap_dithered, match_ascending
from .utils import (
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_duration,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
    warn,
)


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return value


def _seed_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}")
    if value < 0:
        raise argparse.ArgumentTypeError(f"seed must be non-negative: {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="allrgb-permute",
        description=(
            "Rearrange an evenly spread set of RGB colours, one per pixel, "
            "so they resemble the input picture."
        ),
    )
    parser.add_argument("input", type=Path, help="Reference picture")
    parser.add_argument("output", type=Path, help="Output image path")
    parser.add_argument(
        "-p",
        "--palette",
        type=Path,
        default=None,
        metavar="FILE",
        help="Dump the unshuffled palette (after --orient) to an image",
    )
    parser.add_argument(
        "-a",
        "--ascending",
        action="store_true",
        help=(
            "Match pixels in ascending order of luminance, without regard "
            "for hue or saturation."
        ),
    )
    parser.add_argument(
        "-s",
        "--swap",
        type=_positive_int,
        default=0,
        metavar="PASSES",
        help=(
            "Swap pixels if it makes them look more like the input image. "
            "Passes is roughly how many times it tries for each pixel."
        ),
    )
    parser.add_argument(
        "-d",
        "--dither",
        type=_positive_int,
        default=0,
        metavar="PASSES",
        help=(
            "Swap pixels if it makes their neighbourhood look more like the "
            "input image, which dithers colour."
        ),
    )
    parser.add_argument(
        "--seed", type=_seed_int, default=None, metavar="N", help="Random seed"
    )
    parser.add_argument(
        "--orient",
        action="store_true",
        help="Randomly reorient the colour cube before laying out the palette",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose stage details")
    return parser


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def resolve_seed(seed: Optional[int]) -> int:
    """The given seed, or a fresh one from OS entropy."""
    if seed is not None:
        return int(seed)
    return int(np.random.SeedSequence().entropy)


def permute_image(
    reference_rgb: np.ndarray,
    seed: int,
    ascending: bool = False,
    swap_passes: int = 0,
    dither_passes: int = 0,
    orient: bool = False,
    palette_out: Optional[Path] = None,
    debug: bool = False,
) -> np.ndarray:
    """
    Run the whole pipeline on a uint8 (H,W,3) reference and return the
    permuted palette image of the same shape.
    """
    reference = PixelGrid.from_image(reference_rgb)
    rows, cols = reference.shape

    t0 = time.perf_counter()
    palette = make_palette(reference.size)

    rng = np.random.default_rng(seed)
    if orient:
        transform = ColorTransform.random(rng)
        palette = transform(palette)
        if debug:
            debug_log(
                key_value_pairs_to_string(
                    [
                        ("Axis order", str(transform.axis_order)),
                        ("Inverted", str(transform.axis_inverted)),
                    ]
                )
            )
    if palette_out is not None:
        save_image_rgb(palette_out, palette_to_image(palette, rows, cols))
        log(f"Wrote palette {palette_out}")
    output = PixelGrid(rows, cols, palette[rng.permutation(reference.size)])
    if debug:
        debug_log(
            f"palette + shuffle {format_duration(time.perf_counter() - t0)}  "
            f"rms: {rms_error(reference, output):.3f}"
        )

    if ascending:
        t = time.perf_counter()
        match_ascending(reference, output)
        log(f"Ascending match done  rms: {rms_error(reference, output):.3f}")
        if debug:
            debug_log(f"match {format_duration(time.perf_counter() - t)}")

    if swap_passes > 0:
        t = time.perf_counter()
        counts = compare_and_swap(reference, output, swap_passes, rng, debug=debug)
        log(
            key_value_pairs_to_string(
                [
                    ("Swap passes", swap_passes),
                    ("Swaps", int(sum(counts))),
                    ("RMS", rms_error(reference, output)),
                ]
            )
        )
        if debug:
            debug_log(f"swap {format_duration(time.perf_counter() - t)}")

    if dither_passes > 0:
        t = time.perf_counter()
        compare_and_swap_dithered(reference, output, dither_passes, rng)
        if debug:
            debug_log(f"dither {format_duration(time.perf_counter() - t)}")

    if debug:
        debug_log(f"colours preserved: {same_colors(output.rgb, palette)}")
        if output.size == NUM_COLORS:
            debug_log(f"all colours present: {has_all_colors(output.rgb)}")

    return output.to_image()


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point. Returns the process exit status.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    src: Path = args.input
    if not src.exists():
        error(f"not found: {src}")
        return 2
    for dst in (args.output, args.palette):
        if dst is not None and not is_writable_image_path(dst):
            formats = ", ".join(LOSSLESS_SUFFIXES)
            error(f"unsupported output format: {dst} (lossless only: {formats})")
            return 2

    t_start = time.perf_counter()
    print_banner(src.name)
    try:
        reference_rgb = load_image_rgb(src)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        error(f"cannot read {src}: {e}")
        return 1

    rows, cols = int(reference_rgb.shape[0]), int(reference_rgb.shape[1])
    size = rows * cols
    if size < 2:
        error(f"image too small: {cols}x{rows}")
        return 1
    if size > NUM_COLORS:
        warn(f"{size:,} pixels exceed {NUM_COLORS:,} colours; colours will repeat")

    seed = resolve_seed(args.seed)
    print_config_line(
        "run",
        [
            ("Size", f"{cols}x{rows}"),
            ("Seed", str(seed)),
            ("Ascending", bool(args.ascending)),
            ("Swap passes", args.swap),
            ("Dither passes", args.dither),
            ("Orient", bool(args.orient)),
        ],
        debug=False,
    )

    try:
        result = permute_image(
            reference_rgb,
            seed,
            ascending=args.ascending,
            swap_passes=args.swap,
            dither_passes=args.dither,
            orient=args.orient,
            palette_out=args.palette,
            debug=args.debug,
        )
        save_image_rgb(args.output, result)
    except OSError as e:
        error(f"cannot write output: {e}")
        return 1

    log(f"Wrote {args.output}")
    log(f"Total time {format_duration(time.perf_counter() - t_start)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
