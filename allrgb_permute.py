#!/usr/bin/env python3
"""
allrgb_permute.py
Rearrange an evenly spread set of RGB colours, one per pixel, so they look like a picture.

Usage:
  python allrgb_permute.py INPUT OUTPUT [-p FILE] [-a] [-s PASSES] [-d PASSES] [--seed N] [--orient] [--debug]

Stages:
  palette : one colour per pixel. A picture with 4096x4096 pixels gets every 24-bit
            colour once; other sizes sample a 3D Hilbert curve through the cube.
  -a      : put the n-th darkest palette colour where the n-th darkest pixel is.
  -s      : random pairwise swaps that lower the per-pixel Lab error.
  -d      : as -s, but judged after a 3x3 blur, which dithers colour.

Input:
  Any Pillow-readable image. Alpha is dropped.

Output:
  Format follows the OUTPUT suffix and must be lossless: .png .bmp .tif .tiff .ppm.
  -p writes the unshuffled palette as an image too, after --orient if given.

Notes:
  Without --seed a seed is drawn once and printed, so any run can be repeated.
  Single threaded. The swap loops are compiled with Numba on first use.
"""

import sys

from allrgb.cli import main

if __name__ == "__main__":
    sys.exit(main())
