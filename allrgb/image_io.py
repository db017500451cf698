# allrgb/image_io.py
from __future__ import annotations

import io
from pathlib import Path

import numpy as np
from PIL import Image, ImageOps

from .core_types import U8Image, assert_u8_image_rgb

"""
Image I/O helpers (RGB in sRGB).

Read failures (missing file, unknown format, truncated data) and write
failures propagate to the caller; nothing is partially recovered.
"""

try:
    from PIL import ImageCms  # ICC conversion if profile present
except ImportError:  # pragma: no cover
    ImageCms = None  # type: ignore[assignment]


def _convert_to_srgb_rgb(im: Image.Image) -> Image.Image:
    im = ImageOps.exif_transpose(im)
    icc_bytes = im.info.get("icc_profile")

    if icc_bytes and ImageCms is not None:
        try:
            src_prof = ImageCms.ImageCmsProfile(io.BytesIO(icc_bytes))
            dst_prof = ImageCms.createProfile("sRGB")
            im2 = ImageCms.profileToProfile(
                im.convert("RGB"),
                src_prof,
                dst_prof,
                renderingIntent=ImageCms.Intent.PERCEPTUAL,
                outputMode="RGB",
            )
            if im2 is None:
                return im.convert("RGB")
            return im2
        except (ImageCms.PyCMSError, OSError, ValueError):
            # Unusable embedded profile: treat the data as sRGB.
            return im.convert("RGB")

    return im.convert("RGB")


def load_image_rgb(path: Path) -> U8Image:
    """Load an image with Pillow and return uint8 (H,W,3) sRGB."""
    with Image.open(path) as im0:
        im = _convert_to_srgb_rgb(im0)
    return np.array(im, dtype=np.uint8)


# Lossless 8-bit RGB encoders only; anything else would change the colours.
LOSSLESS_SUFFIXES = (".png", ".bmp", ".tif", ".tiff", ".ppm")


def is_writable_image_path(path: Path) -> bool:
    """True if the suffix names a lossless format Pillow can save."""
    suffix = Path(path).suffix.lower()
    if suffix not in LOSSLESS_SUFFIXES:
        return False
    fmt = Image.registered_extensions().get(suffix)
    return fmt is not None and fmt in Image.SAVE


def save_image_rgb(path: Path, rgb: U8Image) -> Path:
    """Write uint8 (H,W,3) to path; the format follows the suffix and must be lossless."""
    path = Path(path)
    if not is_writable_image_path(path):
        raise ValueError(f"unsupported output format: {path.suffix or path.name}")
    arr = assert_u8_image_rgb(np.ascontiguousarray(rgb))
    Image.fromarray(arr).save(path)
    return path


def palette_to_image(palette: U8Image, rows: int, cols: int) -> U8Image:
    """Lay a palette out row-major as a rows x cols image."""
    return np.asarray(palette, dtype=np.uint8).reshape(rows, cols, 3).copy()


__all__ = [
    "LOSSLESS_SUFFIXES",
    "load_image_rgb",
    "save_image_rgb",
    "is_writable_image_path",
    "palette_to_image",
]
