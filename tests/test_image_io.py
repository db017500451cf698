"""Test Pillow image load / save.

Run:
    pytest tests/test_image_io.py -v
"""

import numpy as np
import pytest
from PIL import Image, UnidentifiedImageError

from allrgb.image_io import (
    is_writable_image_path,
    load_image_rgb,
    palette_to_image,
    save_image_rgb,
)


def test_png_round_trip(tmp_path):
    rgb = np.random.default_rng(0).integers(0, 256, size=(5, 7, 3), dtype=np.uint8)
    path = save_image_rgb(tmp_path / "out.png", rgb)
    assert path.exists()
    assert np.array_equal(load_image_rgb(path), rgb)


def test_alpha_is_dropped(tmp_path):
    rgba = np.zeros((2, 2, 4), dtype=np.uint8)
    rgba[..., 0] = 200
    rgba[..., 3] = 10
    path = tmp_path / "rgba.png"
    Image.fromarray(rgba).save(path)

    rgb = load_image_rgb(path)
    assert rgb.shape == (2, 2, 3)
    assert np.all(rgb[..., 0] == 200)


def test_greyscale_is_expanded(tmp_path):
    path = tmp_path / "grey.png"
    Image.fromarray(np.full((3, 4), 90, dtype=np.uint8)).save(path)
    rgb = load_image_rgb(path)
    assert rgb.shape == (3, 4, 3)
    assert np.all(rgb == 90)


def test_unreadable_file_raises(tmp_path):
    path = tmp_path / "junk.png"
    path.write_bytes(b"not an image at all")
    with pytest.raises(UnidentifiedImageError):
        load_image_rgb(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_image_rgb(tmp_path / "missing.png")


def test_save_rejects_non_rgb(tmp_path):
    with pytest.raises(TypeError):
        save_image_rgb(tmp_path / "bad.png", np.zeros((2, 2), dtype=np.uint8))


def test_writable_suffixes():
    assert is_writable_image_path("a.png")
    assert is_writable_image_path("a.PNG")
    assert is_writable_image_path("b.bmp")
    assert is_writable_image_path("b.tiff")
    assert is_writable_image_path("b.ppm")
    for lossy in ("a.jpg", "a.jpeg", "a.webp", "a.gif"):
        assert not is_writable_image_path(lossy)
    assert not is_writable_image_path("read_only.psd")
    assert not is_writable_image_path("c.notanimage")
    assert not is_writable_image_path("noext")


def test_palette_to_image_is_row_major():
    palette = np.arange(6 * 3, dtype=np.uint8).reshape(6, 3)
    img = palette_to_image(palette, 2, 3)
    assert img.shape == (2, 3, 3)
    assert img[1, 0].tolist() == palette[3].tolist()


def test_save_refuses_lossy_format(tmp_path):
    rgb = np.zeros((2, 2, 3), dtype=np.uint8)
    with pytest.raises(ValueError):
        save_image_rgb(tmp_path / "out.jpg", rgb)
    assert not (tmp_path / "out.jpg").exists()
