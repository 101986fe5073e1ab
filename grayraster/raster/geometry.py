"""
Geometric transformations. Each returns a new image and leaves the source untouched.
"""
from __future__ import annotations

from ..errors import require
from .types import GrayImage


def rotate(img: GrayImage) -> GrayImage:
    """Rotate 90° counter-clockwise."""
    out = GrayImage.create(img.height, img.width, img.maxval)
    last_x = img.width - 1
    for y in range(img.height):
        for x in range(img.width):
            out.set_pixel(y, last_x - x, img.get_pixel(x, y))
    return out


def mirror(img: GrayImage) -> GrayImage:
    """Mirror horizontally (flip left-right)."""
    out = GrayImage.create(img.width, img.height, img.maxval)
    last_x = img.width - 1
    for y in range(img.height):
        for x in range(img.width):
            out.set_pixel(last_x - x, y, img.get_pixel(x, y))
    return out


def crop(img: GrayImage, x: int, y: int, w: int, h: int) -> GrayImage:
    """Copy the w x h rectangle whose top-left corner is (x, y)."""
    require(img.valid_rect(x, y, w, h), f"Crop rectangle {w}x{h}+{x}+{y} outside image")
    out = GrayImage.create(w, h, img.maxval)
    for j in range(h):
        for i in range(w):
            out.set_pixel(i, j, img.get_pixel(x + i, y + j))
    return out
