from __future__ import annotations

import math

from ..errors import require
from .pointwise import round_half_up
from .types import GrayImage


def _require_fits(img1: GrayImage, x: int, y: int, img2: GrayImage) -> None:
    require(
        img1.valid_rect(x, y, img2.width, img2.height),
        f"{img2.width}x{img2.height} image does not fit at ({x}, {y})",
    )


def paste(img1: GrayImage, x: int, y: int, img2: GrayImage) -> None:
    """Overwrite the region of img1 at (x, y) with img2."""
    _require_fits(img1, x, y, img2)
    for j in range(img2.height):
        for i in range(img2.width):
            img1.set_pixel(x + i, y + j, img2.get_pixel(i, j))


def blend_level(p1: int, p2: int, alpha: float, maxval: int) -> int:
    """Round ``(1 - alpha) * p1 + alpha * p2`` half up, saturated to [0, maxval]."""
    level = (1.0 - alpha) * p1 + alpha * p2
    if math.isnan(level):
        # both terms overflowed with opposite signs
        level = p1 + alpha * (p2 - p1)
    return round_half_up(min(max(level, 0.0), float(maxval)))


def blend(img1: GrayImage, x: int, y: int, img2: GrayImage, alpha: float) -> None:
    """Mix img2 into img1 at (x, y): ``(1 - alpha) * p1 + alpha * p2``.

    Any finite ``alpha`` is allowed; results saturate to [0, maxval].
    """
    require(math.isfinite(alpha), "Blend alpha must be finite")
    _require_fits(img1, x, y, img2)
    maxval = img1.maxval
    for j in range(img2.height):
        for i in range(img2.width):
            p1 = img1.get_pixel(x + i, y + j)
            p2 = img2.get_pixel(i, j)
            img1.set_pixel(x + i, y + j, blend_level(p1, p2, alpha, maxval))
