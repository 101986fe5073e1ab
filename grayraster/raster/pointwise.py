from __future__ import annotations

import math

from ..errors import require
from .types import PIX_MAX, GrayImage


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties going up."""
    return int(math.floor(value + 0.5))


def saturate(value: int, maxval: int) -> int:
    """Clamp ``value`` into ``[0, maxval]``."""
    if value < 0:
        return 0
    if value > maxval:
        return maxval
    return value


def negative(img: GrayImage) -> None:
    """Replace every level by ``maxval - level``."""
    maxval = img.maxval
    for y in range(img.height):
        for x in range(img.width):
            img.set_pixel(x, y, maxval - img.get_pixel(x, y))


def threshold(img: GrayImage, thr: int) -> None:
    """Send levels >= thr to maxval and the rest to 0."""
    require(0 <= thr <= PIX_MAX, "Threshold must fit in 8 bits")
    maxval = img.maxval
    for y in range(img.height):
        for x in range(img.width):
            img.set_pixel(x, y, maxval if img.get_pixel(x, y) >= thr else 0)


def brighten(img: GrayImage, factor: float) -> None:
    """Scale every level by ``factor`` (0..1), rounding half up and saturating."""
    require(0.0 <= factor <= 1.0, "Brighten factor must be in [0, 1]")
    maxval = img.maxval
    for y in range(img.height):
        for x in range(img.width):
            level = round_half_up(img.get_pixel(x, y) * factor)
            img.set_pixel(x, y, saturate(level, maxval))
