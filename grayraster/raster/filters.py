from __future__ import annotations

import logging
from typing import List

from ..errors import require
from .compose import paste
from .types import GrayImage

logger = logging.getLogger(__name__)


def _summed_area_table(img: GrayImage) -> List[List[int]]:
    """Return table T where T[y][x] is the sum of levels in [0, x) x [0, y)."""
    width = img.width
    table = [[0] * (width + 1)]
    for y in range(img.height):
        above = table[y]
        row = [0] * (width + 1)
        running = 0
        for x in range(width):
            running += img.get_pixel(x, y)
            row[x + 1] = above[x + 1] + running
        table.append(row)
    return table


def mean_level(total: int, count: int) -> int:
    """Integer form of ``floor(total / count + 0.5)``."""
    return (2 * total + count) // (2 * count)


def blur(img: GrayImage, dx: int, dy: int) -> None:
    """Apply a (2dx+1) x (2dy+1) mean filter in place.

    Near the border only the pixels inside the image are averaged. All means
    are taken over the original levels.
    """
    require(dx >= 0 and dy >= 0, "Blur radii must not be negative")
    width, height = img.width, img.height
    logger.debug("Blurring %dx%d image with dx=%d dy=%d", width, height, dx, dy)
    table = _summed_area_table(img)
    scratch = GrayImage.create(width, height, img.maxval)
    try:
        for y in range(height):
            top = max(0, y - dy)
            bottom = min(height, y + dy + 1)
            for x in range(width):
                left = max(0, x - dx)
                right = min(width, x + dx + 1)
                total = (
                    table[bottom][right]
                    - table[top][right]
                    - table[bottom][left]
                    + table[top][left]
                )
                count = (right - left) * (bottom - top)
                scratch.set_pixel(x, y, mean_level(total, count))
        paste(img, 0, 0, scratch)
    finally:
        scratch.release()
