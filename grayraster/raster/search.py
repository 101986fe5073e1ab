from __future__ import annotations

import logging
from typing import Optional, Tuple

from ..errors import require
from .types import GrayImage

logger = logging.getLogger(__name__)


def match_subimage(img1: GrayImage, x: int, y: int, img2: GrayImage) -> bool:
    """Return True if img2 equals the region of img1 starting at (x, y).

    A region running past img1's edge never matches.
    """
    require(img1.valid_position(x, y), f"Position ({x}, {y}) outside image")
    if x + img2.width > img1.width or y + img2.height > img1.height:
        return False
    for j in range(img2.height):
        for i in range(img2.width):
            if img1.get_pixel(x + i, y + j) != img2.get_pixel(i, j):
                return False
    return True


def locate_subimage(img1: GrayImage, img2: GrayImage) -> Optional[Tuple[int, int]]:
    """Find the first position of img2 inside img1.

    Candidates are scanned row by row (y outer, x inner), so the result is the
    match nearest the top-left in raster order. Returns None when img2 does
    not occur.
    """
    last_x = img1.width - img2.width
    last_y = img1.height - img2.height
    logger.debug(
        "Locating %dx%d in %dx%d", img2.width, img2.height, img1.width, img1.height
    )
    for y in range(last_y + 1):
        for x in range(last_x + 1):
            if not img1.valid_position(x, y):
                continue
            if match_subimage(img1, x, y, img2):
                return x, y
    return None
