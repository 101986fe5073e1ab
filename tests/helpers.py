from __future__ import annotations

from typing import List, Sequence

from grayraster.raster import GrayImage


def image_from_rows(rows: Sequence[Sequence[int]], maxval: int = 255) -> GrayImage:
    height = len(rows)
    width = len(rows[0]) if rows else 0
    data = bytes(level for row in rows for level in row)
    return GrayImage.from_bytes(width, height, maxval, data)


def rows_of(img: GrayImage) -> List[List[int]]:
    return [[img.get_pixel(x, y) for x in range(img.width)] for y in range(img.height)]
