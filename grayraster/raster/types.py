from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..errors import ContractError, require
from ..instrumentation import INSTR, PIXMEM

PIX_MAX = 255
DEFAULT_MAXVAL = PIX_MAX

BytesLike = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class ImageStats:
    minimum: int
    maximum: int


class GrayImage:
    """8-bit grayscale raster stored as a row-major byte buffer.

    Pixel (x, y) lives at index ``y * width + x``; the origin is the top-left
    corner. Every level stays within ``[0, maxval]``.
    """

    __slots__ = ("_width", "_height", "_maxval", "_pixels")

    def __init__(self, width: int, height: int, maxval: int = DEFAULT_MAXVAL) -> None:
        self._check_geometry(width, height, maxval)
        self._width = width
        self._height = height
        self._maxval = maxval
        self._pixels: Optional[bytearray] = bytearray(width * height)

    @classmethod
    def create(cls, width: int, height: int, maxval: int = DEFAULT_MAXVAL) -> "GrayImage":
        """Return a new all-black image."""
        return cls(width, height, maxval)

    @classmethod
    def from_bytes(cls, width: int, height: int, maxval: int, data: BytesLike) -> "GrayImage":
        """Build an image from ``width * height`` row-major levels."""
        img = cls(width, height, maxval)
        require(len(data) == width * height, "Pixel data length must equal width * height")
        pixels = bytearray(data)
        if pixels and max(pixels) > maxval:
            raise ContractError("Pixel level exceeds maxval")
        img._pixels = pixels
        return img

    @staticmethod
    def _check_geometry(width: int, height: int, maxval: int) -> None:
        require(width >= 0, "Width must not be negative")
        require(height >= 0, "Height must not be negative")
        require(0 < maxval <= PIX_MAX, f"Maxval must be in 1..{PIX_MAX}")

    @property
    def _buffer(self) -> bytearray:
        if self._pixels is None:
            raise ContractError("Image has been released")
        return self._pixels

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def maxval(self) -> int:
        return self._maxval

    @property
    def size(self) -> int:
        return self._width * self._height

    @property
    def released(self) -> bool:
        return self._pixels is None

    def release(self) -> None:
        """Free the pixel buffer. The image must not be used afterwards."""
        if self._pixels is None:
            raise ContractError("Image already released")
        self._pixels = None

    def __enter__(self) -> "GrayImage":
        return self

    def __exit__(self, *exc_info: object) -> None:
        if not self.released:
            self.release()

    def valid_position(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def valid_rect(self, x: int, y: int, w: int, h: int) -> bool:
        """Check that the rectangle [x, x+w) x [y, y+h) lies inside the image."""
        require(x >= 0 and y >= 0, "Rectangle origin must not be negative")
        require(w >= 0 and h >= 0, "Rectangle size must not be negative")
        return x + w <= self._width and y + h <= self._height

    def _index(self, x: int, y: int) -> int:
        if not self.valid_position(x, y):
            raise ContractError(f"Position ({x}, {y}) outside {self._width}x{self._height} image")
        return y * self._width + x

    def get_pixel(self, x: int, y: int) -> int:
        pixels = self._buffer
        INSTR.add(PIXMEM)
        return pixels[self._index(x, y)]

    def set_pixel(self, x: int, y: int, level: int) -> None:
        pixels = self._buffer
        require(0 <= level <= PIX_MAX, "Level must fit in 8 bits")
        INSTR.add(PIXMEM)
        pixels[self._index(x, y)] = level

    def stats(self) -> ImageStats:
        """Return the smallest and largest level present in the image."""
        require(self.size > 0, "Stats are undefined for an empty image")
        minimum = maximum = self.get_pixel(0, 0)
        for y in range(self._height):
            for x in range(self._width):
                if x == 0 and y == 0:
                    continue
                level = self.get_pixel(x, y)
                if level < minimum:
                    minimum = level
                elif level > maximum:
                    maximum = level
        return ImageStats(minimum, maximum)

    def to_bytes(self) -> bytes:
        return bytes(self._buffer)

    def copy(self) -> "GrayImage":
        return GrayImage.from_bytes(self._width, self._height, self._maxval, self._buffer)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GrayImage):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and self._maxval == other._maxval
            and self._buffer == other._buffer
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        state = " released" if self.released else ""
        return f"GrayImage({self._width}x{self._height}, maxval={self._maxval}{state})"
