"""Raw PGM ("P5") encoding and decoding.

Only 8-bit files are handled: one byte per pixel, maxval in 1..255.
Header layout::

    P5 <ws> [#comment\\n]* <width> <ws> [#comment\\n]* <height> <ws>
    [#comment\\n]* <maxval> <one whitespace byte> <width*height bytes>
"""
from __future__ import annotations

import logging
import os
from typing import Optional, Union

from ..errors import ImageLoadError, ImageSaveError
from ..instrumentation import INSTR, PIXMEM
from ..raster.types import PIX_MAX, GrayImage

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

MAGIC = b"P5"
_WHITESPACE = b" \t\n\r\x0b\x0c"


class _HeaderScanner:
    def __init__(self, data: bytes, path: Optional[str]) -> None:
        self._data = data
        self._path = path
        self.pos = 0

    def fail(self, cause: str) -> ImageLoadError:
        return ImageLoadError(cause, path=self._path)

    def _peek(self) -> Optional[int]:
        if self.pos < len(self._data):
            return self._data[self.pos]
        return None

    def skip_whitespace(self) -> None:
        while self._peek() is not None and self._data[self.pos] in _WHITESPACE:
            self.pos += 1

    def skip_comments(self) -> int:
        """Skip '#' lines (and the whitespace after them); return how many."""
        skipped = 0
        while self._peek() == ord("#"):
            end = self._data.find(b"\n", self.pos)
            if end < 0:
                break
            self.pos = end + 1
            skipped += 1
            self.skip_whitespace()
        return skipped

    def read_magic(self) -> None:
        if self._data[self.pos : self.pos + len(MAGIC)] != MAGIC:
            raise self.fail("Invalid file format")
        self.pos += len(MAGIC)
        self.skip_whitespace()

    def read_int(self, cause: str) -> int:
        self.skip_whitespace()
        start = self.pos
        if self._peek() in (ord("+"), ord("-")):
            self.pos += 1
        digits_start = self.pos
        while self._peek() is not None and 0x30 <= self._data[self.pos] <= 0x39:
            self.pos += 1
        if self.pos == digits_start:
            raise self.fail(cause)
        return int(self._data[start : self.pos])

    def read_single_whitespace(self) -> None:
        if self._peek() is None or self._data[self.pos] not in _WHITESPACE:
            raise self.fail("Whitespace expected")
        self.pos += 1


def decode_pgm(data: bytes, path: Optional[str] = None) -> GrayImage:
    """Parse a complete P5 file held in memory."""
    scanner = _HeaderScanner(data, path)
    scanner.read_magic()
    scanner.skip_comments()
    width = scanner.read_int("Invalid width")
    if width < 0:
        raise scanner.fail("Invalid width")
    scanner.skip_whitespace()
    scanner.skip_comments()
    height = scanner.read_int("Invalid height")
    if height < 0:
        raise scanner.fail("Invalid height")
    scanner.skip_whitespace()
    scanner.skip_comments()
    maxval = scanner.read_int("Invalid maxval")
    if not 0 < maxval <= PIX_MAX:
        raise scanner.fail("Invalid maxval")
    scanner.read_single_whitespace()

    size = width * height
    pixels = data[scanner.pos : scanner.pos + size]
    if len(pixels) != size:
        raise scanner.fail("Reading pixels")
    if pixels and max(pixels) > maxval:
        raise scanner.fail("Invalid pixel level")
    INSTR.add(PIXMEM, size)
    return GrayImage.from_bytes(width, height, maxval, pixels)


def encode_header(img: GrayImage) -> bytes:
    return f"P5\n{img.width} {img.height}\n{img.maxval}\n".encode("ascii")


def encode_pgm(img: GrayImage) -> bytes:
    """Serialize an image to P5 bytes, without comments."""
    INSTR.add(PIXMEM, img.size)
    return encode_header(img) + img.to_bytes()


def load_pgm(path: PathLike) -> GrayImage:
    """Read a P5 file from disk into a new image."""
    name = os.fspath(path)
    try:
        with open(name, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise ImageLoadError("Open failed", exc.errno, name) from exc
    img = decode_pgm(data, name)
    logger.debug("Loaded %s: %dx%d maxval=%d", name, img.width, img.height, img.maxval)
    return img


def save_pgm(img: GrayImage, path: PathLike) -> None:
    """Write an image as a P5 file. A partial file may remain on failure."""
    name = os.fspath(path)
    header = encode_header(img)
    pixels = img.to_bytes()
    try:
        handle = open(name, "wb")
    except OSError as exc:
        raise ImageSaveError("Open failed", exc.errno, name) from exc
    with handle:
        try:
            handle.write(header)
        except OSError as exc:
            raise ImageSaveError("Writing header failed", exc.errno, name) from exc
        try:
            handle.write(pixels)
            handle.flush()
        except OSError as exc:
            raise ImageSaveError("Writing pixels failed", exc.errno, name) from exc
    INSTR.add(PIXMEM, img.size)
    logger.debug("Saved %s: %dx%d maxval=%d", name, img.width, img.height, img.maxval)
