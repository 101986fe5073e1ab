from __future__ import annotations

import os
from typing import Set

from ..errors import ImageLoadError, ImageSaveError
from ..raster.types import GrayImage
from .pgm import PathLike, decode_pgm, encode_pgm, load_pgm, save_pgm
from .pillow import PILLOW_EXTENSIONS, from_pil, load_image, save_image, to_pil

PGM_EXTENSIONS: Set[str] = {".pgm"}
SUPPORTED_EXTENSIONS: Set[str] = PGM_EXTENSIONS | PILLOW_EXTENSIONS


def _extension(path: PathLike) -> str:
    return os.path.splitext(os.fspath(path))[1].lower()


def load(path: PathLike) -> GrayImage:
    """Load an image, picking the decoder from the file extension."""
    ext = _extension(path)
    if ext in PGM_EXTENSIONS:
        return load_pgm(path)
    if ext in PILLOW_EXTENSIONS:
        return load_image(path)
    raise ImageLoadError("Unsupported file extension", path=os.fspath(path))


def save(img: GrayImage, path: PathLike) -> None:
    ext = _extension(path)
    if ext in PGM_EXTENSIONS:
        save_pgm(img, path)
    elif ext in PILLOW_EXTENSIONS:
        save_image(img, path)
    else:
        raise ImageSaveError("Unsupported file extension", path=os.fspath(path))


__all__ = [
    "decode_pgm",
    "encode_pgm",
    "from_pil",
    "load",
    "load_image",
    "load_pgm",
    "save",
    "save_image",
    "save_pgm",
    "SUPPORTED_EXTENSIONS",
    "to_pil",
]
