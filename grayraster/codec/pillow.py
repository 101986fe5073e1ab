from __future__ import annotations

import logging
import os
from typing import List

from PIL import Image, ImageOps, UnidentifiedImageError

from ..errors import ImageLoadError, ImageSaveError, require
from ..raster.pointwise import round_half_up
from ..raster.types import DEFAULT_MAXVAL, PIX_MAX, GrayImage
from .pgm import PathLike

logger = logging.getLogger(__name__)

PILLOW_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".bmp", ".tif", ".tiff"}


def _rescale_table(src_max: int, dst_max: int) -> List[int]:
    return [round_half_up(level * dst_max / src_max) for level in range(src_max + 1)]


def to_pil(img: GrayImage) -> Image.Image:
    """Return an "L" mode copy with levels stretched to 0..255."""
    data = img.to_bytes()
    if img.maxval != PIX_MAX:
        table = _rescale_table(img.maxval, PIX_MAX)
        data = bytes(table[level] for level in data)
    return Image.frombytes("L", (img.width, img.height), data)


def normalize_image(image: Image.Image) -> Image.Image:
    image = ImageOps.exif_transpose(image)
    if image.mode != "L":
        return image.convert("L")
    return image


def from_pil(image: Image.Image, maxval: int = DEFAULT_MAXVAL) -> GrayImage:
    """Convert any Pillow image to gray and quantize it to ``[0, maxval]``."""
    require(0 < maxval <= PIX_MAX, f"Maxval must be in 1..{PIX_MAX}")
    gray = normalize_image(image)
    data = gray.tobytes()
    if maxval != PIX_MAX:
        table = _rescale_table(PIX_MAX, maxval)
        data = bytes(table[level] for level in data)
    return GrayImage.from_bytes(gray.width, gray.height, maxval, data)


def load_image(path: PathLike, maxval: int = DEFAULT_MAXVAL) -> GrayImage:
    name = os.fspath(path)
    try:
        with Image.open(name) as image:
            image.load()
            img = from_pil(image, maxval)
    except (FileNotFoundError, IsADirectoryError, PermissionError) as exc:
        raise ImageLoadError("Open failed", exc.errno, name) from exc
    except UnidentifiedImageError as exc:
        raise ImageLoadError("Invalid file format", path=name) from exc
    except OSError as exc:
        raise ImageLoadError("Reading pixels", exc.errno, name) from exc
    logger.debug("Loaded %s via Pillow: %dx%d", name, img.width, img.height)
    return img


def save_image(img: GrayImage, path: PathLike) -> None:
    name = os.fspath(path)
    try:
        to_pil(img).save(name)
    except (FileNotFoundError, IsADirectoryError, PermissionError) as exc:
        raise ImageSaveError("Open failed", exc.errno, name) from exc
    except ValueError as exc:
        raise ImageSaveError(f"Unsupported output format: {exc}", path=name) from exc
    except OSError as exc:
        raise ImageSaveError("Writing pixels failed", exc.errno, name) from exc
    logger.debug("Saved %s via Pillow: %dx%d", name, img.width, img.height)
