from .codec import decode_pgm, encode_pgm, load, load_pgm, save, save_pgm
from .errors import ContractError, ImageError, ImageIOError, ImageLoadError, ImageSaveError
from .instrumentation import INSTR, init
from .raster import (
    GrayImage,
    ImageStats,
    blend,
    blur,
    brighten,
    crop,
    locate_subimage,
    match_subimage,
    mirror,
    negative,
    paste,
    rotate,
    threshold,
)

__version__ = "0.1.0"

__all__ = [
    "blend",
    "blur",
    "brighten",
    "ContractError",
    "crop",
    "decode_pgm",
    "encode_pgm",
    "GrayImage",
    "ImageError",
    "ImageIOError",
    "ImageLoadError",
    "ImageSaveError",
    "ImageStats",
    "init",
    "INSTR",
    "load",
    "load_pgm",
    "locate_subimage",
    "match_subimage",
    "mirror",
    "negative",
    "paste",
    "rotate",
    "save",
    "save_pgm",
    "threshold",
]
