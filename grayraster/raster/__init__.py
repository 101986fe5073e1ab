from .compose import blend, paste
from .filters import blur
from .geometry import crop, mirror, rotate
from .pointwise import brighten, negative, round_half_up, saturate, threshold
from .search import locate_subimage, match_subimage
from .types import DEFAULT_MAXVAL, PIX_MAX, GrayImage, ImageStats

__all__ = [
    "blend",
    "blur",
    "brighten",
    "crop",
    "DEFAULT_MAXVAL",
    "GrayImage",
    "ImageStats",
    "locate_subimage",
    "match_subimage",
    "mirror",
    "negative",
    "paste",
    "PIX_MAX",
    "rotate",
    "round_half_up",
    "saturate",
    "threshold",
]
