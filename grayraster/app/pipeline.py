from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, TextIO, Tuple

from .. import codec
from ..errors import ImageError
from ..instrumentation import INSTR
from ..raster import (
    GrayImage,
    blend,
    blur,
    brighten,
    crop,
    locate_subimage,
    mirror,
    negative,
    paste,
    rotate,
    threshold,
)

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV_VAR = "GRAYRASTER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


class PipelineError(ImageError):
    """A command could not be parsed or applied."""


@dataclass
class ToolSettings:
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, verbose: bool = False) -> "ToolSettings":
        if verbose:
            return cls(log_level="DEBUG")
        return cls(log_level=os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper())


def parse_ints(arg: str, count: int, command: str) -> Tuple[int, ...]:
    parts = arg.split(",")
    if len(parts) != count:
        raise PipelineError(f"{command}: expected {count} comma-separated integers, got '{arg}'")
    try:
        return tuple(int(part) for part in parts)
    except ValueError as exc:
        raise PipelineError(f"{command}: invalid integer in '{arg}'") from exc


def parse_float(arg: str, command: str) -> float:
    try:
        return float(arg)
    except ValueError as exc:
        raise PipelineError(f"{command}: invalid number '{arg}'") from exc


@dataclass
class ImagePipeline:
    """Runs image commands left to right over a stack of images."""

    out: TextIO
    stack: List[GrayImage] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._commands: Dict[str, Tuple[int, Callable[..., None]]] = {
            "open": (1, self._open),
            "new": (1, self._new),
            "save": (1, self._save),
            "info": (0, self._info),
            "neg": (0, self._negative),
            "thr": (1, self._threshold),
            "bri": (1, self._brighten),
            "blur": (1, self._blur),
            "rotate": (0, self._rotate),
            "mirror": (0, self._mirror),
            "crop": (1, self._crop),
            "paste": (1, self._paste),
            "blend": (1, self._blend),
            "locate": (0, self._locate),
            "tic": (0, self._tic),
            "toc": (0, self._toc),
        }

    @property
    def commands(self) -> List[str]:
        return sorted(self._commands)

    def run(self, tokens: Sequence[str]) -> None:
        pos = 0
        while pos < len(tokens):
            name = tokens[pos]
            entry = self._commands.get(name)
            if entry is None:
                raise PipelineError(f"Unknown command '{name}'")
            arity, handler = entry
            args = tokens[pos + 1 : pos + 1 + arity]
            if len(args) != arity:
                raise PipelineError(f"{name}: missing argument")
            logger.debug("Running %s %s", name, " ".join(args))
            handler(*args)
            pos += 1 + arity

    def close(self) -> None:
        while self.stack:
            self.stack.pop().release()

    def _top(self, command: str) -> GrayImage:
        if not self.stack:
            raise PipelineError(f"{command}: no image loaded")
        return self.stack[-1]

    def _pop_pair(self, command: str) -> Tuple[GrayImage, GrayImage]:
        if len(self.stack) < 2:
            raise PipelineError(f"{command}: needs two images")
        img2 = self.stack.pop()
        return self.stack[-1], img2

    def _replace_top(self, img: GrayImage) -> None:
        self.stack.pop().release()
        self.stack.append(img)

    def _open(self, path: str) -> None:
        self.stack.append(codec.load(path))

    def _new(self, arg: str) -> None:
        width, height, maxval = parse_ints(arg, 3, "new")
        self.stack.append(GrayImage.create(width, height, maxval))

    def _save(self, path: str) -> None:
        codec.save(self._top("save"), path)

    def _info(self) -> None:
        img = self._top("info")
        line = f"{img.width}x{img.height} maxval={img.maxval}"
        if img.size:
            stats = img.stats()
            line += f" min={stats.minimum} max={stats.maximum}"
        print(line, file=self.out)

    def _negative(self) -> None:
        negative(self._top("neg"))

    def _threshold(self, arg: str) -> None:
        (thr,) = parse_ints(arg, 1, "thr")
        threshold(self._top("thr"), thr)

    def _brighten(self, arg: str) -> None:
        brighten(self._top("bri"), parse_float(arg, "bri"))

    def _blur(self, arg: str) -> None:
        dx, dy = parse_ints(arg, 2, "blur")
        blur(self._top("blur"), dx, dy)

    def _rotate(self) -> None:
        self._replace_top(rotate(self._top("rotate")))

    def _mirror(self) -> None:
        self._replace_top(mirror(self._top("mirror")))

    def _crop(self, arg: str) -> None:
        x, y, w, h = parse_ints(arg, 4, "crop")
        self._replace_top(crop(self._top("crop"), x, y, w, h))

    def _paste(self, arg: str) -> None:
        x, y = parse_ints(arg, 2, "paste")
        img1, img2 = self._pop_pair("paste")
        with img2:
            paste(img1, x, y, img2)

    def _blend(self, arg: str) -> None:
        parts = arg.split(",")
        if len(parts) != 3:
            raise PipelineError(f"blend: expected X,Y,ALPHA, got '{arg}'")
        x, y = parse_ints(",".join(parts[:2]), 2, "blend")
        alpha = parse_float(parts[2], "blend")
        img1, img2 = self._pop_pair("blend")
        with img2:
            blend(img1, x, y, img2, alpha)

    def _locate(self) -> None:
        img1, img2 = self._pop_pair("locate")
        with img2:
            found: Optional[Tuple[int, int]] = locate_subimage(img1, img2)
        if found is None:
            print("not found", file=self.out)
        else:
            print(f"found at {found[0]},{found[1]}", file=self.out)

    def _tic(self) -> None:
        INSTR.reset()

    def _toc(self) -> None:
        print(INSTR.report().format(), file=self.out)
