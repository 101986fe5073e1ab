from __future__ import annotations

from typing import Optional


class ImageError(Exception):
    """Base class for every error raised by grayraster."""


class ContractError(ImageError, ValueError):
    """A caller broke an operation's preconditions."""


class ImageIOError(ImageError):
    """Recoverable failure while reading or writing an image.

    ``cause`` is a short human-readable reason. ``errno`` is the OS error
    code when the failure came from the operating system, otherwise None.
    """

    def __init__(self, cause: str, errno: Optional[int] = None, path: Optional[str] = None) -> None:
        self.cause = cause
        self.errno = errno
        self.path = path
        super().__init__(self._format())

    def _format(self) -> str:
        parts = [self.cause]
        if self.path:
            parts.append(f"({self.path})")
        if self.errno is not None:
            parts.append(f"[errno {self.errno}]")
        return " ".join(parts)


class ImageLoadError(ImageIOError):
    pass


class ImageSaveError(ImageIOError):
    pass


def require(condition: bool, message: str) -> None:
    """Raise ContractError with ``message`` unless ``condition`` holds."""
    if not condition:
        raise ContractError(message)
