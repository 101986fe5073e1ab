"""Shared fixtures for grayraster tests."""

from __future__ import annotations

import pytest

from grayraster.instrumentation import INSTR
from grayraster.raster import GrayImage

from .helpers import image_from_rows


@pytest.fixture()
def gradient() -> GrayImage:
    """5x3 image with distinct levels 0, 10, ..., 140 in raster order."""
    return image_from_rows(
        [
            [0, 10, 20, 30, 40],
            [50, 60, 70, 80, 90],
            [100, 110, 120, 130, 140],
        ]
    )


@pytest.fixture(autouse=True)
def reset_counters() -> None:
    INSTR.reset()
