"""Tests for the GrayImage raster core."""

from __future__ import annotations

import pytest

from grayraster.errors import ContractError
from grayraster.instrumentation import INSTR, PIXMEM
from grayraster.raster import GrayImage, ImageStats, negative

from .helpers import rows_of


class TestCreate:
    def test_new_image_is_black(self) -> None:
        img = GrayImage.create(3, 2, 100)
        assert (img.width, img.height, img.maxval) == (3, 2, 100)
        assert img.to_bytes() == bytes(6)

    def test_empty_image_is_allowed(self) -> None:
        img = GrayImage.create(0, 7)
        assert img.size == 0
        assert img.to_bytes() == b""

    @pytest.mark.parametrize(
        "width, height, maxval",
        [(-1, 2, 255), (2, -1, 255), (2, 2, 0), (2, 2, 256)],
    )
    def test_rejects_bad_geometry(self, width: int, height: int, maxval: int) -> None:
        with pytest.raises(ContractError):
            GrayImage.create(width, height, maxval)

    def test_from_bytes_checks_length_and_levels(self) -> None:
        with pytest.raises(ContractError):
            GrayImage.from_bytes(2, 2, 255, b"\x00\x00\x00")
        with pytest.raises(ContractError):
            GrayImage.from_bytes(1, 1, 10, b"\x0b")


class TestPositions:
    def test_valid_position(self) -> None:
        img = GrayImage.create(4, 3)
        assert img.valid_position(0, 0)
        assert img.valid_position(3, 2)
        assert not img.valid_position(4, 0)
        assert not img.valid_position(0, 3)
        assert not img.valid_position(-1, 0)

    def test_valid_rect(self) -> None:
        img = GrayImage.create(4, 3)
        assert img.valid_rect(0, 0, 4, 3)
        assert img.valid_rect(1, 1, 3, 2)
        assert img.valid_rect(4, 3, 0, 0)
        assert not img.valid_rect(1, 0, 4, 1)
        assert not img.valid_rect(0, 2, 1, 2)

    def test_valid_rect_rejects_negative_arguments(self) -> None:
        img = GrayImage.create(4, 3)
        with pytest.raises(ContractError):
            img.valid_rect(-1, 0, 1, 1)
        with pytest.raises(ContractError):
            img.valid_rect(0, 0, 1, -1)


class TestPixels:
    def test_set_then_get_everywhere(self) -> None:
        img = GrayImage.create(3, 2, 7)
        for y in range(2):
            for x in range(3):
                for level in range(8):
                    img.set_pixel(x, y, level)
                    assert img.get_pixel(x, y) == level

    def test_layout_is_row_major(self) -> None:
        img = GrayImage.create(3, 2)
        img.set_pixel(1, 1, 9)
        assert img.to_bytes() == bytes([0, 0, 0, 0, 9, 0])

    def test_out_of_range_access_is_a_contract_error(self) -> None:
        img = GrayImage.create(2, 2)
        with pytest.raises(ContractError):
            img.get_pixel(2, 0)
        with pytest.raises(ContractError):
            img.set_pixel(0, -1, 1)
        with pytest.raises(ContractError):
            img.set_pixel(0, 0, 256)

    def test_accesses_are_counted(self) -> None:
        img = GrayImage.create(2, 2)
        img.set_pixel(0, 0, 1)
        img.get_pixel(0, 0)
        assert INSTR.count(PIXMEM) == 2


class TestStats:
    def test_scenario_from_single_bright_pixel(self) -> None:
        img = GrayImage.create(4, 4, 255)
        img.set_pixel(2, 1, 200)
        assert img.stats() == ImageStats(0, 200)
        negative(img)
        assert img.get_pixel(2, 1) == 55
        levels = rows_of(img)
        levels[1][2] = 255
        assert all(level == 255 for row in levels for level in row)

    def test_stats_do_not_depend_on_first_pixel_being_extreme(self) -> None:
        img = GrayImage.from_bytes(3, 1, 255, bytes([50, 7, 90]))
        assert img.stats() == ImageStats(7, 90)

    def test_uniform_image(self) -> None:
        img = GrayImage.from_bytes(2, 2, 255, bytes([33] * 4))
        assert img.stats() == ImageStats(33, 33)

    def test_each_pixel_read_once(self) -> None:
        img = GrayImage.create(5, 4)
        INSTR.reset()
        img.stats()
        assert INSTR.count(PIXMEM) == 20

    def test_empty_image_has_no_stats(self) -> None:
        with pytest.raises(ContractError):
            GrayImage.create(0, 0).stats()


class TestLifecycle:
    def test_release_invalidates(self) -> None:
        img = GrayImage.create(2, 2)
        img.release()
        assert img.released
        with pytest.raises(ContractError):
            img.get_pixel(0, 0)

    def test_double_release_is_a_contract_error(self) -> None:
        img = GrayImage.create(1, 1)
        img.release()
        with pytest.raises(ContractError):
            img.release()

    def test_context_manager_releases(self) -> None:
        with GrayImage.create(1, 1) as img:
            img.set_pixel(0, 0, 3)
        assert img.released

    def test_copy_is_independent(self) -> None:
        img = GrayImage.create(2, 1)
        dup = img.copy()
        dup.set_pixel(0, 0, 5)
        assert img.get_pixel(0, 0) == 0
        assert dup != img

    def test_equality(self) -> None:
        a = GrayImage.from_bytes(2, 1, 9, b"\x01\x02")
        assert a == GrayImage.from_bytes(2, 1, 9, b"\x01\x02")
        assert a != GrayImage.from_bytes(2, 1, 10, b"\x01\x02")
        assert a != GrayImage.from_bytes(1, 2, 9, b"\x01\x02")
