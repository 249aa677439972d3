"""
Tests for the Frame cell grid.
"""

import pytest

from digital_rain.colors import BLACK, Color
from digital_rain.frame import Cell, Frame

GREEN = Color(0, 255, 0)


class TestFrame:
    def test_new_frame_is_background(self):
        frame = Frame(3, 4)
        assert frame.shape == (3, 4)
        assert frame.cell(2, 3) == Cell(' ', BLACK, True)
        assert frame.drawn_cells() == 0

    @pytest.mark.parametrize("height,width", [(0, 5), (5, 0), (-1, 3)])
    def test_rejects_non_positive_dimensions(self, height, width):
        with pytest.raises(ValueError):
            Frame(height, width)

    def test_set_cell(self):
        frame = Frame(2, 2)
        frame.set_cell(1, 0, "Z", GREEN)
        assert frame.cell(1, 0) == Cell("Z", GREEN, False)
        assert frame.drawn_cells() == 1

    def test_clear(self):
        frame = Frame(2, 2)
        frame.set_cell(0, 0, "Z", GREEN)
        frame.set_cell(1, 1, "Q", GREEN)
        frame.clear()
        assert frame == Frame(2, 2)

    def test_rows_are_independent(self):
        frame = Frame(3, 3)
        frame.set_cell(0, 1, "Z", GREEN)
        assert frame.cell(1, 1).is_background
        assert frame.cell(2, 1).is_background


class TestFrameCopy:
    def test_copy_is_equal(self):
        frame = Frame(2, 3)
        frame.set_cell(1, 2, "Z", GREEN)
        assert frame.copy() == frame

    def test_copy_is_independent(self):
        frame = Frame(2, 3)
        dup = frame.copy()
        frame.set_cell(0, 0, "Z", GREEN)
        assert dup.cell(0, 0).is_background
        assert dup != frame

    def test_copy_into(self):
        src = Frame(2, 2)
        src.set_cell(0, 1, "Z", GREEN)
        dst = Frame(2, 2)
        src.copy_into(dst)
        assert dst == src
        src.clear()
        assert dst.cell(0, 1) == Cell("Z", GREEN, False)

    def test_copy_into_shape_mismatch(self):
        with pytest.raises(ValueError):
            Frame(2, 2).copy_into(Frame(3, 2))

    def test_equality_includes_background_flag(self):
        a = Frame(1, 1)
        b = Frame(1, 1)
        # A drawn space in black is not the same as empty background
        b.set_cell(0, 0, ' ', BLACK)
        assert a != b
