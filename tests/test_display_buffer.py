"""
DisplayBuffer Tests
===================

XOR pixel semantics, collision reporting, and the dirty flag.
"""

import pytest

from chip8emu.core.display_buffer import DisplayBuffer


@pytest.fixture
def display():
    return DisplayBuffer()


class TestSetPixel:
    def test_starts_blank_and_clean(self, display):
        assert display.lit_count() == 0
        assert not display.dirty
        assert len(display.pixels) == 64 * 32

    def test_turning_pixel_on_is_not_a_collision(self, display):
        assert display.set_pixel(3, 4, 1) is False
        assert display.get_pixel(3, 4) == 1
        assert display.pixels[4 * 64 + 3] == 1
        assert display.dirty

    def test_turning_pixel_off_is_a_collision(self, display):
        display.set_pixel(3, 4, 1)
        assert display.set_pixel(3, 4, 1) is True
        assert display.get_pixel(3, 4) == 0

    @pytest.mark.parametrize("x,y", [(0, 0), (63, 0), (0, 31), (63, 31), (17, 9)])
    @pytest.mark.parametrize("initial", [0, 1])
    def test_xor_involution(self, x, y, initial):
        display = DisplayBuffer()
        if initial:
            display.set_pixel(x, y, 1)
        before = bytes(display.pixels)

        first = display.set_pixel(x, y, 1)
        second = display.set_pixel(x, y, 1)

        assert bytes(display.pixels) == before
        assert [first, second].count(True) == 1

    def test_zero_bit_changes_nothing(self, display):
        display.set_pixel(5, 5, 1)
        display.clear_dirty()
        assert display.set_pixel(5, 5, 0) is False
        assert display.get_pixel(5, 5) == 1
        assert not display.dirty

    @pytest.mark.parametrize("x,y", [(64, 0), (0, 32), (-1, 0), (0, -1)])
    def test_out_of_range_raises(self, display, x, y):
        with pytest.raises(IndexError):
            display.set_pixel(x, y, 1)


class TestDirtyFlag:
    def test_interpreter_side_never_clears_it(self, display):
        display.set_pixel(0, 0, 1)
        display.set_pixel(0, 0, 1)
        assert display.dirty

    def test_clear_dirty(self, display):
        display.set_pixel(0, 0, 1)
        display.clear_dirty()
        assert not display.dirty
        assert display.get_pixel(0, 0) == 1


class TestClear:
    def test_clear_blanks_and_marks_dirty(self, display):
        display.set_pixel(10, 10, 1)
        display.clear_dirty()
        display.clear()
        assert display.lit_count() == 0
        assert display.dirty

    def test_clear_marks_dirty_even_when_blank(self, display):
        display.clear()
        assert display.dirty


def test_text_rendering(display):
    display.set_pixel(1, 0, 1)
    lines = str(display).splitlines()
    assert len(lines) == 32
    assert lines[0].startswith(".#..")
    assert len(lines[0]) == 64
