"""
KeypadState Tests
=================

Live key set, the end-of-cycle snapshot, and release detection.
"""

import pytest

from chip8emu.core.keypad_state import KeypadState


@pytest.fixture
def keypad():
    return KeypadState()


def test_press_and_release(keypad):
    keypad.press(0xA)
    assert keypad.is_pressed(0xA)
    assert keypad.pressed == frozenset({0xA})
    keypad.release(0xA)
    assert not keypad.is_pressed(0xA)


def test_set_key(keypad):
    keypad.set_key(3, True)
    assert keypad.is_pressed(3)
    keypad.set_key(3, False)
    assert not keypad.is_pressed(3)


def test_release_of_unpressed_key_is_harmless(keypad):
    keypad.release(7)
    assert keypad.pressed == frozenset()


@pytest.mark.parametrize("key", [-1, 16, 0xFF])
def test_out_of_range_keys_rejected(keypad, key):
    with pytest.raises(ValueError):
        keypad.press(key)
    with pytest.raises(ValueError):
        keypad.release(key)


def test_values_outside_keypad_are_never_pressed(keypad):
    assert not keypad.is_pressed(0x20)


def test_snapshot_copies_live_set(keypad):
    keypad.press(1)
    keypad.press(2)
    keypad.snapshot()
    keypad.release(1)
    assert keypad.last == frozenset({1, 2})
    assert keypad.pressed == frozenset({2})


def test_released_key_requires_snapshot(keypad):
    keypad.press(5)
    keypad.release(5)
    assert keypad.released_key() is None


def test_released_key_after_snapshot(keypad):
    keypad.press(5)
    keypad.snapshot()
    assert keypad.released_key() is None
    keypad.release(5)
    assert keypad.released_key() == 5


def test_lowest_released_key_wins(keypad):
    for key in (9, 4, 0xC):
        keypad.press(key)
    keypad.snapshot()
    keypad.release_all()
    assert keypad.released_key() == 4
