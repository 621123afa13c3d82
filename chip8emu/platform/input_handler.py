"""
Input handler for the CHIP-8 emulator.
Maps keyboard keys to the 16-key hexadecimal keypad.

Keyboard layout
---------------

The left-hand block of a QWERTY keyboard mirrors the COSMAC VIP keypad::

    Keyboard        Keypad
    1 2 3 4         1 2 3 C
    Q W E R         4 5 6 D
    A S D F         7 8 9 E
    Z X C V         A 0 B F

Escape quits.  F5 pauses / resumes.
"""

from __future__ import annotations

import logging

import pygame

logger = logging.getLogger(__name__)


_KEY_MAP: dict[int, int] = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}


class InputHandler:
    """Translates pygame keyboard events into keypad presses and releases.

    Parameters
    ----------
    keypad:
        The :class:`~chip8emu.core.keypad_state.KeypadState` to drive.
    """

    def __init__(self, keypad: object) -> None:
        self._keypad = keypad
        self._quit_requested: bool = False
        self._pause_toggled: bool = False

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    @property
    def quit_requested(self) -> bool:
        """``True`` if the user pressed Escape or closed the window."""
        return self._quit_requested

    def consume_pause_toggle(self) -> bool:
        """Return ``True`` once for each press of the pause key."""
        toggled = self._pause_toggled
        self._pause_toggled = False
        return toggled

    def poll(self) -> None:
        """Pump the pygame event queue and process all pending events.

        This should be called once at the top of each frame.
        """
        for event in pygame.event.get():
            self.handle_event(event)

    def handle_event(self, event: pygame.event.Event) -> None:
        """Process a single pygame event."""
        if event.type == pygame.QUIT:
            self._quit_requested = True
        elif event.type == pygame.KEYDOWN:
            self._on_key(event.key, down=True)
        elif event.type == pygame.KEYUP:
            self._on_key(event.key, down=False)
        elif event.type == pygame.WINDOWFOCUSLOST:
            self.clear_all()

    def clear_all(self) -> None:
        """Release all currently-held keys."""
        self._keypad.release_all()  # type: ignore[attr-defined]

    # ------------------------------------------------------------------
    # Keyboard handlers
    # ------------------------------------------------------------------

    def _on_key(self, key: int, *, down: bool) -> None:
        if down and key == pygame.K_ESCAPE:
            self._quit_requested = True
            return
        if down and key == pygame.K_F5:
            self._pause_toggled = True
            return

        code = _KEY_MAP.get(key)
        if code is None:
            return
        logger.debug("Key %X %s", code, "down" if down else "up")
        self._keypad.set_key(code, down)  # type: ignore[attr-defined]
