"""
Frame driver for the CHIP-8 interpreter.

The interpreter only knows how to run one instruction at a time.  This
module decides how many instructions make up a video frame and keeps the
outside world in step with the machine:

1. Issue up to ``instructions_per_frame`` cycles.  With the
   ``display_wait`` quirk, stop as soon as the screen has been drawn to.
2. Tick the delay and sound timers exactly once.
3. Hand a dirty framebuffer to the display sink and clear the flag.
4. Start or stop the sound sink when the sound timer crosses zero.

Typical usage::

    driver = FrameDriver(interpreter, display_sink=window, sound_sink=audio)
    while running:
        driver.run_frame()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# ~700 instructions per second at 60 frames per second.
DEFAULT_INSTRUCTIONS_PER_FRAME: int = 11


@dataclass(frozen=True)
class FrameStats:
    """What happened during one :meth:`FrameDriver.run_frame` call."""

    cycles: int
    rendered: bool
    sound_on: bool


class FrameDriver:
    """Runs the interpreter one video frame at a time.

    Parameters
    ----------
    interpreter:
        The :class:`~chip8emu.core.interpreter.Interpreter` to drive.
    display_sink:
        Optional object with a ``render(display_buffer)`` method, called
        whenever the framebuffer has changed.
    sound_sink:
        Optional object with ``play()`` and ``stop()`` methods.
    instructions_per_frame:
        Upper bound on cycles per frame.  Clamped to >= 1.
    """

    def __init__(
        self,
        interpreter: object,
        display_sink: object = None,
        sound_sink: object = None,
        instructions_per_frame: int = DEFAULT_INSTRUCTIONS_PER_FRAME,
    ) -> None:
        self._interpreter = interpreter
        self._display_sink = display_sink
        self._sound_sink = sound_sink
        self.instructions_per_frame: int = max(1, instructions_per_frame)

        self._sound_on: bool = False
        self.frame_number: int = 0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def interpreter(self) -> object:
        return self._interpreter

    @property
    def sound_on(self) -> bool:
        """``True`` while the sound sink has been told to play."""
        return self._sound_on

    # ------------------------------------------------------------------
    # Per-frame work
    # ------------------------------------------------------------------

    def run_frame(self) -> FrameStats:
        """Advance the emulation by one video frame."""
        interp = self._interpreter
        display = interp.display  # type: ignore[attr-defined]
        wait_for_display = interp.quirks.display_wait  # type: ignore[attr-defined]

        cycles = 0
        while cycles < self.instructions_per_frame:
            interp.cycle()  # type: ignore[attr-defined]
            cycles += 1
            if wait_for_display and display.dirty:
                break

        interp.tick_timers()  # type: ignore[attr-defined]
        self.frame_number += 1

        rendered = False
        if display.dirty:
            if self._display_sink is not None:
                self._display_sink.render(display)  # type: ignore[attr-defined]
            display.clear_dirty()
            rendered = True

        self._update_sound(interp.sound_timer > 0)  # type: ignore[attr-defined]

        return FrameStats(cycles=cycles, rendered=rendered, sound_on=self._sound_on)

    def stop(self) -> None:
        """Silence the sound sink if it is playing."""
        self._update_sound(False)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _update_sound(self, wanted: bool) -> None:
        if wanted == self._sound_on:
            return
        self._sound_on = wanted
        if self._sound_sink is None:
            return
        if wanted:
            logger.debug("Sound on (frame %d)", self.frame_number)
            self._sound_sink.play()  # type: ignore[attr-defined]
        else:
            logger.debug("Sound off (frame %d)", self.frame_number)
            self._sound_sink.stop()  # type: ignore[attr-defined]

    def __repr__(self) -> str:
        return (
            f"FrameDriver(ipf={self.instructions_per_frame}, "
            f"frame={self.frame_number}, sound_on={self._sound_on})"
        )
