"""
Main application window for the CHIP-8 emulator.
Uses pygame to create a display, drive the emulation main loop, and
coordinate audio, video, and input subsystems.

Typical usage::

    from chip8emu.platform.window import Window

    interp = MachineFactory.create("pong.ch8")
    window = Window(interp, scale=10)
    window.run()
"""

from __future__ import annotations

import logging
import time

import pygame

from chip8emu.core.display_buffer import DisplayBuffer
from chip8emu.platform.audio import AudioDevice
from chip8emu.platform.input_handler import InputHandler
from chip8emu.shell.frame_driver import DEFAULT_INSTRUCTIONS_PER_FRAME, FrameDriver
from chip8emu.shell.frame_renderer import FrameRenderer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_WINDOW_TITLE: str = "CHIP-8"

# Minimum / maximum allowed display scale factors.
_MIN_SCALE: int = 1
_MAX_SCALE: int = 20

_DEFAULT_HZ: int = 60


class Window:
    """Pygame window that owns the emulation main loop.

    The window is also the frame driver's display sink: the driver calls
    :meth:`render` whenever the framebuffer has changed.

    Parameters
    ----------
    interpreter:
        A loaded :class:`~chip8emu.core.interpreter.Interpreter`.
    scale:
        Integer scale factor applied to the native 64 x 32 resolution.
    frame_hz:
        Target frame rate; also the rate at which the timers count down.
    instructions_per_frame:
        Cycle budget per frame handed to the :class:`FrameDriver`.
    enable_audio:
        Set to ``False`` to mute sound output entirely.
    title:
        Shown in the window caption.
    """

    def __init__(
        self,
        interpreter: object,
        scale: int = 10,
        *,
        frame_hz: int = _DEFAULT_HZ,
        instructions_per_frame: int = DEFAULT_INSTRUCTIONS_PER_FRAME,
        enable_audio: bool = True,
        title: str = _WINDOW_TITLE,
    ) -> None:
        # ---- basic state -------------------------------------------------
        self._interpreter = interpreter
        self._scale: int = max(_MIN_SCALE, min(_MAX_SCALE, scale))
        self._frame_hz: int = max(1, frame_hz)
        self._title: str = title
        self._running: bool = False
        self._paused: bool = False

        # ---- init pygame display -----------------------------------------
        if not pygame.get_init():
            pygame.init()

        self._display_width: int = DisplayBuffer.WIDTH * self._scale
        self._display_height: int = DisplayBuffer.HEIGHT * self._scale
        self._screen: pygame.Surface = pygame.display.set_mode(
            (self._display_width, self._display_height),
            pygame.RESIZABLE,
        )
        pygame.display.set_caption(self._title)
        self._clock: pygame.time.Clock = pygame.time.Clock()

        # ---- subsystems --------------------------------------------------
        self._frame_renderer: FrameRenderer = FrameRenderer()
        self._audio: AudioDevice = AudioDevice(enabled=enable_audio)
        self._input: InputHandler = InputHandler(interpreter.keypad)  # type: ignore[attr-defined]
        self._driver: FrameDriver = FrameDriver(
            interpreter,
            display_sink=self,
            sound_sink=self._audio,
            instructions_per_frame=instructions_per_frame,
        )

        # ---- performance counters ----------------------------------------
        self._frame_count: int = 0
        self._fps_update_time: float = 0.0
        self._fps_display: float = 0.0

        logger.info(
            "Window: %dx%d display (scale=%d, %d Hz, %d instructions/frame)",
            self._display_width,
            self._display_height,
            self._scale,
            self._frame_hz,
            self._driver.instructions_per_frame,
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._running

    @property
    def paused(self) -> bool:
        return self._paused

    @paused.setter
    def paused(self, value: bool) -> None:
        self._paused = value
        if value:
            self._driver.stop()

    @property
    def scale(self) -> int:
        return self._scale

    # ------------------------------------------------------------------
    # Display sink
    # ------------------------------------------------------------------

    def render(self, display: DisplayBuffer) -> None:
        """Draw *display* to the window, scaled to the current window size."""
        surface = self._frame_renderer.render(display)
        current_size = self._screen.get_size()
        if surface.get_size() != current_size:
            surface = pygame.transform.scale(surface, current_size)
        self._screen.blit(surface, (0, 0))
        pygame.display.flip()

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Enter the main emulation loop.

        This method blocks until the user closes the window or presses
        Escape.  Each iteration:

        1. Polls input events and forwards them to the keypad.
        2. Runs one frame through the :class:`FrameDriver`, which renders
           and toggles the beeper as needed.
        3. Throttles to the target frame rate.
        """
        self._running = True
        self._fps_update_time = time.monotonic()
        self._frame_count = 0

        # Show the (blank) screen before the program draws anything.
        self.render(self._interpreter.display)  # type: ignore[attr-defined]

        logger.info("Entering main loop (target %d fps)", self._frame_hz)

        try:
            while self._running:
                self._tick()
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
        finally:
            self._shutdown()

    def _tick(self) -> None:
        """Execute one iteration of the main loop."""
        self._input.poll()
        if self._input.quit_requested:
            self._running = False
            return
        if self._input.consume_pause_toggle():
            self.paused = not self._paused
            logger.info("Paused" if self._paused else "Resumed")

        if not self._paused:
            self._driver.run_frame()

        self._clock.tick(self._frame_hz)
        self._update_fps()

    # ------------------------------------------------------------------
    # FPS tracking
    # ------------------------------------------------------------------

    def _update_fps(self) -> None:
        """Update the displayed FPS counter roughly once per second."""
        self._frame_count += 1
        now = time.monotonic()
        elapsed = now - self._fps_update_time
        if elapsed >= 1.0:
            self._fps_display = self._frame_count / elapsed
            self._frame_count = 0
            self._fps_update_time = now
            suffix = "  [paused]" if self._paused else ""
            pygame.display.set_caption(
                f"{self._title}  [{self._fps_display:.1f} fps]{suffix}"
            )

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    def _shutdown(self) -> None:
        """Clean up all subsystems."""
        logger.info("Shutting down")
        self._driver.stop()
        self._audio.shutdown()
        pygame.quit()
