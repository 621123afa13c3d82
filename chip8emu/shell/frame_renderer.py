"""
Frame renderer for the CHIP-8 emulator.
Converts the interpreter's one-bit DisplayBuffer into an RGB pygame Surface.

The emulation core produces one byte per pixel (0 = off, 1 = on).  This
module maps each cell through a two-entry colour table and writes the
result into a pygame Surface suitable for scaling and blitting to the
display.

Performance notes
-----------------
The conversion uses **numpy** fancy indexing over the whole 64 x 32 grid
and ``pygame.surfarray.blit_array`` to copy it into the Surface in one go,
instead of iterating pixels in Python.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
import pygame

from chip8emu.core.display_buffer import DisplayBuffer

logger = logging.getLogger(__name__)

# Default colours (0xRRGGBB): dark background, phosphor-green foreground.
DEFAULT_BACKGROUND: int = 0x101010
DEFAULT_FOREGROUND: int = 0x33FF66


def _rgb_tuple(colour: int) -> tuple[int, int, int]:
    return ((colour >> 16) & 0xFF, (colour >> 8) & 0xFF, colour & 0xFF)


class FrameRenderer:
    """Render a :class:`DisplayBuffer` into a pygame Surface.

    Parameters
    ----------
    background:
        Colour for pixels that are off, as ``0xRRGGBB``.
    foreground:
        Colour for pixels that are on, as ``0xRRGGBB``.
    """

    def __init__(
        self,
        background: int = DEFAULT_BACKGROUND,
        foreground: int = DEFAULT_FOREGROUND,
    ) -> None:
        self._palette: np.ndarray = np.array(
            [_rgb_tuple(background), _rgb_tuple(foreground)], dtype=np.uint8
        )
        self._surface: Optional[pygame.Surface] = None

    @property
    def palette(self) -> np.ndarray:
        """The ``(2, 3)`` uint8 colour table (off, on)."""
        return self._palette

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def to_rgb_array(self, display: DisplayBuffer) -> np.ndarray:
        """Return the framebuffer as a ``(width, height, 3)`` uint8 array.

        The array is column-major (x first) to match ``pygame.surfarray``.
        """
        cells = np.frombuffer(bytes(display.pixels), dtype=np.uint8)
        cells = cells.reshape(display.HEIGHT, display.WIDTH)
        return self._palette[cells].transpose(1, 0, 2)

    def render(self, display: DisplayBuffer) -> pygame.Surface:
        """Render *display* and return the native-resolution Surface.

        The same Surface object is reused between calls.
        """
        if self._surface is None:
            self._surface = pygame.Surface((display.WIDTH, display.HEIGHT))
            logger.debug("FrameRenderer: created %dx%d surface", display.WIDTH, display.HEIGHT)
        pygame.surfarray.blit_array(self._surface, self.to_rgb_array(display))
        return self._surface
