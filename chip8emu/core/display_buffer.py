"""
DisplayBuffer -- the 64 x 32 monochrome framebuffer.

The buffer holds one byte per pixel (0 or 1) in row-major order:
``pixels[y * WIDTH + x]``.  Pixels are never overwritten, only XORed, and
any write that actually flips a cell raises the :attr:`dirty` flag.  The
flag is lowered only by whoever consumes the picture (the renderer), never
by the interpreter.
"""

from __future__ import annotations

from typing import Iterator


class DisplayBuffer:
    """Owns the pixel array and its dirty flag."""

    WIDTH: int = 64
    HEIGHT: int = 32
    SIZE: int = WIDTH * HEIGHT

    def __init__(self) -> None:
        self.pixels: bytearray = bytearray(self.SIZE)
        self._dirty: bool = False

    # ------------------------------------------------------------------
    # Pixel access
    # ------------------------------------------------------------------

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.WIDTH and 0 <= y < self.HEIGHT):
            raise IndexError(
                f"pixel ({x}, {y}) out of range [0, {self.WIDTH}) x [0, {self.HEIGHT})"
            )
        return y * self.WIDTH + x

    def get_pixel(self, x: int, y: int) -> int:
        """Return the value (0 or 1) of the pixel at (*x*, *y*)."""
        return self.pixels[self._offset(x, y)]

    def set_pixel(self, x: int, y: int, bit: int) -> bool:
        """XOR *bit* into the pixel at (*x*, *y*).

        Returns:
            ``True`` if the pixel went from 1 to 0 (a collision), else
            ``False``.

        Raises:
            IndexError: If the coordinate is outside the grid.
        """
        offset = self._offset(x, y)
        bit &= 1
        if not bit:
            return False
        old = self.pixels[offset]
        self.pixels[offset] = old ^ 1
        self._dirty = True
        return old == 1

    def clear(self) -> None:
        """Turn every pixel off and mark the buffer dirty."""
        self.pixels[:] = bytes(self.SIZE)
        self._dirty = True

    # ------------------------------------------------------------------
    # Dirty flag
    # ------------------------------------------------------------------

    @property
    def dirty(self) -> bool:
        """``True`` if any pixel changed since the last :meth:`clear_dirty`."""
        return self._dirty

    def clear_dirty(self) -> None:
        self._dirty = False

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def rows(self) -> Iterator[bytes]:
        """Yield each scanline as a ``bytes`` object of :attr:`WIDTH` cells."""
        for y in range(self.HEIGHT):
            start = y * self.WIDTH
            yield bytes(self.pixels[start:start + self.WIDTH])

    def lit_count(self) -> int:
        """Number of pixels currently on."""
        return sum(self.pixels)

    def __str__(self) -> str:
        return "\n".join(
            "".join("#" if cell else "." for cell in row) for row in self.rows()
        )

    def __repr__(self) -> str:
        return (
            f"DisplayBuffer(width={self.WIDTH}, height={self.HEIGHT}, "
            f"lit={self.lit_count()}, dirty={self._dirty})"
        )
