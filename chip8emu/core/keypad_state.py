"""
KeypadState - the 16-key hexadecimal keypad with a one-cycle history.

The host input source writes into the *live* set via :meth:`press` and
:meth:`release` between cycles.  At the end of every cycle the interpreter
calls :meth:`snapshot`, which copies the live set into the *last* set.
Comparing the two reveals keys that were released since the previous
cycle, which is what the wait-for-key instruction listens for.

Keypad layout (COSMAC VIP)::

    1 2 3 C
    4 5 6 D
    7 8 9 E
    A 0 B F
"""

from __future__ import annotations

from typing import FrozenSet, Optional, Set

NUM_KEYS: int = 16


class KeypadState:
    """Live pressed-key set plus the snapshot taken at the end of the last cycle."""

    def __init__(self) -> None:
        self._live: Set[int] = set()
        self._last: Set[int] = set()

    # ------------------------------------------------------------------
    # Host-side input event injection
    # ------------------------------------------------------------------

    @staticmethod
    def _check(key: int) -> int:
        if not 0 <= key < NUM_KEYS:
            raise ValueError(f"key code {key} out of range [0, {NUM_KEYS})")
        return key

    def press(self, key: int) -> None:
        """Mark *key* (0..15) as held down."""
        self._live.add(self._check(key))

    def release(self, key: int) -> None:
        """Mark *key* (0..15) as released."""
        self._live.discard(self._check(key))

    def set_key(self, key: int, down: bool) -> None:
        """Press or release *key* depending on *down*."""
        if down:
            self.press(key)
        else:
            self.release(key)

    def release_all(self) -> None:
        self._live.clear()

    # ------------------------------------------------------------------
    # Sampling (the interpreter reads these)
    # ------------------------------------------------------------------

    def is_pressed(self, key: int) -> bool:
        """Return ``True`` if *key* is in the live set.

        Values outside the keypad range are simply never pressed.
        """
        return key in self._live

    @property
    def pressed(self) -> FrozenSet[int]:
        return frozenset(self._live)

    @property
    def last(self) -> FrozenSet[int]:
        return frozenset(self._last)

    def snapshot(self) -> None:
        """Copy the live set into the *last* set.

        Called once at the end of every interpreter cycle.
        """
        self._last = set(self._live)

    def released_key(self) -> Optional[int]:
        """Return a key that was down at the last snapshot but is up now.

        When several keys qualify the lowest code wins.  ``None`` if no key
        has been released.
        """
        released = self._last - self._live
        if not released:
            return None
        return min(released)

    def __repr__(self) -> str:
        live = ",".join(f"{k:X}" for k in sorted(self._live))
        last = ",".join(f"{k:X}" for k in sorted(self._last))
        return f"KeypadState(pressed=[{live}], last=[{last}])"
