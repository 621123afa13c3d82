"""
Audio output device for the CHIP-8 emulator.
Uses pygame.mixer to play the machine's single-tone beeper.

The CHIP-8 has no sample output; it simply beeps while the sound timer is
non-zero.  The frame driver calls :meth:`AudioDevice.play` when the timer
becomes non-zero and :meth:`AudioDevice.stop` when it runs out.

Approach
--------
1. ``pygame.mixer`` is initialised for signed 16-bit mono output.
2. A short square-wave buffer is synthesised once with numpy, sized to a
   whole number of periods so it loops without clicks.
3. ``play()`` loops that Sound on a dedicated channel until ``stop()``.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
import pygame

logger = logging.getLogger(__name__)

_DEFAULT_SAMPLE_RATE: int = 44100
_DEFAULT_TONE_HZ: int = 440

# Minimum pygame mixer buffer size (in samples).  Smaller values reduce
# latency but may cause underruns on slower machines.
_MIXER_BUFFER_SAMPLES: int = 512

# Periods of the tone contained in the looped buffer.
_PERIODS_PER_BUFFER: int = 20

_AMPLITUDE: int = 8000


def square_wave(tone_hz: int, sample_rate: int, periods: int = _PERIODS_PER_BUFFER) -> np.ndarray:
    """Synthesize *periods* cycles of a square wave as signed 16-bit samples."""
    samples_per_period = max(2, round(sample_rate / tone_hz))
    half = samples_per_period // 2
    period = np.empty(samples_per_period, dtype=np.int16)
    period[:half] = _AMPLITUDE
    period[half:] = -_AMPLITUDE
    return np.tile(period, periods)


class AudioDevice:
    """Beeper backed by a looping pygame Sound.

    Parameters
    ----------
    enabled:
        Set to ``False`` to create the device in a silent / no-op mode.
    tone_hz:
        Frequency of the beep.
    """

    def __init__(self, *, enabled: bool = True, tone_hz: int = _DEFAULT_TONE_HZ) -> None:
        self._enabled: bool = enabled
        self._tone_hz: int = tone_hz
        self._channel: Optional[pygame.mixer.Channel] = None
        self._sound: Optional[pygame.mixer.Sound] = None
        self._playing: bool = False

        if not self._enabled:
            logger.info("AudioDevice: disabled (silent mode)")
            return

        self._init_mixer()

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def playing(self) -> bool:
        return self._playing

    def play(self) -> None:
        """Start the beep.  The playing state is tracked even when the device is disabled."""
        self._playing = True
        if self._channel is None or self._sound is None:
            return
        if not self._channel.get_busy():
            self._channel.play(self._sound, loops=-1)

    def stop(self) -> None:
        """Stop the beep."""
        self._playing = False
        if self._channel is not None:
            self._channel.stop()

    def shutdown(self) -> None:
        """Stop playback and release the mixer."""
        self._shutdown_mixer()

    # ------------------------------------------------------------------
    # Volume control
    # ------------------------------------------------------------------

    def get_volume(self) -> float:
        """Return the current volume (0.0 .. 1.0)."""
        if self._channel is not None:
            return self._channel.get_volume()
        return 1.0

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _init_mixer(self) -> None:
        """Initialise the pygame mixer and synthesize the tone."""
        try:
            pygame.mixer.init(
                frequency=_DEFAULT_SAMPLE_RATE,
                size=-16,       # signed 16-bit
                channels=1,     # mono
                buffer=_MIXER_BUFFER_SAMPLES,
            )
        except pygame.error as exc:
            logger.warning("AudioDevice: mixer init failed (%s); running silent", exc)
            self._enabled = False
            return

        actual_freq, actual_size, actual_channels = pygame.mixer.get_init()
        samples = square_wave(self._tone_hz, actual_freq)
        if actual_channels > 1:
            samples = np.repeat(samples, actual_channels)
        self._sound = pygame.mixer.Sound(buffer=samples.tobytes())
        self._channel = pygame.mixer.Channel(0)

        logger.info(
            "AudioDevice: mixer ready at %d Hz, %d-bit, %d ch (tone %d Hz)",
            actual_freq,
            abs(actual_size),
            actual_channels,
            self._tone_hz,
        )

    def _shutdown_mixer(self) -> None:
        """Stop the mixer channel and release resources."""
        if self._channel is not None:
            self._channel.stop()
            self._channel = None
        self._sound = None
        self._playing = False

        if pygame.mixer.get_init():
            pygame.mixer.quit()
