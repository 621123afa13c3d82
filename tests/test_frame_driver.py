"""
FrameDriver Tests
=================

Per-frame cycle budget, the display_wait quirk, timer ticking, and the
display / sound sink notifications.
"""

import pytest

from chip8emu.core.memory import PROGRAM_OFFSET
from chip8emu.shell.frame_driver import DEFAULT_INSTRUCTIONS_PER_FRAME, FrameDriver


def load_words(interp, *words):
    interp.load(b"".join(word.to_bytes(2, "big") for word in words))


class RecordingDisplay:
    def __init__(self):
        self.frames = []

    def render(self, display):
        assert display.dirty
        self.frames.append(bytes(display.pixels))


class RecordingSound:
    def __init__(self):
        self.calls = []

    def play(self):
        self.calls.append("play")

    def stop(self):
        self.calls.append("stop")


class TestCycleBudget:
    def test_runs_full_budget(self, interp):
        load_words(interp, 0x1200)
        driver = FrameDriver(interp, instructions_per_frame=7)
        stats = driver.run_frame()
        assert stats.cycles == 7
        assert interp.cycles == 7
        assert driver.frame_number == 1

    def test_default_budget(self, interp):
        load_words(interp, 0x1200)
        assert FrameDriver(interp).run_frame().cycles == DEFAULT_INSTRUCTIONS_PER_FRAME

    def test_budget_clamped_to_one(self, interp):
        assert FrameDriver(interp, instructions_per_frame=0).instructions_per_frame == 1

    def test_display_wait_stops_after_draw(self, make_interp):
        interp = make_interp(display_wait=True)
        load_words(interp, 0x00E0, 0x1202)
        stats = FrameDriver(interp, instructions_per_frame=10).run_frame()
        assert stats.cycles == 1
        assert interp.registers.pc == PROGRAM_OFFSET + 2

    def test_without_display_wait_draw_does_not_stop_frame(self, interp):
        load_words(interp, 0x00E0, 0x1202)
        stats = FrameDriver(interp, instructions_per_frame=10).run_frame()
        assert stats.cycles == 10


class TestDisplaySink:
    def test_dirty_buffer_is_rendered_and_cleared(self, interp):
        sink = RecordingDisplay()
        interp.registers.index = 0x50
        load_words(interp, 0xD015, 0x1202)
        driver = FrameDriver(interp, display_sink=sink, instructions_per_frame=4)

        stats = driver.run_frame()
        assert stats.rendered
        assert len(sink.frames) == 1
        assert not interp.display.dirty

        stats = driver.run_frame()
        assert not stats.rendered
        assert len(sink.frames) == 1

    def test_dirty_flag_cleared_without_sink(self, interp):
        load_words(interp, 0x00E0, 0x1202)
        stats = FrameDriver(interp).run_frame()
        assert stats.rendered
        assert not interp.display.dirty


class TestTimersAndSound:
    def test_timers_tick_once_per_frame(self, interp):
        load_words(interp, 0x6005, 0xF015, 0xF018, 0x1206)
        driver = FrameDriver(interp, instructions_per_frame=20)
        driver.run_frame()
        assert interp.delay_timer == 4
        assert interp.sound_timer == 4
        driver.run_frame()
        assert interp.delay_timer == 3

    def test_sound_sink_follows_timer_transitions(self, interp):
        sound = RecordingSound()
        load_words(interp, 0x6002, 0xF018, 0x1204)
        driver = FrameDriver(interp, sound_sink=sound, instructions_per_frame=3)

        stats = driver.run_frame()
        assert stats.sound_on
        assert sound.calls == ["play"]

        stats = driver.run_frame()
        assert not stats.sound_on
        assert sound.calls == ["play", "stop"]

        driver.run_frame()
        assert sound.calls == ["play", "stop"]

    def test_short_beep_that_expires_within_the_frame_never_plays(self, interp):
        sound = RecordingSound()
        load_words(interp, 0x6001, 0xF018, 0x1204)
        FrameDriver(interp, sound_sink=sound, instructions_per_frame=3).run_frame()
        assert sound.calls == []

    def test_stop_silences(self, interp):
        sound = RecordingSound()
        load_words(interp, 0x6009, 0xF018, 0x1204)
        driver = FrameDriver(interp, sound_sink=sound, instructions_per_frame=3)
        driver.run_frame()
        driver.stop()
        assert sound.calls == ["play", "stop"]
        assert not driver.sound_on


def test_stack_underflow_propagates(interp):
    load_words(interp, 0x00EE)
    from chip8emu.core.errors import StackUnderflowError

    with pytest.raises(StackUnderflowError):
        FrameDriver(interp).run_frame()
