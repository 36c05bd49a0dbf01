from __future__ import annotations

import io
import threading

import pytest

from metronome.display import CLEAR_LINE, SHOW_CURSOR
from metronome.scheduler import BeatScheduler
from metronome.timebase import beat_interval_seconds

ACCENT = "/tmp/click_accent.wav"
REGULAR = "/tmp/click_regular.wav"


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class ScriptedStop:
    """Stands in for threading.Event: times out ``ticks`` times, then stops."""

    def __init__(self, clock: FakeClock, ticks: int) -> None:
        self.clock = clock
        self.ticks = ticks
        self.timeouts = []

    def wait(self, timeout: float) -> bool:
        self.timeouts.append(timeout)
        if len(self.timeouts) > self.ticks:
            return True
        self.clock.now += timeout
        return False


def _scheduler(n: int, interval: float = 0.5, clock=None):
    played = []
    out = io.StringIO()
    s = BeatScheduler(
        n,
        interval,
        accent=ACCENT,
        regular=REGULAR,
        out=out,
        play=played.append,
        clock=clock or FakeClock(),
    )
    return s, played, out


@pytest.mark.parametrize("n", [1, 2, 3, 4, 7])
def test_beats_cycle_through_measure(n):
    s, _, _ = _scheduler(n)
    beats = [s.tick() for _ in range(3 * n + 2)]
    assert beats == [(i % n) + 1 for i in range(3 * n + 2)]
    assert min(beats) == 1 and max(beats) == n


def test_accent_only_on_beat_one():
    s, played, _ = _scheduler(3)
    beats = [s.tick() for _ in range(7)]
    for beat, handle in zip(beats, played):
        assert handle == (ACCENT if beat == 1 else REGULAR)


def test_single_beat_measure_is_all_accents():
    s, played, _ = _scheduler(1)
    for _ in range(4):
        s.tick()
    assert played == [ACCENT] * 4


def test_output_clears_line_at_each_measure():
    s, _, out = _scheduler(4)
    for _ in range(6):
        s.tick()
    assert out.getvalue() == f"{CLEAR_LINE}1 2 3 4 {CLEAR_LINE}1 2 "


def test_stop_is_terminal():
    s, played, out = _scheduler(4)
    s.tick()
    s.stop()
    assert s.running is False
    assert s.tick() is None
    assert played == [ACCENT]
    text = out.getvalue()
    assert text.endswith("\nMetronome stopped.\n")
    assert SHOW_CURSOR in text
    # a second stop does not print again
    s.stop()
    assert out.getvalue().count("Metronome stopped.") == 1


def test_run_ticks_every_interval_until_stopped():
    clock = FakeClock()
    s, played, out = _scheduler(4, interval=0.5, clock=clock)
    stop = ScriptedStop(clock, ticks=6)
    s.run(stop)

    assert stop.timeouts == [0.5] * 7
    assert played == [ACCENT, REGULAR, REGULAR, REGULAR, ACCENT, REGULAR]
    assert s.running is False
    assert out.getvalue().startswith(f"{CLEAR_LINE}1 2 3 4 {CLEAR_LINE}1 2 ")
    assert out.getvalue().endswith("Metronome stopped.\n")


def test_stop_before_first_tick_emits_no_beats():
    clock = FakeClock()
    s, played, out = _scheduler(4, clock=clock)
    s.run(ScriptedStop(clock, ticks=0))
    assert played == []
    assert "1 " not in out.getvalue()
    assert "Metronome stopped." in out.getvalue()


def test_slow_tick_rearms_timer_instead_of_bursting():
    clock = FakeClock()
    out = io.StringIO()

    def slow_play(handle):
        clock.now += 2.0

    s = BeatScheduler(2, 0.5, ACCENT, REGULAR, out=out, play=slow_play, clock=clock)
    stop = ScriptedStop(clock, ticks=3)
    s.run(stop)
    assert stop.timeouts == [0.5] * 4


def test_run_with_real_event_stops_promptly():
    played = []
    out = io.StringIO()
    s = BeatScheduler(3, 0.005, ACCENT, REGULAR, out=out, play=played.append)
    stop = threading.Event()
    timer = threading.Timer(0.1, stop.set)
    timer.start()
    try:
        s.run(stop)
    finally:
        timer.cancel()
    assert s.running is False
    assert played, "expected at least one tick before stop"
    assert played[0] == ACCENT
    assert out.getvalue().endswith("Metronome stopped.\n")


def test_scenario_four_four_at_120():
    clock = FakeClock()
    s, played, out = _scheduler(4, interval=beat_interval_seconds(120), clock=clock)
    stop = ScriptedStop(clock, ticks=8)
    s.run(stop)
    assert set(stop.timeouts) == {0.5}
    assert out.getvalue().startswith(f"{CLEAR_LINE}1 2 3 4 {CLEAR_LINE}1 2 3 4 ")
    assert played.count(ACCENT) == 2
