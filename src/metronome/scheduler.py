from __future__ import annotations

import sys
import time
from typing import Callable, Optional, TextIO

from .display import CLEAR_LINE, show_cursor
from .playback import Handle, play


class BeatScheduler:
    """Drive the beat counter from a periodic timer until stopped.

    The scheduler is either running at some beat in 1..beats_per_measure or
    stopped. Each tick plays a click (accent on beat 1), prints the beat
    label and advances the counter; the stop signal ends the run for good.
    """

    def __init__(
        self,
        beats_per_measure: int,
        interval_seconds: float,
        accent: Handle = None,
        regular: Handle = None,
        out: Optional[TextIO] = None,
        play: Callable[[Handle], None] = play,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.beats_per_measure = int(beats_per_measure)
        self.interval = float(interval_seconds)
        self.accent = accent
        self.regular = regular
        self.out = out if out is not None else sys.stdout
        self._play = play
        self._clock = clock
        self.beat = 1
        self.running = True

    def tick(self) -> Optional[int]:
        """Process one timer tick; returns the beat emitted, None once stopped."""
        if not self.running:
            return None
        beat = self.beat
        if beat == 1:
            # New measure: start the counter line over
            self.out.write(CLEAR_LINE)
            self._play(self.accent)
        else:
            self._play(self.regular)
        self.out.write(f"{beat} ")
        self.out.flush()

        self.beat += 1
        if self.beat > self.beats_per_measure:
            self.beat = 1
        return beat

    def stop(self) -> None:
        if not self.running:
            return
        self.running = False
        show_cursor(self.out)
        self.out.write("\nMetronome stopped.\n")
        self.out.flush()

    def run(self, stop_event) -> None:
        """Tick every interval until ``stop_event`` is set.

        ``stop_event.wait(timeout)`` is the only place the loop blocks: it
        returns True when stop was signalled and False when the interval
        elapsed. Ticks that overrun the next deadline re-arm the timer from
        the current time instead of firing a burst of late ticks.
        """
        deadline = self._clock() + self.interval
        while self.running:
            remaining = max(0.0, deadline - self._clock())
            if stop_event.wait(remaining):
                self.stop()
                return
            self.tick()
            deadline += self.interval
            now = self._clock()
            if deadline < now:
                deadline = now + self.interval
