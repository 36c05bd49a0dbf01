from __future__ import annotations

import argparse
import re
import signal
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, NoReturn, Optional, TextIO

from .display import hidden_cursor
from .listener import start_listener
from .scheduler import BeatScheduler
from .settings import debug
from .staging import staged_clicks
from .timebase import beat_interval_ms, beat_interval_seconds


@dataclass(frozen=True)
class Tempo:
    beats_per_measure: int
    bpm: int


class MetronomeArgumentParser(argparse.ArgumentParser):
    """argparse parser that exits with status 1 on bad input."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"Error: {message}\n")


_INT_RE = re.compile(r"[+-]?[0-9]+")


def positive_int(value: str) -> int:
    # ASCII digits only: int() would also take " 4", "1_2" and non-ASCII digits
    if not _INT_RE.fullmatch(value):
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value!r}")
    n = int(value)
    if n <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value!r}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = MetronomeArgumentParser(
        prog="metronome",
        description="Terminal metronome: click every beat, accent the first beat of each measure.",
        epilog="Example: metronome 4 120",
    )
    parser.add_argument("beats_per_measure", type=positive_int, help="Beats in each measure (positive integer)")
    parser.add_argument("bpm", type=positive_int, help="Tempo in beats per minute (positive integer)")
    return parser


def _raise_terminated(signum, frame) -> NoReturn:
    raise SystemExit(128 + signum)


@contextmanager
def terminate_as_exit() -> Iterator[None]:
    """Turn SIGTERM into SystemExit for the block so cleanup handlers run."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.signal(signal.SIGTERM, _raise_terminated)
    try:
        yield
    finally:
        signal.signal(signal.SIGTERM, previous)


def run(tempo: Tempo, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> int:
    out = stdout if stdout is not None else sys.stdout
    interval = beat_interval_seconds(tempo.bpm)

    try:
        with terminate_as_exit(), staged_clicks() as clicks:
            print(f"Metronome: {tempo.beats_per_measure} beats per measure at {tempo.bpm} BPM", file=out)
            print("Press Enter to stop...", file=out)
            print(file=out)

            stop_event = threading.Event()
            scheduler = BeatScheduler(
                tempo.beats_per_measure,
                interval,
                accent=clicks.accent,
                regular=clicks.regular,
                out=out,
            )
            with hidden_cursor(out):
                start_listener(stop_event, stdin)
                try:
                    scheduler.run(stop_event)
                except KeyboardInterrupt:
                    scheduler.stop()
                    return 130
    except KeyboardInterrupt:
        # Interrupted while staging or printing the summary
        print(file=out)
        return 130
    return 0


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    tempo = Tempo(beats_per_measure=args.beats_per_measure, bpm=args.bpm)
    debug(f"beat interval {beat_interval_ms(tempo.bpm)} ms")
    return run(tempo)


if __name__ == "__main__":
    raise SystemExit(main())
