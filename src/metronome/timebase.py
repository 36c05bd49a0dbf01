from __future__ import annotations

"""
Timebase utilities for converting a tempo into a beat interval.

The interval is truncated to whole milliseconds once and reused for the
whole run, so 90 BPM ticks every 666 ms rather than 666.67 ms.
"""

MS_PER_MINUTE = 60_000


def beat_interval_ms(bpm: int) -> int:
    """Milliseconds between beats, truncated to an integer.

    One beat lasts 60000/BPM milliseconds; the fractional part is dropped.
    """
    if bpm <= 0:
        raise ValueError(f"bpm must be positive, got {bpm}")
    return MS_PER_MINUTE // int(bpm)


def beat_interval_seconds(bpm: int) -> float:
    """The truncated beat interval in seconds (for timer waits)."""
    return beat_interval_ms(bpm) / 1000.0
