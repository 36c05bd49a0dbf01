from __future__ import annotations

import sys
import threading
from typing import Optional, TextIO

from .settings import debug


def wait_for_enter(stop_event: threading.Event, stream: TextIO) -> bool:
    """Block for one line on ``stream`` and set ``stop_event`` if one arrives.

    Returns True when the stop signal was raised. A closed or failing stream
    leaves the event untouched.
    """
    try:
        line = stream.readline()
    except (OSError, ValueError) as e:
        debug(f"stop listener read failed: {e}")
        return False
    if not line:
        debug("stop listener reached EOF; metronome keeps running")
        return False
    stop_event.set()
    return True


def start_listener(stop_event: threading.Event, stream: Optional[TextIO] = None) -> threading.Thread:
    t = threading.Thread(
        target=wait_for_enter,
        args=(stop_event, stream if stream is not None else sys.stdin),
        name="metronome-stop-listener",
        daemon=True,
    )
    t.start()
    return t
