from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, TextIO

HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
CLEAR_LINE = "\r\x1b[K"


def show_cursor(out: TextIO) -> None:
    out.write(SHOW_CURSOR)
    out.flush()


@contextmanager
def hidden_cursor(out: TextIO) -> Iterator[None]:
    """Hide the terminal cursor for the block, restoring it on any exit."""
    out.write(HIDE_CURSOR)
    out.flush()
    try:
        yield
    finally:
        show_cursor(out)
