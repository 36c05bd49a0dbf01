"""Stage the bundled click sounds as temporary files for external players.

Command line players want a file path, not in-memory audio, so each bundled
WAV is copied to a unique temp file once per run and removed again on exit.
"""

from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Iterator, List, Optional

from .settings import debug

ACCENT_ASSET = "click_hi.wav"
REGULAR_ASSET = "click_lo.wav"


class StagingError(RuntimeError):
    """A bundled sound could not be read or written to a temp file."""


@dataclass
class StagedClicks:
    accent: Optional[Path] = None
    regular: Optional[Path] = None


def _read_asset(asset_name: str) -> bytes:
    try:
        return (resources.files("metronome") / "sounds" / asset_name).read_bytes()
    except (OSError, ValueError) as e:
        raise StagingError(f"reading embedded sound: {e}") from e


def stage(asset_name: str) -> Path:
    """Copy the bundled sound ``asset_name`` to a fresh temp file.

    The caller owns the returned file and must remove it.
    """
    data = _read_asset(asset_name)

    try:
        fd, name = tempfile.mkstemp(prefix="click", suffix=".wav")
    except OSError as e:
        raise StagingError(f"creating temp file: {e}") from e

    try:
        f = os.fdopen(fd, "wb")
    except OSError as e:
        os.close(fd)
        _remove(Path(name))
        raise StagingError(f"writing temp file: {e}") from e

    try:
        with f:
            f.write(data)
    except OSError as e:
        _remove(Path(name))
        raise StagingError(f"writing temp file: {e}") from e

    return Path(name)


def _remove(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass


@contextmanager
def staged_clicks() -> Iterator[StagedClicks]:
    """Stage accent and regular clicks, removing both files on exit.

    A sound that fails to stage is reported as a warning and left as None,
    which the player treats as silence.
    """
    clicks = StagedClicks()
    created: List[Path] = []
    try:
        for attr, asset in (("accent", ACCENT_ASSET), ("regular", REGULAR_ASSET)):
            try:
                path = stage(asset)
            except StagingError as e:
                print(f"Warning: Could not initialize sound ({e})")
                continue
            created.append(path)
            setattr(clicks, attr, path)
            debug(f"staged {asset} at {path}")
        yield clicks
    finally:
        for path in created:
            _remove(path)
