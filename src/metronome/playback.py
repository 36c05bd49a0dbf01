from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from .settings import debug

# Probed on PATH in this order; the first one found plays every click.
PLAYERS = ("paplay", "aplay", "afplay", "powershell")

Handle = Union[str, Path, None]


def find_player() -> Optional[str]:
    for name in PLAYERS:
        if shutil.which(name):
            return name
    return None


def player_command(player: str, path: Union[str, Path]) -> List[str]:
    if player == "powershell":
        # SoundPlayer takes the file inside a script, not as a plain argument
        return ["powershell", "-c", f"(New-Object Media.SoundPlayer '{path}').PlaySync()"]
    return [player, str(path)]


def play(handle: Handle) -> None:
    """Start playing ``handle`` in the background and return immediately.

    Missing handles, missing players and launch failures are all silent:
    the click is a nicety, the beat counter keeps going without it.
    """
    if not handle:
        return
    player = find_player()
    if player is None:
        debug("no audio player found on PATH")
        return

    kwargs = {}
    if os.name == "posix":
        kwargs["start_new_session"] = True
    try:
        subprocess.Popen(
            player_command(player, handle),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            **kwargs,
        )
    except (OSError, subprocess.SubprocessError) as e:
        debug(f"{player} failed to start: {e}")
