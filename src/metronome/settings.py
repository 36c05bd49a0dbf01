from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    debug: bool = False


_SETTINGS: Optional[Settings] = None


def _is_truthy(value: str | None) -> bool:
    return (value or "").strip().lower() in _TRUTHY


def load_settings(env_path: Path | None = None) -> Settings:
    raw = os.environ.get("METRONOME_DEBUG")
    if raw is None:
        env_path = env_path or Path(".env")
        if env_path.exists():
            try:
                for line in env_path.read_text().splitlines():
                    line = line.strip()
                    if not line or line.startswith("#"):
                        continue
                    if "=" in line:
                        k, v = line.split("=", 1)
                        if k.strip() == "METRONOME_DEBUG":
                            raw = v.strip()
            except (OSError, UnicodeDecodeError):
                pass
    return Settings(debug=_is_truthy(raw))


def get_settings() -> Settings:
    """Settings for this process, loaded on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = load_settings()
    return _SETTINGS


def debug(message: str) -> None:
    if get_settings().debug:
        print(f"[metronome-debug] {message}", file=sys.stderr)
