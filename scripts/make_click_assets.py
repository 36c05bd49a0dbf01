#!/usr/bin/env python3
from __future__ import annotations

"""
Regenerate the bundled click sounds in src/metronome/sounds.

Each click is a short exponentially decaying sine, 16-bit mono PCM. The
accent click is higher and louder than the regular one.

Example:
    python scripts/make_click_assets.py --out_dir src/metronome/sounds
"""

import argparse
import math
import struct
import wave
from dataclasses import dataclass
from pathlib import Path


SAMPLE_RATE = 44_100
CLICK_SECONDS = 0.03
DECAY = 150.0


@dataclass(frozen=True)
class Click:
    filename: str
    frequency: float
    amplitude: float


CLICKS = [
    Click("click_hi.wav", 1500.0, 0.9),
    Click("click_lo.wav", 1000.0, 0.6),
]


def synth_click(click: Click) -> bytes:
    n = int(CLICK_SECONDS * SAMPLE_RATE)
    frames = bytearray()
    for i in range(n):
        t = i / SAMPLE_RATE
        v = click.amplitude * math.sin(2 * math.pi * click.frequency * t) * math.exp(-t * DECAY)
        frames += struct.pack("<h", int(v * 32767))
    return bytes(frames)


def write_click(click: Click, out_dir: Path) -> Path:
    path = out_dir / click.filename
    with wave.open(str(path), "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(SAMPLE_RATE)
        w.writeframes(synth_click(click))
    return path


def main() -> int:
    parser = argparse.ArgumentParser(description="Regenerate bundled click WAVs")
    parser.add_argument("--out_dir", default="src/metronome/sounds", help="Destination directory")
    args = parser.parse_args()

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    for click in CLICKS:
        print(f"Wrote {write_click(click, out_dir)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
