"""
Terminal metronome.

Contains the timebase, the click stager and player, the beat scheduler and
the command line front end.
"""

__all__ = [
    "timebase",
    "staging",
    "playback",
    "scheduler",
    "listener",
    "cli",
]
