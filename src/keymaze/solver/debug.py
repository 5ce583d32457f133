# src/keymaze/solver/debug.py
"""
Progress output for the solver stages.

Usage:
    from .debug import progress

    progress("dp", "Level 3/7: 35 states resolved")   # -> "[dp] Level 3/7: 35 states resolved"

Progress lines are on by default; the bare answer line is printed separately.
Turn them off with set_debug(False), or: export KEYMAZE_DEBUG=0
"""

import os

# Stage tags, in the order a solve passes through them
STAGES = ("maze", "pairs", "quadrants", "dp", "replay", "result")

DEBUG = bool(int(os.environ.get('KEYMAZE_DEBUG', '1')))


def progress(stage: str, message: str) -> None:
    """Print one progress line tagged with its solver stage, if enabled."""
    if stage not in STAGES:
        raise ValueError(f"unknown progress stage {stage!r}")
    if DEBUG:
        print(f"[{stage}] {message}")


def set_debug(enabled: bool) -> None:
    global DEBUG
    DEBUG = enabled


def is_debug_enabled() -> bool:
    return DEBUG
