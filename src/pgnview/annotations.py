"""Evaluation and clock annotations embedded in PGN move comments."""

import math
import re

EVAL_RE = re.compile(r"%eval\s+([-+]?\d*\.?\d+)")
CLOCK_RE = re.compile(r"%clk\s+([\d:]+)")

# Evaluations beyond this magnitude encode a forced-mate distance.
MATE_THRESHOLD = 10


def parse_eval(comment: str) -> float | None:
    """Return the ``%eval`` score inside a comment block, if any."""
    match = EVAL_RE.search(comment)
    if not match:
        return None
    try:
        value = float(match.group(1))
    except ValueError:
        return None
    if math.isinf(value):
        return None
    return value


def parse_clock(comment: str) -> str | None:
    """Return the raw ``%clk`` value inside a comment block, if any."""
    match = CLOCK_RE.search(comment)
    return match.group(1) if match else None


def format_eval(value: float | None) -> str:
    """Render an evaluation as ``+0.34``, ``-1.20``, ``0.00`` or ``M12``."""
    if value is None:
        return ""

    if abs(value) > MATE_THRESHOLD:
        moves = math.floor(abs(value))
        return f"M{moves}" if value > 0 else f"-M{moves}"

    if value == 0:
        value = 0.0  # avoid "-0.00"
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.2f}"


def eval_class(value: float | None) -> str:
    """Bucket an evaluation into a CSS class name by side and magnitude."""
    if value is None:
        return "eval-neutral"

    if value > 2:
        return "eval-white-very-good"
    if value > 0.5:
        return "eval-white-good"
    if value > 0.1:
        return "eval-white-slightly-good"

    if value < -2:
        return "eval-black-very-good"
    if value < -0.5:
        return "eval-black-good"
    if value < -0.1:
        return "eval-black-slightly-good"

    return "eval-neutral"


def _clock_seconds(clock: str) -> int | None:
    parts = clock.split(":")
    if len(parts) != 3:
        return None
    try:
        hours, minutes, seconds = (int(p) for p in parts)
    except ValueError:
        return None
    return hours * 3600 + minutes * 60 + seconds


def clock_to_seconds(clock: str) -> int:
    """Convert an ``H:MM:SS`` clock to seconds; other shapes count as 0."""
    return _clock_seconds(clock) or 0


def elapsed_seconds(previous: str | None, current: str | None) -> int | None:
    """Seconds used between two clock readings of the same side.

    Returns None unless both readings parse and the clock went down.
    """
    if not previous or not current:
        return None
    before = _clock_seconds(previous)
    after = _clock_seconds(current)
    if before is None or after is None:
        return None
    spent = before - after
    return spent if spent > 0 else None


def format_elapsed(seconds: int) -> str:
    """Render whole seconds as ``M:SS``."""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}:{secs:02d}"
