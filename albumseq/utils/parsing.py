"""
Parsing and formatting helpers for user supplied text
"""

import math
from typing import Sequence

from albumseq.exceptions import ConfigurationError, ConstraintParseError, DurationParseError
from albumseq.sequencing.models import Adjacent, AtPosition, ConstraintKind, OnSameSide, Track


def parse_duration(text: str) -> float:
    """
    Parse a duration in minutes.

    Accepts "MM:SS" (e.g. "3:45") or decimal minutes (e.g. "3.75").

    Args:
        text: Duration text

    Returns:
        Duration in minutes

    Raises:
        DurationParseError: If the text is in neither format
    """
    text = text.strip()

    if ":" in text:
        minutes, seconds = text.split(":", 1)
        if not (minutes.isdecimal() and seconds.isdecimal()):
            raise DurationParseError(f"Invalid duration: {text!r}")
        return int(minutes) + int(seconds) / 60.0

    try:
        value = float(text)
    except ValueError:
        raise DurationParseError(f"Invalid duration: {text!r}")

    if not math.isfinite(value):
        raise DurationParseError(f"Invalid duration: {text!r}")
    return value


def format_duration(duration: float) -> str:
    """Format minutes as "MM:SS", rounded to the nearest second."""
    total_seconds = int(math.floor(duration * 60.0 + 0.5))
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"


def parse_track(text: str) -> Track:
    """
    Parse "Title:Duration" into a Track.

    The title ends at the first colon, so "Intro:1:30" is "Intro" lasting
    one and a half minutes.
    """
    if ":" not in text:
        raise DurationParseError(f"Track must look like 'Title:Duration' (got {text!r})")

    title, duration = text.split(":", 1)
    title = title.strip()
    if not title:
        raise DurationParseError(f"Track title is empty in {text!r}")

    try:
        return Track(title=title, duration=parse_duration(duration))
    except ConfigurationError as e:
        raise DurationParseError(str(e)) from e


def parse_constraint_kind(kind: str, args: Sequence[str]) -> ConstraintKind:
    """
    Build a constraint kind from its command line form.

    Supported kinds (case-insensitive):
    - atpos TITLE POSITION
    - adjacent TITLE TITLE
    - onsameside TITLE TITLE

    Raises:
        ConstraintParseError: On unknown kinds, wrong arity or bad positions
    """
    name = kind.strip().lower()

    if name == "atpos":
        _require_two(args, "AtPosition constraint requires exactly 2 arguments: title pos")
        position = args[1].strip()
        if not position.isdecimal():
            raise ConstraintParseError(f"Invalid position number: {args[1]}")
        return AtPosition(args[0], int(position))

    if name == "adjacent":
        _require_two(args, "Adjacent constraint requires exactly 2 arguments: title1 title2")
        return Adjacent(args[0], args[1])

    if name == "onsameside":
        _require_two(args, "OnSameSide constraint requires exactly 2 arguments: title1 title2")
        return OnSameSide(args[0], args[1])

    raise ConstraintParseError(f"Unknown constraint kind: {kind}")


def _require_two(args: Sequence[str], message: str) -> None:
    if len(args) != 2:
        raise ConstraintParseError(message)
