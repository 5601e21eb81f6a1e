"""Utility modules"""

from albumseq.utils.logging import setup_logging
from albumseq.utils.parsing import (
    format_duration,
    parse_constraint_kind,
    parse_duration,
    parse_track,
)

__all__ = [
    "setup_logging",
    "format_duration",
    "parse_constraint_kind",
    "parse_duration",
    "parse_track",
]
