"""Sequence audio tracks across the sides of a medium."""

__version__ = "0.1.0"
