"""Command line interface"""

from albumseq.cli.app import app

__all__ = ["app"]
