"""Command-line interface for datapipe."""

from datapipe.cli.main import main

__all__ = ["main"]
