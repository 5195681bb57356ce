"""Command line interface for nmr_splitting."""

from nmr_splitting.cli.app import main, run_cli

__all__ = ["main", "run_cli"]
