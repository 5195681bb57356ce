"""Logging utilities for nmr_splitting."""

from nmr_splitting.logging.config import JsonFormatter, setup_logging

__all__ = ["JsonFormatter", "setup_logging"]
