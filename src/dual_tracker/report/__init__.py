"""Command-line report over exported batch files."""

from dual_tracker.report.cli import main

__all__ = ["main"]
