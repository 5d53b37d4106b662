"""CLI commands for propdash.

This package provides the command-line interface for the trade journal
and the prop-firm performance dashboard.
"""

from propdash.cli.main import cli, main

__all__ = ["cli", "main"]
