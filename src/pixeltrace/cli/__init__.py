"""Command-line interface for pixeltrace.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for sprite tracing
- Verbose/quiet output modes
- Dry-run mode with a per-sprite summary
- Detailed error reporting
"""

from pixeltrace.cli.app import cli, main

__all__ = ["cli", "main"]
