"""Shared UI helpers for console output and logging."""

import logging

from rich.console import Console
from rich.logging import RichHandler

# Shared console instance so prompts, logs and results interleave correctly.
console = Console()


def setup_logging(level: str = "warning") -> None:
    """Route the package loggers through a rich handler on the shared console."""
    handler = RichHandler(
        console=console, show_time=False, show_path=False, markup=False
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger("profilecli")
    root.handlers[:] = [handler]
    root.setLevel(level.upper())
