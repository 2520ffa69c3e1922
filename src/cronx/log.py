"""Logging setup for applications embedding cronx."""

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with a rich console handler.

    cronx itself only emits records through module loggers; hosts call
    this once to get readable output.

    Args:
        verbose: Show debug records and logger names.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    fmt = "%(name)s: %(message)s" if verbose else "%(message)s"
    logging.basicConfig(
        level=level,
        format=fmt,
        handlers=[RichHandler(rich_tracebacks=True, console=console, show_path=verbose)],
        force=True,
    )
