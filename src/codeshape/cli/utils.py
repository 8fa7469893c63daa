"""Shared utilities for CLI commands"""

from __future__ import annotations

import logging
import os
from typing import NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler

from codeshape.errors import CodeshapeError

DEBUG_ENV = "CODESHAPE_DEBUG"

console = Console(stderr=True)
log = logging.getLogger("codeshape.cli")


def debug_enabled() -> bool:
    return bool(os.environ.get(DEBUG_ENV))


def log_level(verbose: bool, debug: bool) -> int:
    """WARNING by default, INFO with -v, DEBUG when CODESHAPE_DEBUG is set."""
    if debug:
        return logging.DEBUG
    return logging.INFO if verbose else logging.WARNING


def setup_logging(verbose: bool = False) -> None:
    """Route the ``codeshape`` logger hierarchy to a rich stderr handler.

    INFO shows config discovery and loaded documents; DEBUG adds per-render
    summaries and source locations.
    """
    debug = debug_enabled()

    handler = RichHandler(
        console=console,
        show_time=verbose or debug,
        show_path=debug,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("codeshape")
    logger.setLevel(log_level(verbose, debug))
    logger.handlers = [handler]
    logger.propagate = False


def handle_error(error: Exception) -> NoReturn:
    """Report ``error`` on stderr and exit.

    CodeshapeErrors carry their own message and exit code; anything else is
    reported as unexpected with exit code 1, with the traceback logged at DEBUG.
    """
    if isinstance(error, CodeshapeError):
        typer.echo(f"Error: {error.message}", err=True)
        raise typer.Exit(code=error.exit_code)

    log.debug("Unexpected error", exc_info=error)
    typer.echo(f"Unexpected error: {error}", err=True)
    raise typer.Exit(code=1)
