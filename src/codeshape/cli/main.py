"""codeshape CLI Main Entry Point

Usage:
    codeshape render doc.yaml              # Render to stdout
    codeshape render doc.yaml -o out.rs    # Render to file
    codeshape render doc.yaml -i 2         # Two-space indent
    codeshape render doc.yaml --tab        # Indent with tabs
    codeshape check doc.yaml               # Validate without rendering
    codeshape --version                    # Show version
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import typer

from codeshape._version import __version__
from codeshape.config import (
    INDENT_TAB,
    Format,
    find_config_file,
    load_format_file,
    merge_format,
)
from codeshape.document import count_fragments, load_document
from codeshape.errors import ConfigError
from codeshape.fragment.renderer import Renderer

from .utils import handle_error, setup_logging

log = logging.getLogger(__name__)

typer_app = typer.Typer(
    help="Render YAML fragment documents into formatted code.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"codeshape {__version__}")
        raise typer.Exit()


@typer_app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Structural code formatting from fragment documents."""


def resolve_format(
    config_path: Optional[Path],
    document_format: dict[str, Any],
    overrides: dict[str, Any],
) -> Format:
    """Build the effective Format.

    Precedence, lowest first: defaults, codeshape.yaml, the document's own
    ``format:`` and finally the command line.
    """
    if config_path is None:
        config_path = find_config_file()
        if config_path is not None:
            log.info("Using config file %s", config_path)
    elif not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    fmt = load_format_file(config_path) if config_path is not None else Format()
    fmt = merge_format(fmt, document_format)
    return merge_format(fmt, overrides)


@typer_app.command()
def render(
    document: Path = typer.Argument(..., help="Path to the YAML fragment document."),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write the rendered text to a file."
    ),
    indent: Optional[int] = typer.Option(
        None, "-i", "--indent", help="Spaces per indent level."
    ),
    tab: bool = typer.Option(False, "--tab", help="Indent with tabs."),
    trailing_newline: Optional[bool] = typer.Option(
        None,
        "--trailing-newline/--no-trailing-newline",
        help="End the output with exactly one newline.",
    ),
    config: Optional[Path] = typer.Option(
        None, "-c", "--config", help="Path to a codeshape.yaml file."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging."),
) -> None:
    """Render a fragment document."""
    setup_logging(verbose)

    try:
        if tab and indent is not None:
            raise ConfigError("--indent and --tab are mutually exclusive")

        doc = load_document(document)
        fmt = resolve_format(
            config,
            doc.format,
            {
                "indent": INDENT_TAB if tab else indent,
                "trailing_newline": trailing_newline,
            },
        )
        text = Renderer(fmt).render(doc.root)
    except Exception as exc:
        handle_error(exc)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        log.info("Wrote %s", output)
    else:
        typer.echo(text, nl=not text.endswith("\n"))


@typer_app.command()
def check(
    document: Path = typer.Argument(..., help="Path to the YAML fragment document."),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging."),
) -> None:
    """Validate a fragment document without rendering it."""
    setup_logging(verbose)

    try:
        doc = load_document(document)
        merge_format(Format(), doc.format)
    except Exception as exc:
        handle_error(exc)

    typer.echo(
        f"{document}: ok ({count_fragments(doc.root)} fragments, "
        f"size hint {doc.root.size_hint()})"
    )


def app() -> None:
    """Entry point for the installed ``codeshape`` script."""
    typer_app()


if __name__ == "__main__":
    app()
