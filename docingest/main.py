"""
docingest CLI Application.

Provides a command-line interface for extracting normalized text from
documents and for checking that the PDF library can be used.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from docingest.config import get_settings
from docingest.extractors import (
    EmptyResult,
    ExtractionError,
    LibraryUnavailable,
    UnsupportedFormat,
    get_pdf_resolver,
)
from docingest.formats import DocumentFormat, supported_extensions
from docingest.models import ExtractionResult
from docingest.service import ExtractionService

# Create Typer app
app = typer.Typer(
    name="docingest",
    help="Extract normalized plain text from PDF, DOCX and TXT documents",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.command()
def extract(
    file: Annotated[Path, typer.Argument(help="Path to the document to extract")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the extracted text to this file"),
    ] = None,
    max_chars: Annotated[
        Optional[int],
        typer.Option("--max-chars", min=1, help="Truncate the printed or saved text to N characters"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the full result as JSON"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed output"),
    ] = False,
) -> None:
    """
    Extract normalized text from a document.

    The format is taken from the file extension (.pdf, .docx or .txt).
    """
    _configure_logging(verbose)

    if not file.exists():
        err_console.print(f"[red]Error:[/red] File not found: {escape(str(file))}")
        raise typer.Exit(1)

    try:
        result = ExtractionService().extract_file(file)
    except UnsupportedFormat as e:
        err_console.print(f"[red]Unsupported Format:[/red] {escape(str(e))}")
        err_console.print(f"Supported extensions: {', '.join(supported_extensions())}")
        raise typer.Exit(1)
    except LibraryUnavailable as e:
        err_console.print(f"[red]Library Unavailable:[/red] {escape(str(e))}")
        err_console.print("Run 'docingest doctor' for details.")
        raise typer.Exit(1)
    except EmptyResult as e:
        err_console.print(f"[yellow]No Text:[/yellow] {escape(str(e))}")
        raise typer.Exit(2)
    except ExtractionError as e:
        err_console.print(f"[red]Extraction Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return

    text = result.text[:max_chars] if max_chars else result.text

    if output:
        output.write_text(text, encoding="utf-8")
        console.print(f"[green]Text saved to:[/green] {escape(str(output))}")
    else:
        console.print(text, markup=False, highlight=False, soft_wrap=True)

    if verbose:
        _display_summary(result, truncated=len(text) < len(result.text))


@app.command()
def formats() -> None:
    """List the supported document formats."""
    table = Table(title="Supported Formats")
    table.add_column("Extension", style="cyan")
    table.add_column("Format")

    for document_format in DocumentFormat:
        table.add_row(document_format.extension, document_format.name)

    console.print(table)


@app.command()
def doctor(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log every probe attempt"),
    ] = False,
) -> None:
    """
    Check whether PDF extraction is operational.

    Resolves the PDF library adapter and reports which calling convention
    was selected.
    """
    _configure_logging(verbose)
    resolver = get_pdf_resolver()

    console.print("[bold]docingest Health Check[/bold]\n")
    console.print(f"  Probe order: {', '.join(resolver.probe_names)}")

    if resolver.resolve() is None:
        console.print(f"[red]✗ {resolver.library} is unavailable; PDF uploads will fail[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ {resolver.library} resolved using '{resolver.strategy}'[/green]")


def _display_summary(result: ExtractionResult, truncated: bool = False) -> None:
    """Display extraction diagnostics in a panel."""
    lines = [
        f"Source: {escape(str(result.source_name))}",
        f"Format: {result.format.value}",
        f"Bytes: {result.source_byte_length}",
        f"Characters: {result.character_count}",
        f"SHA-256: {result.content_hash}",
    ]
    if truncated:
        lines.append("[yellow]Output truncated[/yellow]")

    err_console.print(Panel("\n".join(lines), title="Extraction Summary"))


if __name__ == "__main__":
    app()
