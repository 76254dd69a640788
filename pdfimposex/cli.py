"""
Command-line interface for pdfimposex.
"""

import os
import sys

import click
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from pdfimposex.config import (
    DEFAULT_GAP_MM,
    DEFAULT_MARGIN_MM,
    MAX_FILES,
    MAX_FILE_SIZE,
    SUPPORTED_LAYOUTS,
    ImpositionOptions,
    check_upload_limits,
)
from pdfimposex.exceptions import PdfImposeError
from pdfimposex.geometry import compute_geometry
from pdfimposex.imposer import impose_files
from pdfimposex.utils import format_file_size

console = Console()

PAPER_CHOICES = click.Choice(["A4", "A3"], case_sensitive=False)
ORIENTATION_CHOICES = click.Choice(["landscape", "portrait"], case_sensitive=False)
LAYOUT_CHOICES = click.Choice(list(SUPPORTED_LAYOUTS), case_sensitive=False)


def layout_options(func):
    """Attach the shared layout options to a command."""

    func = click.option('--gap-mm', default=DEFAULT_GAP_MM, show_default=True, type=float,
                        help='Spacing between cells in millimetres')(func)
    func = click.option('--margin-mm', default=DEFAULT_MARGIN_MM, show_default=True, type=float,
                        help='Sheet margin in millimetres')(func)
    func = click.option('--layout', '-l', default='4x2', show_default=True, type=LAYOUT_CHOICES,
                        help='Grid as <cols>x<rows>')(func)
    func = click.option('--orientation', default='landscape', show_default=True, type=ORIENTATION_CHOICES,
                        help='Sheet orientation')(func)
    func = click.option('--paper', '-p', default='A4', show_default=True, type=PAPER_CHOICES,
                        help='Output paper size')(func)
    return func


@click.group()
@click.version_option(version="1.0.0")
def cli():
    """
    pdfimposex - Impose many PDFs N-up onto A4/A3 sheets.
    """
    pass


@cli.command(name="impose")
@click.argument('inputs', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--output', '-o',
    required=True,
    help='Output PDF path',
    type=click.Path(dir_okay=False)
)
@layout_options
@click.option(
    '--workers', '-w',
    default=1,
    show_default=True,
    help='Threads used to validate inputs',
    type=click.IntRange(min=1)
)
def impose(inputs, output, paper, orientation, layout, margin_mm, gap_mm, workers):
    """
    Impose the pages of INPUTS, in order, onto grid sheets.

    Examples:

        pdfimposex impose a.pdf b.pdf -o sheets.pdf

        pdfimposex impose *.pdf -o sheets.pdf --paper A3 --layout 2x4 --orientation portrait
    """
    try:
        options = ImpositionOptions.from_form(paper, orientation, layout, margin_mm, gap_mm)
        check_upload_limits(
            [(os.path.basename(path), os.path.getsize(path)) for path in inputs],
            max_files=MAX_FILES,
            max_file_size=MAX_FILE_SIZE,
        )

        console.print(f"\n[bold cyan]Imposing {len(inputs)} file(s)...[/bold cyan]")
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console
        ) as progress:
            task = progress.add_task("Placing pages...", total=None)
            result = impose_files(inputs, output, options.to_layout(), workers=workers)
            progress.update(task, completed=True)

        if result.bad_files:
            bad_table = Table(title=f"Rejected files ({result.total_bad})")
            bad_table.add_column("File", style="cyan")
            bad_table.add_column("Reason", style="red")
            for entry in result.bad_files:
                bad_table.add_row(entry.path, entry.error)
            if result.total_bad > len(result.bad_files):
                bad_table.add_row("...", f"and {result.total_bad - len(result.bad_files)} more")
            console.print(bad_table)

        if not result.success:
            console.print(f"\n[bold red]✗ Error:[/bold red] {result.error}")
            sys.exit(1)

        summary = Table(title="Imposition Summary", show_header=False)
        summary.add_column("Metric", style="cyan")
        summary.add_column("Value", style="green")
        summary.add_row("Layout", f"{options.paper} {options.orientation} {options.layout}")
        summary.add_row("Pages", str(result.total_pages))
        summary.add_row("Sheets", str(result.sheets))
        summary.add_row("Rejected", str(result.total_bad))
        summary.add_row("Size", format_file_size(len(result.pdf_bytes or b"")))
        console.print(summary)

        console.print(f"\n[bold green]✓ Successfully created:[/bold green] {os.path.abspath(output)}")
        console.print()

    except PdfImposeError as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)
    except OSError as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


@cli.command(name="geometry")
@layout_options
def show_geometry(paper, orientation, layout, margin_mm, gap_mm):
    """
    Display the sheet size and cell table for a layout.

    Example:

        pdfimposex geometry --paper A3 --layout 2x4
    """
    try:
        options = ImpositionOptions.from_form(paper, orientation, layout, margin_mm, gap_mm)
    except PdfImposeError as e:
        console.print(f"[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)

    geometry = compute_geometry(options.to_layout())

    table = Table(
        title=f"Sheet {geometry.sheet_width:.2f} x {geometry.sheet_height:.2f} pt"
    )
    table.add_column("Cell", style="cyan", justify="right")
    table.add_column("x", style="green", justify="right")
    table.add_column("y", style="green", justify="right")
    table.add_column("Width", style="green", justify="right")
    table.add_column("Height", style="green", justify="right")
    for index, cell in enumerate(geometry.cells):
        table.add_row(
            str(index),
            f"{cell.x:.2f}",
            f"{cell.y:.2f}",
            f"{cell.width:.2f}",
            f"{cell.height:.2f}",
        )

    console.print()
    console.print(table)
    console.print()


if __name__ == '__main__':
    cli()
