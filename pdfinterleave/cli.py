"""
Command-line interface for pdfinterleave.
"""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pdfinterleave import __version__
from pdfinterleave.config import InterleaveConfig
from pdfinterleave.exceptions import InterleaveError, LoadError
from pdfinterleave.loader import Slot, load_file
from pdfinterleave.session import InterleaveSession, MergeOutcome
from pdfinterleave.utils import configure_logging, format_file_size

console = Console()


async def _load_and_merge(session: InterleaveSession, odd_pdf: str, even_pdf: str) -> Optional[MergeOutcome]:
    await session.select_pair(odd_pdf, even_pdf)
    if not session.can_merge:
        return None
    console.print(f"[bold cyan]{session.merge_label}...[/bold cyan]")
    return await session.merge()


def _summary_table(session: InterleaveSession) -> Table:
    table = Table(title="Interleave Summary", show_header=True)
    table.add_column("Source", style="cyan")
    table.add_column("File", style="green")
    table.add_column("Pages", justify="right")
    table.add_column("Size", justify="right")

    for slot in (Slot.A, Slot.B):
        info = session.source_info(slot)
        table.add_row(f"PDF {slot.value} ({slot.role})", info.name, str(info.pages), format_file_size(info.size))

    result = session.result_info
    table.add_row("Output", result.name, str(result.pages), format_file_size(result.size))
    return table


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, verbose):
    """
    PDF Interleave - Merge two PDFs by alternating their pages.
    """
    config = InterleaveConfig.from_env()
    if verbose:
        config = config.with_updates(log_level="DEBUG")
    configure_logging(config.log_level)
    ctx.obj = config


@cli.command(name="merge")
@click.argument('odd_pdf', type=click.Path(exists=True, dir_okay=False))
@click.argument('even_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--output', '-o',
    default=None,
    help='Output file or directory (defaults to the current directory)',
    type=click.Path()
)
@click.option(
    '--prefix',
    default=None,
    help='Prefix added to the first PDF\'s name to name the output',
    type=str
)
@click.pass_obj
def merge(config, odd_pdf, even_pdf, output, prefix):
    """
    Interleave ODD_PDF (pages 1, 3, 5, ...) with EVEN_PDF (pages 2, 4, 6, ...).

    Examples:

        pdf-interleave merge fronts.pdf backs.pdf

        pdf-interleave merge fronts.pdf backs.pdf -o scans/

        pdf-interleave merge fronts.pdf backs.pdf -o book.pdf
    """
    config = config.with_updates(name_prefix=prefix)

    with InterleaveSession(config) as session:
        console.print("\n[bold cyan]Loading PDFs...[/bold cyan]")
        outcome = asyncio.run(_load_and_merge(session, odd_pdf, even_pdf))

        if outcome is None or not outcome.ok:
            console.print(f"[bold red]✗ Error:[/bold red] {session.status}")
            if outcome is not None:
                console.print(f"[dim]{escape(outcome.reason)}[/dim]")
            sys.exit(1)

        try:
            saved = session.artifact.save(output if output else Path.cwd())
        except (InterleaveError, OSError) as e:
            console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
            sys.exit(1)

        console.print(_summary_table(session))
        console.print(f"\n[bold green]✓ {session.status}[/bold green] {session.result_summary}")
        console.print(f"[dim]Saved to: {saved}[/dim]\n")


@cli.command(name="info")
@click.argument('pdf_files', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def info(config, pdf_files):
    """
    Show name, page count and size of one or more PDFs.

    Examples:

        pdf-interleave info fronts.pdf backs.pdf
    """
    table = Table(title="PDF Information", show_header=True)
    table.add_column("File", style="cyan")
    table.add_column("Pages", justify="right", style="green")
    table.add_column("Size", justify="right", style="green")

    failures = 0
    for pdf_file in pdf_files:
        try:
            document = load_file(pdf_file, slot=Slot.A, password=config.password, require_pages=False)
        except LoadError as e:
            failures += 1
            table.add_row(Path(pdf_file).name, "[red]✗[/red]", f"[red]{escape(str(e.__cause__ or e))}[/red]")
            continue
        table.add_row(document.name, str(document.page_count), format_file_size(document.size))

    console.print(table)
    sys.exit(1 if failures else 0)


if __name__ == '__main__':
    cli()
