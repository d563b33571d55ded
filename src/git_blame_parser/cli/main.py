"""Main CLI interface for git-blame-parser."""

import json
import logging
from typing import List, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from git_blame_parser.core.parser import BlameParseError
from git_blame_parser.core.runner import BlameCommandError, blame
from git_blame_parser.models.blame import Blame

console = Console()

OUTPUT_FORMATS = ["text", "table", "json"]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def render_text(blames: List[Blame]) -> None:
    """Print blames in the plain per-line layout.

    Written with click.echo so line content reaches the terminal untouched
    (no tab expansion, markup or emoji codes).
    """
    for entry in blames:
        click.echo(
            f"* {entry.short_commit}: {entry.original_line_no:04d} "
            f"by {entry.author} {entry.author_mail}"
        )
        click.echo(f"summary: {entry.summary}")
        click.echo(f"content: `{entry.content}`")
        click.echo()


def render_table(blames: List[Blame], title: Optional[str] = None) -> None:
    """Print blames as a rich table."""
    table = Table(title=title)
    table.add_column("Commit", style="yellow", no_wrap=True)
    table.add_column("Line", justify="right")
    table.add_column("Author", style="cyan")
    table.add_column("Date", style="green")
    table.add_column("Content")

    for entry in blames:
        commit = entry.short_commit
        if entry.boundary:
            commit = f"^{commit}"
        table.add_row(
            escape(commit),
            str(entry.final_line_no),
            escape(entry.author),
            entry.author_datetime.strftime("%Y-%m-%d %H:%M:%S %z"),
            escape(entry.content),
        )

    console.print(table)


def render_json(blames: List[Blame]) -> None:
    """Print blames as a JSON array."""
    click.echo(json.dumps([entry.model_dump(mode="json") for entry in blames], indent=2))


@click.group()
@click.version_option(package_name="git-blame-parser")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """git-blame-parser - Structured git blame output."""
    _configure_logging(verbose)


@main.command()
@click.argument("file_path", type=click.Path(dir_okay=False))
@click.option("--rev", help="Blame the file as of this revision")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default="text",
    envvar="GIT_BLAME_PARSER_FORMAT",
    show_default=True,
    help="Output format",
)
def show(file_path: str, rev: Optional[str], output_format: str):
    """Show blame information for FILE_PATH."""
    try:
        blames = blame(file_path, rev=rev)
    except (BlameCommandError, BlameParseError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort() from e

    if output_format == "json":
        render_json(blames)
    elif output_format == "table":
        render_table(blames, title=file_path)
    else:
        render_text(blames)


if __name__ == "__main__":
    main()
