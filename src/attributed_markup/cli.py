"""Command-line interface for Attributed Markup."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from attributed_markup import __version__
from attributed_markup.config import get_settings
from attributed_markup.formatting.colors import encode_color
from attributed_markup.formatting.ir import FontDescriptor, ObjectRun, RunSequence
from attributed_markup.formatting.parser import MarkupParser
from attributed_markup.formatting.serializer import MarkupSerializer
from attributed_markup.images import DirectoryImageResolver
from attributed_markup.logger import configure_logging

app = typer.Typer(
    name="attributed-markup",
    help="Convert between styled markup and attributed text runs.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"Attributed Markup v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log degraded-input decisions",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Convert between styled markup and attributed text runs."""
    configure_logging(verbose, console=console)


def build_base_font(size: Optional[float], family: Optional[str]) -> FontDescriptor:
    """Base font from CLI options, falling back to settings."""
    return FontDescriptor(size=size or get_settings().base_font_size, family=family)


def describe_font(font: Optional[FontDescriptor]) -> str:
    if font is None:
        return ""
    traits = [t for t, on in (("bold", font.bold), ("italic", font.italic)) if on]
    family = font.family or "system"
    return " ".join([family, f"{font.size:g}pt", *traits])


def render_table(runs: RunSequence) -> Table:
    """Render runs as a rich table."""
    table = Table(title=f"{len(runs)} run(s)")
    table.add_column("#", justify="right")
    table.add_column("Text")
    table.add_column("Font")
    table.add_column("Color")
    table.add_column("Background")
    table.add_column("Link")
    table.add_column("Align")

    for index, run in enumerate(runs):
        atb = run.attributes
        if isinstance(run, ObjectRun):
            text = f"[img {run.src}]"
        else:
            text = repr(run.text)
        table.add_row(
            str(index),
            escape(text),
            describe_font(atb.font),
            encode_color(atb.foreground) if atb.foreground else "",
            encode_color(atb.background) if atb.background else "",
            escape(atb.link or ""),
            atb.alignment.value if atb.paragraph else "",
        )
    return table


@app.command("parse")
def parse_command(
    path: Path = typer.Argument(
        ...,
        help="Markup file to parse",
        exists=True,
        dir_okay=False,
    ),
    base_size: Optional[float] = typer.Option(
        None,
        "--base-size",
        "-s",
        min=0.1,
        help="Base font size (default from settings)",
    ),
    base_family: Optional[str] = typer.Option(
        None,
        "--base-family",
        "-f",
        help="Base font family",
    ),
    images: Optional[Path] = typer.Option(
        None,
        "--images",
        "-i",
        help="Directory to resolve <img> sources from (default: the file's folder)",
        file_okay=False,
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Print runs as JSON instead of a table",
    ),
) -> None:
    """
    Parse a markup file into attributed runs.

    Examples:

        attributed-markup parse title.html

        attributed-markup parse title.html --base-size 12 --json
    """
    markup = path.read_text(encoding="utf-8")
    parser = MarkupParser(images=DirectoryImageResolver(images or path.parent))
    runs = parser.parse(markup, build_base_font(base_size, base_family))

    if as_json:
        typer.echo(json.dumps(runs.to_dict(), indent=2, ensure_ascii=False))
    else:
        console.print(render_table(runs))


@app.command("serialize")
def serialize_command(
    path: Path = typer.Argument(
        ...,
        help="JSON run dump (as printed by 'parse --json')",
        exists=True,
        dir_okay=False,
    ),
    base_size: Optional[float] = typer.Option(
        None,
        "--base-size",
        "-s",
        min=0.1,
        help="Base font size (default: the dump's base-font marker)",
    ),
) -> None:
    """Serialize a JSON run dump back into markup."""
    try:
        runs = RunSequence.from_dict(json.loads(path.read_text(encoding="utf-8")))
    except (ValueError, KeyError, TypeError) as e:
        console.print(f"[red]Error:[/red] Invalid run dump {path.name}: {e}")
        raise typer.Exit(1)

    base_font = FontDescriptor(size=base_size) if base_size else None
    typer.echo(MarkupSerializer().serialize(runs, base_font))


if __name__ == "__main__":
    app()
