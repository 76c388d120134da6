"""itinerarydocs CLI — render branded itinerary PDFs from JSON payloads."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console

from . import __version__
from .config import ENV_FONT_DIR, ENV_LOGO, ENV_SITE, ENV_THEME, EngineConfig
from .core.errors import InvalidPayloadError
from .generators.themes import list_themes
from .pipeline import Pipeline

console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _config_options(func):
    """Options shared by every command that needs render resources."""
    func = click.option(
        "--theme",
        "theme_name",
        type=click.Choice([t.name for t in list_themes()], case_sensitive=False),
        envvar=ENV_THEME,
        default="safari",
        help="Brand theme for the document.",
    )(func)
    func = click.option(
        "--font-dir",
        type=click.Path(file_okay=False, path_type=Path),
        envvar=ENV_FONT_DIR,
        default=None,
        help="Directory holding NotoSans-Regular.ttf / NotoSans-Bold.ttf.",
    )(func)
    func = click.option(
        "--logo",
        "logo_path",
        type=click.Path(dir_okay=False, path_type=Path),
        envvar=ENV_LOGO,
        default=None,
        help="PNG/JPEG logo for the header card.",
    )(func)
    func = click.option(
        "--site",
        "site_name",
        envvar=ENV_SITE,
        default="",
        help="Site name printed in the footer.",
    )(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="itinerarydocs")
def main():
    """itinerarydocs — Branded, paginated itinerary PDFs."""
    pass


@main.command()
@click.argument("payload", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-o", "--output",
    "output_dir",
    type=click.Path(),
    default="./output",
    help="Output directory (default: ./output).",
)
@_config_options
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose logging.")
def render(
    payload: str,
    output_dir: str,
    theme_name: str,
    font_dir: Path | None,
    logo_path: Path | None,
    site_name: str,
    verbose: bool,
):
    """Render PAYLOAD (a JSON request body) into a PDF.

    Both the structured ``{"itinerary": {...}}`` shape and the legacy
    ``{"days": [...]}`` shape are accepted.
    """
    _setup_logging(verbose)
    config = EngineConfig(
        font_dir=font_dir, logo_path=logo_path, theme_name=theme_name, site_name=site_name,
    )
    result = Pipeline(config).run(payload, output_dir=output_dir)
    if not result.success:
        raise SystemExit(1)


@main.command()
@click.argument("payload", type=click.Path(exists=True, dir_okay=False))
@_config_options
def inspect(
    payload: str,
    theme_name: str,
    font_dir: Path | None,
    logo_path: Path | None,
    site_name: str,
):
    """Resolve PAYLOAD and show its sections and planned pages."""
    from rich.tree import Tree
    from .generators.pdf_generator import DocumentBuilder

    config = EngineConfig(
        font_dir=font_dir, logo_path=logo_path, theme_name=theme_name, site_name=site_name,
    )
    pipeline = Pipeline(config)
    try:
        document = pipeline.load(payload)
    except InvalidPayloadError as exc:
        console.print(f"[bold red]❌ Invalid payload:[/] {exc}")
        raise SystemExit(1)

    result = DocumentBuilder(pipeline.resources, pipeline.theme).layout(document)
    placements = {p.index: p for p in result.placements}

    tree = Tree(f"[bold]{document.title}[/bold] [dim]({result.page_count} page(s))[/dim]")
    for i, section in enumerate(document.sections):
        where = placements[i]
        node = tree.add(
            f"[blue]{section.heading}[/blue] "
            f"[dim]p{where.page_number} {where.column.value}, {where.box_height:.0f}pt[/dim]"
            + (" [yellow]clamped[/yellow]" if where.forced else "")
        )
        for bullet in section.bullets:
            node.add(f"[dim]• {bullet}[/dim]")

    console.print(tree)


@main.command()
def themes():
    """List available document themes."""
    from rich.table import Table as RichTable

    table = RichTable(title="Available Themes", show_lines=False)
    table.add_column("Name", style="bold cyan")
    table.add_column("Primary Color", style="bold")
    table.add_column("Accent Color", style="bold")
    table.add_column("Site")

    for t in list_themes():
        p = t.colors.primary
        a = t.colors.sand
        p_hex = f"#{p[0]:02X}{p[1]:02X}{p[2]:02X}"
        a_hex = f"#{a[0]:02X}{a[1]:02X}{a[2]:02X}"
        table.add_row(
            t.name,
            f"[{p_hex}]██ {p_hex}[/]",
            f"[{a_hex}]██ {a_hex}[/]",
            t.site_name,
        )

    console.print(table)


if __name__ == "__main__":
    main()
