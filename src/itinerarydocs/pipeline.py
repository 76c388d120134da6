"""Orchestration pipeline: payload file -> itinerary document -> PDF file."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

from rich.console import Console

from .config import EngineConfig
from .core.errors import InvalidPayloadError
from .core.models import GenerationResult, ItineraryDocument
from .core.payload import parse_payload
from .generators.pdf_generator import PdfGenerator

console = Console()


class Pipeline:
    """End-to-end JSON payload -> branded PDF pipeline.

    Usage::

        pipeline = Pipeline()
        result = pipeline.run("trip.json", output_dir="./output")
        print(result.output_path, result.page_count)
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig.from_env()
        self.theme = self.config.theme()
        self.resources = self.config.load_resources()

    def load(self, source: str | Path) -> ItineraryDocument:
        """Read and resolve a payload file. Raises ``InvalidPayloadError``."""
        path = Path(source)
        try:
            body = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise InvalidPayloadError(f"Cannot read payload {path}: {exc}") from exc
        return parse_payload(
            body,
            generated_at=date.today().isoformat(),
            website=self.theme.site_name,
        )

    def run(self, source: str | Path, *, output_dir: str | Path = "./output") -> GenerationResult:
        output_path = Path(output_dir).resolve()

        console.print(f"[dim]🎨 Theme:[/] [bold]{self.theme.name}[/bold]")
        if not self.resources.custom_fonts:
            console.print("[dim]🔤 Fonts: built-in Helvetica[/]")
        if self.resources.logo is None:
            console.print("[dim]🖼  Logo: text fallback[/]")

        # -- Step 1: Read payload -----------------------------------------
        console.print(f"\n[bold blue]📥 Reading payload:[/] {source}")
        try:
            document = self.load(source)
        except InvalidPayloadError as exc:
            console.print(f"[bold red]❌ Invalid payload:[/] {exc}")
            return GenerationResult(output_path=output_path, success=False, error=str(exc))

        console.print(
            f"[green]✓[/] Resolved '{document.title}' "
            f"({len(document.sections)} section(s))"
        )

        # -- Step 2: Lay out and write ------------------------------------
        console.print("[bold blue]📄 Generating PDF...[/]")
        generator = PdfGenerator(theme=self.theme, resources=self.resources)
        result = generator.generate(document, output_path)

        if result.success:
            console.print(
                f"[green]✓[/] {result.output_path} "
                f"[dim]({result.page_count} page(s))[/]"
            )
        else:
            console.print(f"[red]✗[/] pdf: {result.error}")
        return result
