"""Typer-based command line interface for the Flowise node catalog."""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from .catalog import (
    CatalogEntry,
    CatalogScanner,
    CatalogSummary,
    CatalogWriter,
    NodesDirectoryNotFound,
    read_catalog,
)
from .catalog.exporters import export_parquet
from .utils.config import load_config
from .utils.logging import configure_logging
from .utils.paths import resolve_under

app = typer.Typer(add_completion=False, help="Catalog Flowise component nodes.")
console = Console()


@app.callback()
def main(ctx: typer.Context, verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging.")) -> None:
    ctx.obj = {"verbose": verbose}
    configure_logging("DEBUG" if verbose else "INFO")


def _load_entries(catalog_path: Path) -> List[CatalogEntry]:
    if not catalog_path.exists():
        raise typer.BadParameter(f"Catalog {catalog_path} not found")
    return list(read_catalog(catalog_path))


@app.command()
def build(
    ctx: typer.Context,
    base_dir: Path = typer.Option(Path("."), "--base-dir", help="Directory paths and outputs are relative to."),
    nodes_dir: Optional[Path] = typer.Option(None, "--nodes-dir", help="Nodes tree to scan, relative to the base directory."),
    config_path: Path = typer.Option(Path("nodecatalog.yml"), "--config", help="YAML configuration file."),
    json_out: Optional[Path] = typer.Option(None, "--json-out", help="Structured catalog output path."),
    markdown_out: Optional[Path] = typer.Option(None, "--markdown-out", help="Markdown catalog output path."),
    workers: Optional[int] = typer.Option(None, "--workers", min=1, help="Number of extraction threads."),
) -> None:
    config_file = resolve_under(base_dir, config_path)
    try:
        settings = load_config(config_file)
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid config {config_file}: {exc}") from exc
    updates = {"nodes_dir": nodes_dir, "json_output": json_out, "markdown_output": markdown_out, "workers": workers}
    settings = settings.model_copy(update={key: value for key, value in updates.items() if value is not None})
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    if not verbose and settings.log_level != "INFO":
        configure_logging(settings.log_level)

    config = settings.to_scan_config(base_dir)
    try:
        entries = CatalogScanner().build(config)
    except NodesDirectoryNotFound as exc:
        typer.echo(str(exc), err=True)
        typer.echo(exc.hint, err=True)
        raise typer.Exit(code=1)

    writer = CatalogWriter(
        resolve_under(base_dir, settings.json_output),
        resolve_under(base_dir, settings.markdown_output),
        title=settings.title,
    )
    json_path, markdown_path = writer.write(entries)
    typer.echo(f"Catalogued {len(entries)} nodes -> {json_path} + {markdown_path}")


@app.command()
def summarize(catalog_path: Path = typer.Argument(..., help="Structured catalog JSON path.")) -> None:
    summary = CatalogSummary.from_entries(_load_entries(catalog_path))
    table = Table(title=f"{catalog_path.name}")
    table.add_column("Category")
    table.add_column("Nodes", justify="right")
    for category, count in summary.categories.items():
        table.add_row(category or "(none)", str(count))
    table.add_row("Total", str(summary.total_entries), style="bold")
    console.print(table)


@app.command()
def export(
    catalog_path: Path = typer.Argument(..., help="Structured catalog JSON path."),
    parquet_path: Path = typer.Option(Path("catalog.flowise.nodes.parquet"), "--parquet", help="Output Parquet path."),
) -> None:
    entries = _load_entries(catalog_path)
    export_parquet(entries, parquet_path)
    typer.echo(f"Exported {len(entries)} nodes to {parquet_path}")


if __name__ == "__main__":
    app()
