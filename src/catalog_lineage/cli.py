"""CLI for lineage layout."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from catalog_lineage.config import load_config
from catalog_lineage.errors import CatalogLineageError
from catalog_lineage.exporters import JSONExporter, CSVExporter, HTMLExporter
from catalog_lineage.layout import LineageLayoutEngine, LayoutResult
from catalog_lineage.store import (
    SnapshotSource, JsonFileSnapshotSource, RestSnapshotSource, SqlSnapshotStore
)
from catalog_lineage.versioning import LineageSession, ViewState

console = Console()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)]
    )


def build_source(
    input_path: Optional[str],
    api_url: Optional[str],
    database_url: Optional[str],
    timeout: float
) -> SnapshotSource:
    """Pick the snapshot source named on the command line or in config."""
    chosen = [value for value in (input_path, api_url, database_url) if value]
    if len(chosen) != 1:
        raise click.UsageError(
            "Give exactly one of --input, --api-url or --database-url "
            "(or set source.api_base_url / source.database_url in config)"
        )

    if input_path:
        return JsonFileSnapshotSource(Path(input_path))
    if api_url:
        return RestSnapshotSource(api_url, timeout=timeout)
    return SqlSnapshotStore.from_url(database_url)


def render_result(result: LayoutResult) -> None:
    """Print positioned nodes and warnings."""
    table = Table(title=f"Lineage Layout (version {result.version})")
    table.add_column("Node", style="cyan")
    table.add_column("Role")
    table.add_column("Depth", justify="right")
    table.add_column("X", justify="right", style="green")
    table.add_column("Y", justify="right", style="green")

    for positioned in result.positioned_nodes:
        table.add_row(
            escape(positioned.node.label[:50]),
            positioned.node.role.value,
            str(positioned.depth),
            f"{positioned.x:.1f}",
            f"{positioned.y:.1f}"
        )

    console.print(table)

    for warning in result.warnings:
        console.print(f"[yellow]Warning: {escape(warning.message)}[/yellow]")


@click.command()
@click.option("--input", "input_path", default=None, help="Lineage snapshot JSON file")
@click.option("--api-url", default=None, help="Base URL of the catalog REST API")
@click.option("--database-url", default=None, help="SQLAlchemy URL of the lineage version store")
@click.option("--product", type=int, default=None, help="Data product ID")
@click.option("--version", "version", type=int, default=None, help="Pin a lineage version (default: latest)")
@click.option("--config", default=None, help="Path to configuration file")
@click.option("--out", default=None, help="Output directory")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
def main(
    input_path: Optional[str],
    api_url: Optional[str],
    database_url: Optional[str],
    product: Optional[int],
    version: Optional[int],
    config: Optional[str],
    out: Optional[str],
    verbose: bool
) -> None:
    """Data Lineage Layout Tool.

    Fetches a data product's lineage snapshot, lays it out in depth
    columns and exports the positioned graph.
    """
    configure_logging(verbose)
    console.print("[bold blue]Data Lineage Layout[/bold blue]")
    console.print()

    try:
        cfg = load_config(config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        console.print(f"[bold red]Error: cannot load config: {escape(str(e))}[/bold red]")
        sys.exit(1)

    if out:
        cfg.output_dir = out

    if not input_path and not api_url and not database_url:
        api_url = cfg.source.api_base_url
        database_url = cfg.source.database_url

    try:
        source = build_source(input_path, api_url, database_url, cfg.source.timeout)
    except CatalogLineageError as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        sys.exit(1)

    if product is None:
        if not input_path:
            raise click.UsageError("--product is required with --api-url or --database-url")
        product = 0

    session = LineageSession(source, LineageLayoutEngine(cfg.layout))
    ticket = session.select_product(product)
    if version is not None:
        ticket = session.select_version(version)

    result = session.run(ticket)

    if session.state == ViewState.ERROR or result is None:
        console.print(f"[bold red]Error: {escape(str(session.error))}[/bold red]")
        sys.exit(1)

    if result.is_empty:
        console.print(f"[dim]{session.message}[/dim]")
    else:
        render_result(result)

    output_dir = Path(cfg.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    if cfg.export.json_output:
        JSONExporter().export(result, output_dir / "lineage_layout.json")

    if cfg.export.csv:
        CSVExporter().export(result, output_dir / "csv")

    if cfg.export.html:
        HTMLExporter().export(result, output_dir / "lineage.html")

    console.print()
    console.print("[bold green]✓ Lineage layout complete![/bold green]")
    console.print(f"[dim]Results saved to: {output_dir.absolute()}[/dim]")


if __name__ == "__main__":
    main()
