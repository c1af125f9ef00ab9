"""Command line interface for InfoFind."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from infofind.catalog.store import InfoFileCatalog
from infofind.config import AppConfig, load_config
from infofind.errors import ConfigError
from infofind.index.browse import IndexBuilder
from infofind.index.search import FIND_PARAM, Searcher
from infofind.models import INDEX_STYLES
from infofind.resolver import DefaultPageResolver, InfoFindPageResolver, parse_path
from infofind.utils.params import params_from_pairs
from infofind.web.app import app as web_app
from infofind.web.dependencies import CONFIG_ENV, DATA_DIR_ENV
from infofind.web.markup import make_form, render_index


console = Console()
app = typer.Typer(help="InfoFind - search site content by its .info metadata")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load(config_path: Optional[Path], data_dir: Optional[Path]) -> AppConfig:
    try:
        if config_path is not None:
            return load_config(config_path, data_dir=data_dir)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return AppConfig(data_dir=data_dir)


def _open_catalog(config: AppConfig) -> InfoFileCatalog:
    data_dir = config.resolve_data_dir(Path.cwd())
    if not data_dir.is_dir():
        raise typer.BadParameter(f"Data directory not found: {data_dir}")
    return InfoFileCatalog(
        data_dir,
        sidecar_suffix=config.sidecar_suffix,
        content_suffixes=config.content_suffixes,
    )


def _split_field(option: str) -> tuple[str, str]:
    name, sep, pattern = option.partition("=")
    if not sep or not name:
        raise typer.BadParameter(f"Expected FIELD=PATTERN, got {option!r}")
    return name, pattern


@app.command()
def search(
    path: str = typer.Argument("/", help="Directory to search from, e.g. /fiction/"),
    fields: Optional[List[str]] = typer.Option(
        None, "--field", "-f", help="FIELD=PATTERN to match; may be repeated"
    ),
    sort: Optional[List[str]] = typer.Option(None, "--sort", "-s", help="Sort field; may be repeated"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="JSON configuration file"),
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", help="Site data directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Find entries whose info fields match every given pattern."""
    _setup_logging(verbose)
    config = _load(config_path, data_dir)
    catalog = _open_catalog(config)

    pairs = [(FIND_PARAM, "Search")]
    pairs.extend((config.field_prefix + name, pattern) for name, pattern in map(_split_field, fields or []))
    if config.sort_param:
        pairs.extend((config.sort_param, name) for name in sort or [])

    path_info = parse_path(path if path.endswith("/") else path + "/")
    resolver = InfoFindPageResolver(DefaultPageResolver(catalog), Searcher(catalog, config))
    page = resolver.select_entries(path_info, params_from_pairs(pairs))

    if page.num_found is None:
        console.print("[yellow]No field patterns given; listing all entries.[/yellow]")
    else:
        console.print(f"Criteria:{' ' + escape(page.criteria) if page.criteria else ''}")
        if page.sort_criteria:
            console.print(f"Sorted by: {escape(page.sort_criteria)}")

    if not page.entries:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Entry")
    for name in config.fields:
        table.add_column(name)
    for item_id in page.entries:
        record = catalog.lookup(item_id)
        table.add_row(
            escape(item_id),
            *(escape(record.get(name, "").replace("\n", " ")[:60]) for name in config.fields),
        )
    console.print(table)
    console.print(f"Found: {len(page.entries)}")


@app.command()
def browse(
    field: str = typer.Argument(..., help="Info field to index"),
    scope: str = typer.Option("", "--scope", help="Directory to index, empty for the whole site"),
    style: str = typer.Option("medium", "--style", help="short, medium or long"),
    html: bool = typer.Option(False, "--html", help="Print the index markup"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="JSON configuration file"),
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", help="Site data directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show an alphabetical index of a field's values."""
    _setup_logging(verbose)
    if style not in INDEX_STYLES:
        raise typer.BadParameter(f"Style must be one of {', '.join(INDEX_STYLES)}")
    config = _load(config_path, data_dir)
    index = IndexBuilder(_open_catalog(config), config).build(field, scope, style)

    if html:
        typer.echo(render_index(index))
        return
    if not index:
        console.print(f"[yellow]No values for {escape(field)}.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Letter")
    table.add_column("Label")
    table.add_column("Link")
    letters = {entry.value: group.letter for group in index.groups for entry in group.entries}
    for link in index.links:
        table.add_row(escape(letters.get(link.label, link.label)), escape(link.label), escape(link.href))
    console.print(table)


@app.command()
def form(
    path: str = typer.Argument("/", help="Path the form searches from"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="JSON configuration file"),
) -> None:
    """Print the search form markup."""
    config = _load(config_path, None)
    markup = make_form(config, path)
    if not markup:
        console.print("[yellow]No info_type_spec fields configured.[/yellow]")
        return
    typer.echo(markup)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="JSON configuration file"),
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", help="Site data directory"),
) -> None:
    """Start the web interface."""
    if config_path is not None:
        os.environ[CONFIG_ENV] = str(config_path.resolve())
    if data_dir is not None:
        os.environ[DATA_DIR_ENV] = str(data_dir.resolve())
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    console.print(f"Starting web interface on http://{host}:{port}")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
