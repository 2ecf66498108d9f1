from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from region_index.cli.render import render_search
from region_index.cli.utils import console, load_regions, resolve_data_path
from region_index.config import get_config
from region_index.core.exceptions import QueryValidationError
from region_index.exporter import search_result_to_dict, write_json


def name_command(
    text: str = typer.Argument(..., help="Text contained in the region name"),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-n",
        help="Maximum number of matches (defaults to query.name_limit)",
    ),
    data: Optional[Path] = typer.Option(
        None,
        "--data",
        "-d",
        help="Region CSV file (defaults to paths.data_file)",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the result as JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show load timing and INFO log output",
    ),
):
    """
    Search regions whose name contains TEXT (case-sensitive).
    """
    engine, _, _ = load_regions(resolve_data_path(data), verbose=verbose)
    if limit is None:
        limit = int(get_config().query["name_limit"])

    try:
        result = engine.find_by_name(text, limit)
    except QueryValidationError as exc:
        console.print(f"[red]Invalid search:[/red] {exc}")
        raise typer.Exit(code=2)

    if as_json:
        typer.echo(write_json(search_result_to_dict(result, engine)))
    else:
        render_search(console, result, engine, text.strip())
