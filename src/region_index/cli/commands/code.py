from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from region_index.cli.render import render_match
from region_index.cli.utils import console, load_regions, resolve_data_path
from region_index.core.exceptions import QueryValidationError
from region_index.exporter import match_to_dict, write_json


def code_command(
    code: str = typer.Argument(..., help="Region code, e.g. 110101000000"),
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
    Look up one region by its code and show its full hierarchy.
    """
    engine, _, _ = load_regions(resolve_data_path(data), verbose=verbose)

    try:
        node = engine.find_by_code(code)
    except QueryValidationError as exc:
        console.print(f"[red]Invalid code:[/red] {exc}")
        raise typer.Exit(code=2)

    if node is None:
        if as_json:
            typer.echo(write_json(None))
        else:
            console.print(f"No region with code {code.strip()}", highlight=False)
        raise typer.Exit(code=1)

    match = engine.describe(node)
    if as_json:
        typer.echo(write_json(match_to_dict(match)))
    else:
        render_match(console, match)
