from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.panel import Panel
from rich.prompt import Prompt

from region_index.cli.render import render_match, render_search
from region_index.cli.utils import console, load_regions, resolve_data_path
from region_index.config import get_config
from region_index.core.exceptions import QueryValidationError
from region_index.query.engine import QueryEngine

MENU = "1. Look up by code\n2. Search by name\n3. Quit"


def _lookup_code(engine: QueryEngine) -> None:
    code = Prompt.ask("Region code", console=console, default="", show_default=False)
    try:
        node = engine.find_by_code(code)
    except QueryValidationError as exc:
        console.print(f"[red]Invalid code:[/red] {exc}")
        return
    if node is None:
        console.print(f"No region with code {code.strip()}", highlight=False)
        return
    render_match(console, engine.describe(node))


def _search_name(engine: QueryEngine, limit: int) -> None:
    text = Prompt.ask("Region name", console=console, default="", show_default=False)
    try:
        result = engine.find_by_name(text, limit)
    except QueryValidationError as exc:
        console.print(f"[red]Invalid search:[/red] {exc}")
        return
    render_search(console, result, engine, text.strip())


def shell_command(
    data: Optional[Path] = typer.Option(
        None,
        "--data",
        "-d",
        help="Region CSV file (defaults to paths.data_file)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show load timing and INFO log output",
    ),
):
    """
    Interactive query menu.
    """
    engine, report, stats = load_regions(resolve_data_path(data), verbose=verbose)
    limit = int(get_config().query["name_limit"])
    console.print(f"Loaded {stats['records']} regions ({report.orphan_count} orphans)")

    while True:
        console.print(Panel(MENU, title="Region query", expand=False))
        choice = Prompt.ask("Choose [1-3]", console=console, default="3", show_default=False)

        if choice == "1":
            _lookup_code(engine)
        elif choice == "2":
            _search_name(engine, limit)
        elif choice == "3":
            console.print("Bye")
            return
        else:
            console.print("Please enter 1, 2 or 3")
