from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import typer
from rich.console import Console

from region_index.config import get_config
from region_index.core.context import LoadContext
from region_index.core.pipeline import Pipeline
from region_index.index.builder import BuildReport
from region_index.logging import get_logger, set_console_level
from region_index.query.engine import QueryEngine
from region_index.utils import data_file_path

console = Console()
log = get_logger(__name__)


def resolve_data_path(data: Optional[Path]) -> Path:
    """Use the explicit --data path, else the configured data file."""
    path = data if data is not None else data_file_path(get_config())
    if path is None:
        console.print("[red]No region file given and paths.data_file is not configured.[/red]")
        raise typer.Exit(code=2)
    if not path.is_file():
        console.print(f"[red]Region file not found:[/red] {path}")
        raise typer.Exit(code=2)
    return path


def load_regions(
    path: Path,
    *,
    strict: bool = False,
    verbose: bool = False,
) -> Tuple[QueryEngine, BuildReport, Dict[str, Any]]:
    """
    Full load pipeline: CSV -> records -> index -> QueryEngine.
    """
    t0 = time.perf_counter()
    if verbose:
        set_console_level(logging.INFO)

    cfg = get_config()
    ctx = LoadContext(
        config=cfg,
        logger=log,
        input_path=str(path),
        strict=strict,
        debug=bool(cfg.debug),
    )
    pipeline = Pipeline(ctx)
    engine = pipeline.run()

    elapsed = time.perf_counter() - t0

    if verbose:
        console.log(f"Indexed {ctx.stats['records']} regions in {elapsed:.2f}s")

    return engine, pipeline.report, ctx.stats
