from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from region_index.cli.render import render_report
from region_index.cli.utils import console, load_regions, resolve_data_path
from region_index.exporter import report_to_dict, write_json


def stats_command(
    data: Optional[Path] = typer.Option(
        None,
        "--data",
        "-d",
        help="Region CSV file (defaults to paths.data_file)",
    ),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Also write the build report as JSON to this file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show load timing and INFO log output",
    ),
):
    """
    Show build statistics (orphans, duplicates, rejected rows) for a region file.
    """
    _, report, stats = load_regions(resolve_data_path(data), verbose=verbose)

    render_report(console, report, stats)

    if out is not None:
        data_out = report_to_dict(report)
        data_out["stats"] = stats
        write_json(data_out, out=out)
        console.print(f"Report written to {out}", highlight=False)
