"""
Console rendering of query results.

All human-facing text (labels, separators, "no data" markers) lives here;
the query layer only returns structured data.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from region_index.index.builder import BuildReport
from region_index.loader.records import level_name
from region_index.query.engine import NameSearchResult, QueryEngine, RegionMatch

NO_DATA = "no data"
SEPARATOR = "-" * 40


def render_match(console: Console, match: RegionMatch) -> None:
    node = match.node
    record = node.record

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Name", record.name)
    table.add_row("Code", record.code)
    table.add_row("Level", level_name(record.level))
    table.add_row("Type", str(record.type))
    price = record.avg_house_price
    table.add_row("Avg. house price", f"{price:.2f}" if price is not None else NO_DATA)
    table.add_row("Employment rate", record.employment_rate or NO_DATA)
    console.print(table)

    console.print("Hierarchy:")
    console.print(f"└─ {record.name}", highlight=False)
    for ancestor in match.ancestors:
        console.print(
            f"   └─ part of {level_name(ancestor.level)}: {ancestor.name}",
            highlight=False,
        )


def render_search(console: Console, result: NameSearchResult, engine: QueryEngine, text: str) -> None:
    if not result.count:
        console.print(f"No region name contains '{text}'", highlight=False)
        return

    for i, node in enumerate(result.matches):
        if i:
            console.print(SEPARATOR)
        render_match(console, engine.describe(node))

    console.print()
    console.print(f"{result.count} match(es) shown")
    if result.truncated:
        console.print(f"[yellow]More regions match; only the first {result.count} are shown.[/yellow]")


def render_report(console: Console, report: BuildReport, stats: dict) -> None:
    table = Table(title="Region Index Statistics")
    table.add_column("Metric", style="bold")
    table.add_column("Count", justify="right")

    table.add_row("Records loaded", str(report.record_count))
    table.add_row("Rows rejected", str(stats.get("rejected", 0)))
    table.add_row("Reachable regions", str(stats.get("reachable", 0)))
    table.add_row("Orphans", str(report.orphan_count))
    table.add_row("Unreachable", str(len(report.unreachable)))
    table.add_row("Duplicate codes", str(len(report.duplicate_codes)))
    console.print(table)

    for orphan in report.orphans:
        console.print(
            f"[yellow]orphan[/yellow] {orphan.code} (parent {orphan.parent_code} not found)",
            highlight=False,
        )
