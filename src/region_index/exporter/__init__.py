"""
Exporter package.

Re-exports the structured output helpers used by the CLI.
"""

from __future__ import annotations

from .json_exporter import (
    match_to_dict,
    node_to_dict,
    report_to_dict,
    search_result_to_dict,
    serialize,
    write_json,
)

__all__ = [
    "match_to_dict",
    "node_to_dict",
    "report_to_dict",
    "search_result_to_dict",
    "serialize",
    "write_json",
]
