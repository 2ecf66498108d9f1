"""
json_exporter.py
Structured JSON output for query results and build reports.

This exporter:
- Converts nodes, matches and reports into plain dictionaries (NOT strings)
- Keeps absent extension data as null rather than zero
- Is deterministic: same input, same output
"""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from region_index.index.builder import BuildReport
from region_index.index.node import RegionNode
from region_index.loader.records import level_name
from region_index.logging import get_logger
from region_index.query.engine import NameSearchResult, QueryEngine, RegionMatch

log = get_logger(__name__)


def _to_json_compatible(obj: Any) -> Any:
    """
    Recursively convert objects into JSON-compatible structures.

    Rules:
    - Primitives pass through
    - dataclasses → dict (recursively)
    - dict → dict (recursively)
    - list / tuple / set → list (recursively)
    - Anything else → str(obj)
    """
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj

    if is_dataclass(obj):
        return {k: _to_json_compatible(v) for k, v in asdict(obj).items()}

    if isinstance(obj, dict):
        return {str(k): _to_json_compatible(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple, set)):
        return [_to_json_compatible(v) for v in obj]

    return str(obj)


def node_to_dict(node: RegionNode) -> Dict[str, Any]:
    record = node.record
    return {
        "code": record.code,
        "name": record.name,
        "level": record.level,
        "level_name": level_name(record.level),
        "parent_code": record.parent_code,
        "type": record.type,
        "avg_house_price": record.avg_house_price,
        "employment_rate": record.employment_rate,
    }


def match_to_dict(match: RegionMatch) -> Dict[str, Any]:
    """A node plus its ancestry chain, nearest ancestor first."""
    data = node_to_dict(match.node)
    data["ancestors"] = [
        {"code": a.code, "name": a.name, "level": a.level} for a in match.ancestors
    ]
    return data


def search_result_to_dict(result: NameSearchResult, engine: QueryEngine) -> Dict[str, Any]:
    return {
        "count": result.count,
        "truncated": result.truncated,
        "matches": [match_to_dict(engine.describe(node)) for node in result.matches],
    }


def report_to_dict(report: BuildReport) -> Dict[str, Any]:
    data = _to_json_compatible(report)
    data["orphan_count"] = report.orphan_count
    return data


def serialize(data: Any, *, pretty: bool = True) -> str:
    if pretty:
        return json.dumps(_to_json_compatible(data), indent=2, ensure_ascii=False)
    return json.dumps(_to_json_compatible(data), separators=(",", ":"), ensure_ascii=False)


def write_json(data: Any, *, out: Optional[Path] = None, pretty: bool = True) -> str:
    """
    Serialize ``data`` and write it to ``out`` when given.

    Returns the JSON text so callers can print it instead.
    """
    payload = serialize(data, pretty=pretty)

    if out is not None:
        out = Path(out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(payload, encoding="utf-8")
        log.info("JSON written to %s (%d bytes)", out, out.stat().st_size)

    return payload
