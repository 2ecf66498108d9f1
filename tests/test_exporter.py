# tests/test_exporter.py

from __future__ import annotations

import json

from region_index.exporter import (
    match_to_dict,
    report_to_dict,
    search_result_to_dict,
    write_json,
)
from region_index.index import build_index
from region_index.query import QueryEngine

from conftest import region


def test_match_to_dict_contains_chain(beijing_records) -> None:
    engine = QueryEngine(build_index(beijing_records).tree)
    data = match_to_dict(engine.describe(engine.find_by_code("1101")))

    assert data["code"] == "1101"
    assert data["level"] == 2
    assert data["level_name"] == "Prefecture"
    assert data["avg_house_price"] is None
    assert data["ancestors"] == [{"code": "11", "name": "Beijing", "level": 1}]


def test_search_result_to_dict_reports_truncation() -> None:
    records = [region("11", "0", "A Town"), region("12", "0", "B Town")]
    engine = QueryEngine(build_index(records).tree)

    data = search_result_to_dict(engine.find_by_name("Town", 1), engine)
    assert data["count"] == 1
    assert data["truncated"] is True
    assert data["matches"][0]["name"] == "A Town"


def test_report_to_dict_lists_orphans() -> None:
    report = build_index([region("9901", "99", "Nowhere", 2)]).report
    data = report_to_dict(report)

    assert data["orphan_count"] == 1
    assert data["orphans"][0] == {"position": 0, "code": "9901", "parent_code": "99"}


def test_write_json_to_file(tmp_path) -> None:
    out = tmp_path / "nested" / "result.json"
    payload = write_json({"name": "东城区", "price": None}, out=out)

    assert out.is_file()
    assert json.loads(out.read_text(encoding="utf-8")) == {"name": "东城区", "price": None}
    assert "东城区" in payload


def test_write_json_compact() -> None:
    assert write_json({"a": [1, 2]}, pretty=False) == '{"a":[1,2]}'
