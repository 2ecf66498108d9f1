# tests/test_builder.py

from __future__ import annotations

import pytest

from region_index.core.exceptions import IndexBuildError
from region_index.index import IndexBuilder, RegionTree, build_index
from region_index.index.builder import OrphanRecord
from region_index.index.code_index import CodeIndex
from region_index.loader import ROOT_CODE, ROOT_NAME

from conftest import region


def test_build_returns_tree_with_synthetic_root(beijing_records) -> None:
    result = build_index(beijing_records)

    assert isinstance(result.tree, RegionTree)
    root = result.tree.root
    assert root.code == ROOT_CODE
    assert root.name == ROOT_NAME
    assert root.level == 0
    assert root.parent_code == "0"
    assert root.parent is None
    assert len(result.tree) == 3


def test_root_name_is_configurable(beijing_records) -> None:
    result = build_index(beijing_records, root_name="China")
    assert result.tree.root.name == "China"


def test_children_keep_input_order(province_records) -> None:
    tree = build_index(province_records).tree

    top = [n.name for n in tree.children_of(tree.root)]
    assert top == ["Hebei", "Beijing"]

    hebei = tree.children_of(tree.root)[0]
    assert [n.name for n in tree.children_of(hebei)] == ["Tangshan", "Shijiazhuang"]


def test_every_record_reachable_exactly_once(province_records) -> None:
    result = build_index(province_records)
    tree = result.tree

    seen = [n.code for n in tree.iter_regions()]
    assert sorted(seen) == sorted(r.code for r in province_records)
    assert len(seen) == len(set(seen))
    assert tree.reachable_count == len(province_records) + 1
    assert not result.report.has_anomalies


def test_orphan_is_counted_and_not_attached() -> None:
    records = [
        region("11", "0", "Beijing"),
        region("9901", "99", "Nowhere", 2),
    ]
    result = build_index(records)

    assert result.report.orphan_count == 1
    assert result.report.orphans == [OrphanRecord(position=1, code="9901", parent_code="99")]
    assert result.report.attached_count == 1
    assert "9901" not in [n.code for n in result.tree.iter_regions()]
    assert result.tree.node(2).parent is None


def test_descendants_of_orphans_are_unreachable() -> None:
    records = [
        region("11", "0", "Beijing"),
        region("9901", "99", "Nowhere", 2),
        region("990101", "9901", "Nowhere Town", 3),
    ]
    report = build_index(records).report

    assert report.orphan_count == 1
    assert report.unreachable == [2]
    assert report.has_anomalies


def test_parent_cycle_is_unreachable_not_fatal() -> None:
    records = [
        region("11", "0", "Beijing"),
        region("21", "22", "Loop A", 2),
        region("22", "21", "Loop B", 2),
    ]
    result = build_index(records)

    assert result.report.orphan_count == 0
    assert sorted(result.report.unreachable) == [1, 2]
    assert [n.code for n in result.tree.iter_regions()] == ["11"]


def test_duplicate_codes_resolve_to_first_occurrence() -> None:
    records = [
        region("11", "0", "Beijing"),
        region("11", "0", "Beijing (dup)"),
        region("1101", "11", "Dongcheng", 2),
    ]
    result = build_index(records)
    tree = result.tree

    assert result.report.duplicate_codes == ["11"]
    first = tree.children_of(tree.root)[0]
    assert [n.code for n in tree.children_of(first)] == ["1101"]
    assert tree.code_index.lookup("11") == first.index


def test_duplicate_resolution_is_deterministic() -> None:
    records = [
        region("12", "0", "Tianjin"),
        region("11", "0", "Beijing B"),
        region("11", "0", "Beijing A"),
        region("1101", "11", "Dongcheng", 2),
    ]
    first = build_index(records).tree
    second = build_index(list(records)).tree

    assert first.code_index.lookup("11") == second.code_index.lookup("11")
    assert first.node(first.code_index.lookup("11")).name == "Beijing B"


def test_retain_code_index_can_be_disabled(beijing_records) -> None:
    tree = build_index(beijing_records, retain_code_index=False).tree

    assert tree.code_index is None
    rebuilt = tree.build_code_index()
    assert rebuilt.lookup("1101") == 2


def test_retained_index_excludes_orphans() -> None:
    records = [region("11", "0", "Beijing"), region("9901", "99", "Nowhere", 2)]
    tree = build_index(records).tree

    assert tree.code_index.lookup("9901") is None
    assert len(tree.code_index) == 1


def test_empty_input_builds_root_only() -> None:
    result = build_index([])

    assert len(result.tree) == 1
    assert result.tree.reachable_count == 1
    assert result.report.record_count == 0


def test_orphaned_first_duplicate_does_not_capture_children() -> None:
    records = [
        region("11", "0", "Beijing"),
        region("12", "99", "Stray"),
        region("12", "0", "Tianjin"),
        region("1201", "12", "Heping", 2),
    ]
    result = build_index(records)
    tree = result.tree

    tianjin = tree.node(3)
    assert [n.code for n in tree.children_of(tianjin)] == ["1201"]
    assert tree.children_of(tree.node(2)) == ()
    assert tree.code_index.lookup("12") == tianjin.index
    assert tree.code_index.lookup("1201") == 4
    assert result.report.orphan_count == 1
    assert result.report.unreachable == []
    assert result.report.duplicate_codes == ["12"]


def test_later_duplicate_in_preorder_adopts_nothing() -> None:
    records = [
        region("11", "0", "Beijing"),
        region("1101", "11", "Dongcheng", 2),
        region("1101", "0", "Dongcheng (misfiled)"),
        region("110101", "1101", "Donghuamen", 3),
    ]
    tree = build_index(records).tree

    assert tree.node(4).parent == 2
    assert tree.children_of(tree.node(3)) == ()
    assert tree.code_index.lookup("1101") == 2
    assert tree.build_code_index().lookup("1101") == 2


def test_duplicate_below_its_owner_is_reachable_but_not_indexed() -> None:
    records = [
        region("11", "0", "Beijing"),
        region("11", "1101", "Beijing (looped)"),
        region("1101", "11", "Dongcheng", 2),
    ]
    result = build_index(records)
    tree = result.tree

    assert tree.code_index.lookup("11") == 1
    assert tree.node(3).parent == 1
    assert tree.node(2).parent == 3
    assert result.report.unreachable == []
    assert [n.code for n in tree.iter_regions()] == ["11", "1101", "11"]


def test_memory_error_becomes_index_build_error(beijing_records, monkeypatch) -> None:
    def exhausted(cls, entries):
        raise MemoryError

    monkeypatch.setattr(CodeIndex, "from_entries", classmethod(exhausted))

    with pytest.raises(IndexBuildError) as excinfo:
        IndexBuilder(beijing_records).build()

    assert isinstance(excinfo.value.__cause__, MemoryError)
