# src/region_index/index/builder.py

"""
Index builder: flat region records -> RegionTree.

    records -> sorted code index -> orphan check -> top-down attachment -> RegionTree

Parent codes are checked by binary search over codes sorted once up front,
and attachment is a single pre-order walk from the root, so the whole build
is O(N log N). Records whose parent code cannot be resolved are
orphans: they are reported in the BuildReport and left out of the tree, but
they never abort the build.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from region_index.core.exceptions import IndexBuildError
from region_index.loader.records import ROOT_PARENT_SENTINEL, Region, make_root_region
from region_index.logging import get_logger

from .code_index import CodeIndex
from .node import RegionNode
from .tree import ROOT_INDEX, RegionTree

log = get_logger(__name__)


@dataclass(frozen=True)
class OrphanRecord:
    """A record whose parent code matched no record in the input."""

    position: int
    code: str
    parent_code: str


@dataclass
class BuildReport:
    """
    Anomalies aggregated during one build.

    Attributes:
        record_count: Number of input records.
        attached_count: Records attached to some parent (root included).
        orphans: Records whose parent could not be resolved.
        unreachable: Input positions attached beneath an orphan (or inside a
            parent cycle) and therefore not reachable from the root.
        duplicate_codes: Codes that occur more than once in the input.
    """

    record_count: int = 0
    attached_count: int = 0
    orphans: List[OrphanRecord] = field(default_factory=list)
    unreachable: List[int] = field(default_factory=list)
    duplicate_codes: List[str] = field(default_factory=list)

    @property
    def orphan_count(self) -> int:
        return len(self.orphans)

    @property
    def has_anomalies(self) -> bool:
        return bool(self.orphans or self.unreachable or self.duplicate_codes)


@dataclass
class BuildResult:
    tree: RegionTree
    report: BuildReport


class IndexBuilder:
    """
    Consume a record sequence once and produce a RegionTree.

    Duplicate codes: a code belongs to the first node carrying it in pre-order
    from the root. That node adopts every record naming the code as parent,
    and the code index on the finished tree returns that same node. A code no
    reachable node carries falls back to its first occurrence in the input,
    which keeps orphan subtrees and parent cycles linked for diagnostics.
    """

    def __init__(
        self,
        records: Iterable[Region],
        *,
        retain_code_index: bool = True,
        root_name: Optional[str] = None,
    ):
        self.records: List[Region] = list(records)
        self.retain_code_index = retain_code_index
        self.root_name = root_name

    def build(self) -> BuildResult:
        try:
            return self._build()
        except MemoryError as exc:
            log.error("Index build aborted: out of memory after %d records", len(self.records))
            raise IndexBuildError("Out of memory while building the region index") from exc

    # ------------------------------------------------------------------ #
    # Build steps
    # ------------------------------------------------------------------ #

    def _build(self) -> BuildResult:
        records = self.records
        size = len(records)
        report = BuildReport(record_count=size)
        log.info("Building region index from %d records", size)

        # Arena slot i + 1 holds input record i; slot 0 is the synthetic root.
        parents: List[Optional[int]] = [None] * (size + 1)
        children: List[List[int]] = [[] for _ in range(size + 1)]

        lookup = CodeIndex.from_entries((rec.code, i + 1) for i, rec in enumerate(records))
        report.duplicate_codes = lookup.duplicate_codes()
        log.debug("Sorted %d codes for parent resolution", len(lookup))

        # Group attachable records by the code they hang from, in input order.
        waiting: Dict[str, List[int]] = {}
        for i, rec in enumerate(records):
            slot = i + 1
            if rec.parent_code == ROOT_PARENT_SENTINEL:
                children[ROOT_INDEX].append(slot)
                parents[slot] = ROOT_INDEX
            elif lookup.lookup(rec.parent_code) is None:
                report.orphans.append(OrphanRecord(i, rec.code, rec.parent_code))
            else:
                waiting.setdefault(rec.parent_code, []).append(slot)

        report.attached_count = size - len(report.orphans)

        owners = self._attach_reachable(records, waiting, parents, children)
        reachable = self._mark_reachable(children)

        # Whatever is still waiting hangs from a code no reachable node owns.
        # Park it under the first occurrence so cycles and orphan subtrees stay visible.
        for parent_code, slots in waiting.items():
            holder = lookup.lookup(parent_code)
            children[holder].extend(slots)
            for slot in slots:
                parents[slot] = holder

        report.unreachable = [
            slot - 1
            for slot in range(1, size + 1)
            if parents[slot] is not None and not reachable[slot]
        ]

        root_record = make_root_region(self.root_name)
        nodes = [RegionNode(ROOT_INDEX, root_record, None, tuple(children[ROOT_INDEX]))]
        nodes.extend(
            RegionNode(slot, records[slot - 1], parents[slot], tuple(children[slot]))
            for slot in range(1, size + 1)
        )

        code_index = None
        if self.retain_code_index:
            code_index = CodeIndex.from_entries(owners.items())

        tree = RegionTree(nodes, code_index=code_index, reachable_count=sum(reachable))

        self._log_report(report)
        return BuildResult(tree=tree, report=report)

    @staticmethod
    def _attach_reachable(
        records: List[Region],
        waiting: Dict[str, List[int]],
        parents: List[Optional[int]],
        children: List[List[int]],
    ) -> Dict[str, int]:
        """
        Walk down from the root in pre-order, handing each code to the first
        node that carries it. That node adopts every record waiting on the
        code; later duplicates adopt nothing. Returns code -> owning slot.
        """
        owners: Dict[str, int] = {}
        stack = list(reversed(children[ROOT_INDEX]))
        while stack:
            slot = stack.pop()
            code = records[slot - 1].code
            if code in owners:
                continue
            owners[code] = slot
            adopted = waiting.pop(code, None)
            if adopted:
                children[slot].extend(adopted)
                for child in adopted:
                    parents[child] = slot
                stack.extend(reversed(adopted))
        return owners

    @staticmethod
    def _mark_reachable(children: List[List[int]]) -> List[bool]:
        reachable = [False] * len(children)
        stack = [ROOT_INDEX]
        while stack:
            slot = stack.pop()
            reachable[slot] = True
            stack.extend(children[slot])
        return reachable

    @staticmethod
    def _log_report(report: BuildReport) -> None:
        log.info(
            "Index built: records=%d attached=%d orphans=%d unreachable=%d duplicates=%d",
            report.record_count,
            report.attached_count,
            report.orphan_count,
            len(report.unreachable),
            len(report.duplicate_codes),
        )
        for orphan in report.orphans:
            log.warning(
                "Orphan record %s at position %d: parent %s not found",
                orphan.code,
                orphan.position,
                orphan.parent_code,
            )
        if report.duplicate_codes:
            log.warning("Duplicate codes in input: %s", ", ".join(report.duplicate_codes))


def build_index(records: Iterable[Region], **kwargs) -> BuildResult:
    """
    Build a RegionTree from validated records.

    Keyword arguments are forwarded to IndexBuilder
    (``retain_code_index``, ``root_name``).
    """
    return IndexBuilder(records, **kwargs).build()
