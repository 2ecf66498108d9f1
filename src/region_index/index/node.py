# src/region_index/index/node.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from region_index.loader.records import Region


@dataclass(frozen=True)
class RegionNode:
    """
    One entry of the region tree arena.

    Attributes:
        index: Stable arena position (0 is the synthetic root, input record
            ``i`` lives at ``i + 1``).
        record: The wrapped Region.
        parent: Arena index of the parent, or None for the root and orphans.
        children: Arena indices of the children, in attachment order.
    """

    index: int
    record: Region
    parent: Optional[int] = None
    children: Tuple[int, ...] = ()

    # ---------- Record passthroughs ----------

    @property
    def code(self) -> str:
        return self.record.code

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def level(self) -> int:
        return self.record.level

    @property
    def parent_code(self) -> str:
        return self.record.parent_code

    @property
    def type(self) -> int:
        return self.record.type

    @property
    def is_root(self) -> bool:
        return self.index == 0

    def __repr__(self) -> str:
        return f"<RegionNode #{self.index} {self.code} {self.name!r} L{self.level}>"
