# src/region_index/query/engine.py

"""
Read-only queries over a built RegionTree.

Three operations are exposed:

* ``find_by_code``  - exact code lookup (binary search when the tree kept its
  code index, full traversal otherwise; both resolve duplicates identically).
* ``find_by_name``  - case-sensitive substring search in pre-order, capped.
* ``ancestry_chain`` - parent links followed up to the synthetic root.

Ancestry chains are always ordered nearest ancestor first:
``[parent, grandparent, ..., top-level region]``. Reverse the list for a
root-first path.

The engine holds no mutable state, so one instance can serve any number of
threads at once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from region_index.core.exceptions import TreeIntegrityError
from region_index.index.node import RegionNode
from region_index.index.tree import RegionTree
from region_index.logging import get_logger

from .validation import validate_code, validate_limit, validate_name

log = get_logger(__name__)

DEFAULT_NAME_LIMIT = 5


@dataclass(frozen=True)
class NameSearchResult:
    """
    Matches of a name search, in pre-order.

    ``truncated`` is True when at least one further match exists beyond the
    returned ones.
    """

    matches: Tuple[RegionNode, ...] = ()
    truncated: bool = False

    @property
    def count(self) -> int:
        return len(self.matches)

    def __iter__(self):
        return iter(self.matches)

    def __len__(self) -> int:
        return len(self.matches)


@dataclass(frozen=True)
class RegionMatch:
    """A node together with its ancestry chain (nearest ancestor first)."""

    node: RegionNode
    ancestors: Tuple[RegionNode, ...] = field(default_factory=tuple)


class QueryEngine:
    """
    Query facade over a RegionTree.

    Args:
        tree: A finished tree from the index builder.
        code_length: Canonical code length enforced by ``find_by_code``
            (None accepts any digit string).
        use_code_index: Use the tree's retained code index when present.
    """

    def __init__(
        self,
        tree: RegionTree,
        *,
        code_length: Optional[int] = None,
        use_code_index: bool = True,
    ):
        self.tree = tree
        self.code_length = code_length
        self.use_code_index = use_code_index

    # ---------------------------------------------------------
    # Code lookup
    # ---------------------------------------------------------
    def find_by_code(self, code: str) -> Optional[RegionNode]:
        """
        Return the node whose code equals ``code``, or None.

        Raises:
            QueryValidationError: if ``code`` is malformed.
        """
        value = validate_code(code, self.code_length)

        index = self.tree.code_index if self.use_code_index else None
        if index is not None:
            position = index.lookup(value)
            return None if position is None else self.tree.node(position)

        return self._scan_for_code(value)

    def _scan_for_code(self, code: str) -> Optional[RegionNode]:
        # First hit in pre-order, the node that owns the code in the index.
        for node in self.tree.iter_regions():
            if node.code == code:
                return node
        return None

    # ---------------------------------------------------------
    # Name search
    # ---------------------------------------------------------
    def find_by_name(
        self,
        name: str,
        limit: int = DEFAULT_NAME_LIMIT,
        *,
        include_root: bool = False,
    ) -> NameSearchResult:
        """
        Return up to ``limit`` nodes whose name contains ``name``.

        Matching is a literal, case-sensitive substring test. Nodes are
        visited in pre-order and the first matches encountered are returned;
        the search stops at the first match beyond the cap, which marks the
        result as truncated.

        Raises:
            QueryValidationError: on empty text or a negative limit.
        """
        needle = validate_name(name)
        cap = validate_limit(limit)

        nodes = self.tree.iter_preorder() if include_root else self.tree.iter_regions()
        matches: List[RegionNode] = []
        truncated = False

        for node in nodes:
            if needle not in node.name:
                continue
            if len(matches) >= cap:
                truncated = True
                break
            matches.append(node)

        log.debug(
            "find_by_name(%r, limit=%d) -> %d matches (truncated=%s)",
            needle,
            cap,
            len(matches),
            truncated,
        )
        return NameSearchResult(matches=tuple(matches), truncated=truncated)

    # ---------------------------------------------------------
    # Ancestry
    # ---------------------------------------------------------
    def ancestry_chain(
        self,
        node: RegionNode,
        *,
        include_root: bool = False,
    ) -> List[RegionNode]:
        """
        Return the ancestors of ``node``, nearest first.

        The synthetic root is left out unless ``include_root`` is set. The
        walk is bounded by the arena size.

        Raises:
            TreeIntegrityError: on a parent cycle or a dangling parent index.
        """
        tree = self.tree
        bound = len(tree)
        chain: List[RegionNode] = []
        current = node
        steps = 0

        while current.parent is not None:
            steps += 1
            if steps > bound:
                raise TreeIntegrityError(
                    f"Ancestry walk from {node.code} exceeded {bound} steps; parent cycle detected"
                )
            try:
                current = tree.node(current.parent)
            except IndexError:
                raise TreeIntegrityError(
                    f"Node {current.code} refers to missing parent index {current.parent}"
                ) from None
            if current.is_root and not include_root:
                break
            chain.append(current)

        return chain

    def describe(self, node: RegionNode) -> RegionMatch:
        """Bundle ``node`` with its ancestry chain for presentation."""
        return RegionMatch(node=node, ancestors=tuple(self.ancestry_chain(node)))
