# src/region_index/index/tree.py

from __future__ import annotations

from typing import Dict, Iterator, Optional, Sequence, Tuple

from region_index.core.exceptions import TreeIntegrityError

from .code_index import CodeIndex
from .node import RegionNode

ROOT_INDEX = 0


class RegionTree:
    """
    Read model produced by the index builder.

    The tree is an arena of RegionNode entries addressed by integer index.
    Index 0 is always the synthetic root. Orphaned records (and anything
    attached beneath them) stay in the arena but are not reachable from the
    root, so they are invisible to traversal and to the code index.

    Nothing here mutates the arena once it has been constructed; concurrent
    readers need no locking.
    """

    __slots__ = ("_nodes", "_code_index", "_reachable_count")

    def __init__(
        self,
        nodes: Sequence[RegionNode],
        *,
        code_index: Optional[CodeIndex] = None,
        reachable_count: Optional[int] = None,
    ):
        if not nodes or nodes[ROOT_INDEX].parent is not None:
            raise ValueError("RegionTree requires a parentless root at index 0")
        self._nodes: Tuple[RegionNode, ...] = tuple(nodes)
        self._code_index = code_index
        if reachable_count is None:
            reachable_count = sum(1 for _ in self.iter_preorder())
        self._reachable_count = reachable_count

    # ------------------------------------------------------------------ #
    # Core helpers
    # ------------------------------------------------------------------ #

    def __len__(self) -> int:
        """Arena size, including the root and unreachable nodes."""
        return len(self._nodes)

    @property
    def root(self) -> RegionNode:
        return self._nodes[ROOT_INDEX]

    @property
    def reachable_count(self) -> int:
        """Number of nodes reachable from the root, root included."""
        return self._reachable_count

    @property
    def code_index(self) -> Optional[CodeIndex]:
        """Code index retained from the build, or None."""
        return self._code_index

    def node(self, index: int) -> RegionNode:
        if not 0 <= index < len(self._nodes):
            raise IndexError(f"No node at arena index {index}")
        return self._nodes[index]

    def parent_of(self, node: RegionNode) -> Optional[RegionNode]:
        if node.parent is None:
            return None
        return self.node(node.parent)

    def children_of(self, node: RegionNode) -> Tuple[RegionNode, ...]:
        return tuple(self._nodes[i] for i in node.children)

    def depth_of(self, node: RegionNode) -> int:
        """
        Number of parent links between ``node`` and the top of its chain.

        The root has depth 0 and a provincial region depth 1. For an
        unreachable node the count stops at the first parentless ancestor.
        Raises TreeIntegrityError when the walk exceeds the arena size (a
        parent cycle) or meets a parent index outside the arena.
        """
        nodes = self._nodes
        depth = 0
        current = node
        while current.parent is not None:
            if depth >= len(nodes) or not 0 <= current.parent < len(nodes):
                raise TreeIntegrityError(
                    f"Parent chain of {node.code} is cyclic or points outside the tree"
                )
            current = nodes[current.parent]
            depth += 1
        return depth

    # ------------------------------------------------------------------ #
    # Traversal
    # ------------------------------------------------------------------ #

    def iter_preorder(self, start: Optional[RegionNode] = None) -> Iterator[RegionNode]:
        """
        Yield ``start`` (default: the root) and its descendants in pre-order,
        children in stored order. Uses an explicit stack, so depth is not
        limited by the interpreter's recursion limit.
        """
        first = self.root if start is None else start
        stack = [first.index]
        nodes = self._nodes
        while stack:
            node = nodes[stack.pop()]
            yield node
            stack.extend(reversed(node.children))

    def iter_regions(self) -> Iterator[RegionNode]:
        """Pre-order traversal without the synthetic root."""
        it = self.iter_preorder()
        next(it)
        yield from it

    # ------------------------------------------------------------------ #
    # Code index
    # ------------------------------------------------------------------ #

    def build_code_index(self) -> CodeIndex:
        """
        Build a fresh code index over the reachable nodes (root excluded).
        A duplicated code maps to the first node carrying it in pre-order.
        """
        owners: Dict[str, int] = {}
        for n in self.iter_regions():
            owners.setdefault(n.code, n.index)
        return CodeIndex.from_entries(owners.items())

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return (
            f"<RegionTree nodes={len(self._nodes)} reachable={self._reachable_count}"
            f" indexed={self._code_index is not None}>"
        )
