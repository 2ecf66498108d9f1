"""
Region index: builder, arena tree and code index.
"""

from __future__ import annotations

from .code_index import CodeIndex
from .node import RegionNode
from .tree import ROOT_INDEX, RegionTree
from .builder import BuildReport, BuildResult, IndexBuilder, OrphanRecord, build_index

__all__ = [
    "BuildReport",
    "BuildResult",
    "CodeIndex",
    "IndexBuilder",
    "OrphanRecord",
    "ROOT_INDEX",
    "RegionNode",
    "RegionTree",
    "build_index",
]
