"""
region_index - in-memory index of administrative regions.

Flat region records (code, name, level, parent code) are indexed into a
rooted tree once; the tree then answers exact code lookups and bounded name
searches, each with the full ancestor chain of the result.

Main components:
- read_regions: CSV record store producing validated Region records
- build_index / IndexBuilder: records -> RegionTree plus a BuildReport
- QueryEngine: find_by_code, find_by_name, ancestry_chain
"""

from region_index.core.exceptions import (
    IndexBuildError,
    PipelineError,
    QueryValidationError,
    RecordFormatError,
    RegionIndexError,
    TreeIntegrityError,
)
from region_index.loader import ROOT_CODE, ROOT_PARENT_SENTINEL, Region, read_regions
from region_index.index import BuildReport, BuildResult, IndexBuilder, RegionNode, RegionTree, build_index
from region_index.query import NameSearchResult, QueryEngine, RegionMatch

__version__ = "0.1.0"
__all__ = [
    "BuildReport",
    "BuildResult",
    "IndexBuildError",
    "IndexBuilder",
    "NameSearchResult",
    "PipelineError",
    "QueryEngine",
    "QueryValidationError",
    "ROOT_CODE",
    "ROOT_PARENT_SENTINEL",
    "RecordFormatError",
    "Region",
    "RegionIndexError",
    "RegionMatch",
    "RegionNode",
    "RegionTree",
    "TreeIntegrityError",
    "build_index",
    "read_regions",
]
