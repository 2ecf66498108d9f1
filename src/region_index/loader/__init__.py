# src/region_index/loader/__init__.py

"""
Public interface for the region record store.

Intended usage from other parts of the project and tests:

    from region_index.loader import Region, read_regions, parse_row
"""

from __future__ import annotations

from .records import (
    LEVEL_NAMES,
    MAX_CODE_LENGTH,
    MAX_NAME_LENGTH,
    ROOT_CODE,
    ROOT_NAME,
    ROOT_PARENT_SENTINEL,
    Region,
    level_name,
    make_root_region,
)
from .csv_reader import RegionLoad, iter_rows, parse_row, read_regions

__all__ = [
    "LEVEL_NAMES",
    "MAX_CODE_LENGTH",
    "MAX_NAME_LENGTH",
    "ROOT_CODE",
    "ROOT_NAME",
    "ROOT_PARENT_SENTINEL",
    "Region",
    "RegionLoad",
    "iter_rows",
    "level_name",
    "make_root_region",
    "parse_row",
    "read_regions",
]
