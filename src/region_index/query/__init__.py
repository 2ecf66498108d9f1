"""
Query layer: validation helpers and the QueryEngine.
"""

from __future__ import annotations

from .engine import DEFAULT_NAME_LIMIT, NameSearchResult, QueryEngine, RegionMatch
from .validation import validate_code, validate_limit, validate_name

__all__ = [
    "DEFAULT_NAME_LIMIT",
    "NameSearchResult",
    "QueryEngine",
    "RegionMatch",
    "validate_code",
    "validate_limit",
    "validate_name",
]
