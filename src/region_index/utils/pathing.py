# src/region_index/utils/pathing.py

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

# <project_root>/src/region_index/utils/pathing.py -> parents[3] is the project root.
_PROJECT_ROOT = Path(__file__).resolve().parents[3]


def project_root() -> Path:
    """Directory holding src/, tests/, config/ and mock_files/."""
    return _PROJECT_ROOT


def resolve_project_path(relative: Union[str, Path]) -> Path:
    """
    Resolve a path against the project root. Absolute paths pass through.

    Examples:
        resolve_project_path("mock_files/regions_sample.csv")
    """
    path = Path(relative)
    if path.is_absolute():
        return path
    return project_root() / path


def mock_file_path(filename: Union[str, Path]) -> Path:
    """Absolute path of a file under the top-level mock_files/ directory."""
    return resolve_project_path(Path("mock_files") / filename)


def data_file_path(config) -> Optional[Path]:
    """Region CSV configured under ``paths.data_file``, or None."""
    configured = (getattr(config, "paths", {}) or {}).get("data_file")
    if not configured:
        return None
    return resolve_project_path(configured)
