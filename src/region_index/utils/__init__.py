# src/region_index/utils/__init__.py

from .pathing import (
    data_file_path,
    mock_file_path,
    project_root,
    resolve_project_path,
)

__all__ = [
    "data_file_path",
    "mock_file_path",
    "project_root",
    "resolve_project_path",
]
