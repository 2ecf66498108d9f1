"""
CLI package for region_index.

Provides the Typer application entrypoint and shared CLI utilities.
"""

from region_index.cli.app import app, main

__all__ = [
    "app",
    "main",
]
