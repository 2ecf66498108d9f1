"""
CLI command modules for region_index.

Each command module defines a single Typer-compatible command function.
"""

from region_index.cli.commands.code import code_command
from region_index.cli.commands.name import name_command
from region_index.cli.commands.shell import shell_command
from region_index.cli.commands.stats import stats_command

__all__ = [
    "code_command",
    "name_command",
    "shell_command",
    "stats_command",
]
