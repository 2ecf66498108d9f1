"""
Logging package for ``region_index``.

Use ``get_logger(__name__)`` in modules; records propagate to the shared
base logger, which writes one log file and a console stream.
"""

from .logger import configure_logging, get_logger, set_console_level

__all__ = ["configure_logging", "get_logger", "set_console_level"]
