"""
Logging setup for the region index.

Every module asks for ``get_logger(__name__)`` at import time. The first such
call installs two handlers on the ``region_index`` base logger; module loggers
carry no handlers of their own and simply propagate to it:

* one log file, ``logs/region_index.log`` by default (rotated when
  ``logging.rotate`` is set in ``config/region_index.yml``),
* a console handler on stderr, quiet below WARNING unless ``debug: true``.

The CLI raises the console to INFO for ``--verbose`` via ``set_console_level``.
"""

from __future__ import annotations

import logging
from logging import Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from region_index.config import RIConfig, get_config

PROJECT_ROOT = Path(__file__).resolve().parents[3]
BASE_LOGGER_NAME = "region_index"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ROTATE_MAX_BYTES = 5 * 1024 * 1024
ROTATE_BACKUPS = 5

# Marks handlers installed here so reconfiguring replaces them instead of stacking.
_HANDLER_ROLE = "_region_index_role"


def _log_dir(cfg: RIConfig) -> Path:
    raw = cfg.logging.get("dir") or cfg.paths.get("logs_dir") or "logs"
    path = Path(raw)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


def _file_handler(path: Path, rotate: bool) -> logging.Handler:
    if rotate:
        return RotatingFileHandler(
            path,
            maxBytes=ROTATE_MAX_BYTES,
            backupCount=ROTATE_BACKUPS,
            encoding="utf-8",
        )
    return logging.FileHandler(path, encoding="utf-8")


def _installed(base: Logger, role: str) -> Optional[logging.Handler]:
    for handler in base.handlers:
        if getattr(handler, _HANDLER_ROLE, None) == role:
            return handler
    return None


def configure_logging(config: Optional[RIConfig] = None, *, log_dir: Optional[Path] = None) -> Logger:
    """
    (Re)install the file and console handlers on the base logger.

    Handlers from an earlier call are closed and replaced, so the base logger
    always holds exactly one of each. ``log_dir`` overrides the configured
    directory. Returns the base logger.
    """
    cfg = config or get_config()
    debug = bool(cfg.debug)
    configured = getattr(logging, str(cfg.logging.get("level", "INFO")).upper(), logging.INFO)
    level = logging.DEBUG if debug else configured

    base = logging.getLogger(BASE_LOGGER_NAME)
    for role in ("file", "console"):
        old = _installed(base, role)
        if old is not None:
            base.removeHandler(old)
            old.close()

    directory = Path(log_dir) if log_dir is not None else _log_dir(cfg)
    directory.mkdir(parents=True, exist_ok=True)
    file_handler = _file_handler(
        directory / cfg.logging.get("file", "region_index.log"),
        bool(cfg.logging.get("rotate", False)),
    )
    file_handler.setLevel(level)

    console = logging.StreamHandler()
    console.setLevel(logging.DEBUG if debug else logging.WARNING)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for role, handler in (("file", file_handler), ("console", console)):
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_ROLE, role)
        base.addHandler(handler)

    base.setLevel(level)
    base.propagate = False
    return base


def set_console_level(level: int) -> None:
    """Change what reaches stderr without touching the log file."""
    base = get_logger()
    console = _installed(base, "console")
    if console is not None:
        console.setLevel(level)
        if level < base.level:
            base.setLevel(level)


def get_logger(name: Optional[str] = None) -> Logger:
    """
    Return a logger inside the ``region_index`` namespace.

    Names outside the namespace are nested under it, so their records still
    reach the base handlers. The handlers are installed on first use.
    """
    base = logging.getLogger(BASE_LOGGER_NAME)
    if _installed(base, "file") is None:
        configure_logging()

    if not name or name == BASE_LOGGER_NAME:
        return base
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
