"""
utils.py — Shared helpers: logging setup and editor selection.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path


def setup_logging(level: int | str = logging.WARNING, log_file: str = "") -> logging.Logger:
    """
    Configure the 'gitprofile' logger with a stderr console handler and,
    when log_file is set, a file handler.  Calling it again only updates the
    level.
    """
    logger = logging.getLogger("gitprofile")
    logger.setLevel(level)
    if logger.handlers:
        return logger  # already configured

    fmt = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Console
    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    # File
    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    return logger


def verbosity_to_level(verbose: int, default: str = "WARNING") -> int | str:
    """Map repeated -v flags onto a logging level; 0 keeps the configured default."""
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return default


def pick_editor(explicit: str | None, fallback: str = "vim") -> str:
    """--editor flag, then $EDITOR, then the configured fallback."""
    if explicit and explicit.strip():
        return explicit
    return os.environ.get("EDITOR", "").strip() or fallback
