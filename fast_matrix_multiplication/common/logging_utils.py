"""Logging helpers for benchmark drivers and the algorithm registry.

Every module asks for its own logger via ``get_logger(__name__)``. All of
them live under the ``fast_matrix_multiplication`` hierarchy, so
``set_verbosity`` can switch the whole project to DEBUG at once (the
registry logs every dispatched product at that level).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

PROJECT_LOGGER = "fast_matrix_multiplication"


def get_logger(name: str = PROJECT_LOGGER, level: Optional[int] = None) -> logging.Logger:
    """Return a configured logger for the project.

    Parameters
    ----------
    name:
        Logger name; defaults to the shared project logger.
    level:
        Explicit level. If omitted a newly configured logger starts at INFO
        and an existing one keeps its level.

    Returns
    -------
    logging.Logger
        Logger with a single stream handler.
    """

    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(logging.INFO)
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    if level is not None:
        logger.setLevel(level)
    return logger


def set_verbosity(verbose: bool) -> None:
    """Set every project logger created so far to DEBUG (or back to INFO)."""
    level = logging.DEBUG if verbose else logging.INFO
    for name in list(logging.root.manager.loggerDict):
        if name == PROJECT_LOGGER or name.startswith(PROJECT_LOGGER + "."):
            logging.getLogger(name).setLevel(level)


def append_jsonl(path: Path, record: Dict[str, Any]) -> None:
    """Append one run record as a single JSON line.

    The parent directory is created on demand, so sweeps can point this at a
    fresh results folder.
    """

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as f:
        json.dump(record, f)
        f.write("\n")
