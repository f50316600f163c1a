"""Central logging configuration for rolemap."""

from __future__ import annotations

import logging
from typing import Any

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str | int) -> int:
    if isinstance(name, int):
        return name
    numeric = logging.getLevelName(name.upper())
    return numeric if isinstance(numeric, int) else logging.INFO


def setup_logging(level: str | int = logging.INFO, *, fmt: str = DEFAULT_FORMAT, **kwargs: Any) -> None:
    """Ensure the root logger has at least one handler configured."""
    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(level=_level_from_name(level), format=fmt, **kwargs)
