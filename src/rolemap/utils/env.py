"""Environment helpers for group list settings."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

log = logging.getLogger("rolemap.env")


def _clean(entries: Iterable[Any]) -> list[str]:
    cleaned: list[str] = []
    for entry in entries:
        if not isinstance(entry, str):
            continue
        name = entry.strip()
        if name and name not in cleaned:
            cleaned.append(name)
    return cleaned


def parse_group_list(raw: Any, key: str = "group list") -> list[str]:
    """Decode a list of directory group names.

    Accepts a JSON array, a comma-separated string or an already parsed
    sequence. Anything unparseable yields an empty list with a warning.
    """
    if raw is None:
        return []
    if isinstance(raw, (list, tuple, set, frozenset)):
        return _clean(raw)
    if not isinstance(raw, str):
        log.warning("%s must be a list or string; got %s", key, type(raw).__name__)
        return []

    text = raw.strip()
    if not text:
        return []
    if not text.startswith("["):
        return _clean(text.split(","))

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        log.warning("Failed to parse %s; falling back to empty group list", key)
        return []

    if not isinstance(parsed, list):
        log.warning("%s must be a JSON array; got %s", key, type(parsed).__name__)
        return []
    return _clean(parsed)
