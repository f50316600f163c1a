"""Structured event log for operator commands."""

from __future__ import annotations

import json
import os
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Any

RUNTIME_ROOT = Path("runtime")
LOG_DIR = RUNTIME_ROOT / "logs"

TEXT_LOG = LOG_DIR / "rolemap.log"
JSON_LOG = LOG_DIR / "rolemap.jsonl"

LOG_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
LOG_BACKUP_COUNT = 3
_LOG_LOCK = Lock()

_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR", "CRITICAL")


def ensure_log_dir() -> None:
    LOG_DIR.mkdir(parents=True, exist_ok=True)


def _rotate(path: Path) -> None:
    try:
        if path.stat().st_size < LOG_MAX_BYTES:
            return
    except FileNotFoundError:
        return

    # Shift name.N -> name.N+1, dropping whatever falls off the end.
    for idx in range(LOG_BACKUP_COUNT, 0, -1):
        src = path.with_name(f"{path.name}.{idx}")
        if not src.exists():
            continue
        if idx == LOG_BACKUP_COUNT:
            src.unlink()
        else:
            src.rename(path.with_name(f"{path.name}.{idx + 1}"))
    path.rename(path.with_name(f"{path.name}.1"))


def log_event(topic: str, message: str, *, level: str = "INFO", **fields: Any) -> None:
    """Append one event to the text and JSONL logs under ``runtime/logs``."""

    ensure_log_dir()
    ts = datetime.now().isoformat(timespec="seconds")
    level_norm = level.upper() if level.upper() in _LEVELS else "INFO"

    event: dict[str, Any] = {
        "ts": ts,
        "level": level_norm,
        "topic": topic,
        "msg": message,
        "pid": os.getpid(),
    }
    if fields:
        event["extra"] = fields

    parts = [f"[{ts}]", f"level={level_norm}", f"topic={topic}"]
    parts.extend(f"{key}={value}" for key, value in fields.items())
    parts.append(f'msg="{message}"')

    with _LOG_LOCK:
        for path in (TEXT_LOG, JSON_LOG):
            _rotate(path)
        with TEXT_LOG.open("a", encoding="utf-8") as text_handle:
            text_handle.write(" ".join(parts) + "\n")
        with JSON_LOG.open("a", encoding="utf-8") as json_handle:
            json_handle.write(json.dumps(event, separators=(",", ":"), ensure_ascii=False) + "\n")
