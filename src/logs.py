"""
JSONL event log for extraction runs. One line per event, appended.
"""

from __future__ import annotations
import json
import time
from pathlib import Path
from typing import Any, Dict, Optional

from src.config import LOG_DIR

EVENTS_FILENAME = "title_extraction_events.jsonl"

_log_dir = Path(LOG_DIR)


def set_log_dir(path) -> None:
    global _log_dir
    _log_dir = Path(path)


def get_log_path() -> Path:
    return _log_dir / EVENTS_FILENAME


def log_extraction_event(
    record_id: str,
    event_type: str,
    payload: Optional[Dict[str, Any]] = None,
) -> Path:
    """Append one event ({"ts", "record_id", "event", **payload}) and return the log path."""
    path = get_log_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    row = {"ts": time.time(), "record_id": record_id, "event": event_type, **(payload or {})}
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(row, ensure_ascii=False) + "\n")
    return path
