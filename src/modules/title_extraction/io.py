"""
I/O helpers: discovering saved model replies, reading/writing JSONL and CSV, resume sets.
"""

from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, Iterator, List, Tuple

import pandas as pd

REPLY_SUFFIXES = (".txt", ".md", ".json")


# -------- File discovery (skips notebook checkpoints) --------

def find_reply_files(replies_dir: Path) -> list[Path]:
    """
    Return all reply files under replies_dir, excluding Jupyter checkpoint artifacts:
      - any path containing ".ipynb_checkpoints"
      - any filename containing "-checkpoint"
    """
    results: list[Path] = []
    for p in replies_dir.rglob("*"):
        if not p.is_file() or p.suffix.lower() not in REPLY_SUFFIXES:
            continue
        if ".ipynb_checkpoints" in set(p.parts):
            continue
        if "-checkpoint" in p.stem.lower():
            continue
        results.append(p)
    return sorted(results)


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="ignore")


# -------- JSON/JSONL & CSV --------

def read_jsonl_records(path: Path) -> Iterator[Tuple[str, str]]:
    """
    Yield (id, text) from a JSONL file of {"id": ..., "text": ...} objects.
    Missing ids fall back to the 1-based line number; unreadable lines are skipped.
    """
    with path.open("r", encoding="utf-8") as f:
        for n, ln in enumerate(f, 1):
            if not ln.strip():
                continue
            try:
                obj = json.loads(ln)
            except json.JSONDecodeError:
                print(f"⚠️ Skipping unreadable line {n} in {path}")
                continue
            if not isinstance(obj, dict) or not isinstance(obj.get("text"), str):
                print(f"⚠️ Skipping line {n} in {path}: no 'text' field")
                continue
            yield str(obj.get("id") or n), obj["text"]


def load_jsonl_rows(path: Path) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    if not path.exists():
        return rows
    with path.open("r", encoding="utf-8") as f:
        for ln in f:
            try:
                obj = json.loads(ln)
            except json.JSONDecodeError:
                continue
            if isinstance(obj, dict):
                rows.append(obj)
    return rows


def append_jsonl(path: Path, row: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(row, ensure_ascii=False) + "\n")


def save_csv(path: Path, rows: list[dict], columns: list[str] | None = None) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(rows, columns=columns).to_csv(path, index=False)


# -------- Resume set --------

def load_resume_set(jsonl_path: Path) -> set[str]:
    """Ids already written to a previous run's JSONL output."""
    return {str(row["id"]) for row in load_jsonl_rows(jsonl_path) if row.get("id") is not None}
