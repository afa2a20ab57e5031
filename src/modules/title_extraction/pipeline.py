"""
Batch pipeline: run the extraction cascade over saved model replies
(a directory of reply files or a JSONL of {"id", "text"} records) and write JSONL/CSV.
"""

from __future__ import annotations
import argparse
import time
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from src.config import FRAMEWORK_KEYS, TITLE_FIELDS
from src.logs import log_extraction_event, set_log_dir

from .cascade import ExtractionOutcome, run_cascade
from .io import (
    append_jsonl,
    find_reply_files,
    load_jsonl_rows,
    load_resume_set,
    read_jsonl_records,
    read_text,
    save_csv,
)

TITLE_COLUMNS: List[str] = [f"{k}_{f}" for k in FRAMEWORK_KEYS for f in TITLE_FIELDS]
ROW_COLUMNS: List[str] = ["id", "ok", "stage", *TITLE_COLUMNS, "excerpt", "timestamp"]


def iter_reply_records(inputs: Path) -> Iterator[Tuple[str, str]]:
    """Yield (record_id, raw_text) pairs from a directory, a JSONL file or a single reply file."""
    if inputs.is_dir():
        for p in find_reply_files(inputs):
            yield str(p), read_text(p)
    elif inputs.suffix.lower() == ".jsonl":
        yield from read_jsonl_records(inputs)
    else:
        yield str(inputs), read_text(inputs)


def outcome_row(record_id: str, outcome: ExtractionOutcome) -> dict:
    titles = outcome.result.flatten() if outcome.result else {c: "" for c in TITLE_COLUMNS}
    return {
        "id": record_id,
        "ok": outcome.ok,
        "stage": outcome.stage or "",
        **titles,
        # Keep diagnostics out of successful rows.
        "excerpt": "" if outcome.ok else outcome.excerpt,
        "timestamp": time.time(),
    }


def extract_titles_batch(
    *,
    inputs: Path,
    out_dir: Path,
    jsonl_name: str = "titles_extracted.jsonl",
    csv_name: str = "titles_extracted.csv",
    max_records: int = 0,
    resume: bool = True,
) -> tuple[Path, Path]:
    """
    Run the cascade on every reply under `inputs`.
    Returns (jsonl_path, csv_path); the CSV covers all rows in the JSONL, including resumed ones.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    jsonl_path = out_dir / jsonl_name
    csv_path = out_dir / csv_name

    done_set = load_resume_set(jsonl_path) if resume else set()
    if not resume and jsonl_path.exists():
        jsonl_path.unlink()

    processed = failed = 0
    for record_id, raw in iter_reply_records(inputs):
        if max_records and processed >= max_records:
            break
        if record_id in done_set:
            continue

        outcome = run_cascade(raw)
        row = outcome_row(record_id, outcome)
        append_jsonl(jsonl_path, row)
        log_extraction_event(
            record_id,
            "extracted" if outcome.ok else "unrecoverable",
            outcome.to_log_payload(),
        )
        processed += 1
        if not outcome.ok:
            failed += 1
            print(f"⚠️ [{processed}] {record_id}: could not extract titles")
        else:
            print(
                f"[{processed}] {record_id} stage={outcome.stage} "
                f"benefit='{row['benefit_title']}'"
            )

    rows = load_jsonl_rows(jsonl_path)
    save_csv(csv_path, rows, columns=ROW_COLUMNS)
    if rows:
        print(f"Saved CSV -> {csv_path} ({len(rows)} rows, {failed} new failures)")
    else:
        print(f"ℹ️ No rows extracted; wrote empty CSV at {csv_path}")
    return jsonl_path, csv_path


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Extract structured book titles from saved model replies.")
    parser.add_argument("inputs", type=Path, help="Directory of reply files, a JSONL file, or one reply file")
    parser.add_argument("--out-dir", type=Path, default=Path("outputs"))
    parser.add_argument("--max-records", type=int, default=0)
    parser.add_argument("--no-resume", action="store_true")
    parser.add_argument("--log-dir", type=Path, default=None)
    args = parser.parse_args(argv)

    if args.log_dir:
        set_log_dir(args.log_dir)

    extract_titles_batch(
        inputs=args.inputs,
        out_dir=args.out_dir,
        max_records=args.max_records,
        resume=not args.no_resume,
    )


if __name__ == "__main__":
    main()
