"""
Cascade controller: runs the recovery strategies in order and returns the first
complete ResultSet, together with a structured trail of what was tried.

Every strategy is a pure function RawText -> ResultSet | None that derives its own
candidate from the raw reply. Nothing here logs or keeps state between calls.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from src.config import EXCERPT_MAX_CHARS
from src.models import ResultSet

from .fields import extract_by_field_blocks, harvest_positional
from .parsing import normalize_model_text, strict_parse
from .repair import repair_unescaped_quotes, sanitize_control_chars

Strategy = Callable[[str], Optional[ResultSet]]

UNRECOVERABLE_MESSAGE = "unrecoverable: could not extract structured titles"


# ------------------------------------------------------------------------------
# Strategies
# ------------------------------------------------------------------------------

def parse_strict(raw: str) -> Optional[ResultSet]:
    return strict_parse(normalize_model_text(raw))


def parse_sanitized(raw: str) -> Optional[ResultSet]:
    return strict_parse(sanitize_control_chars(normalize_model_text(raw)))


def parse_quote_repaired(raw: str) -> Optional[ResultSet]:
    candidate = sanitize_control_chars(normalize_model_text(raw))
    return strict_parse(repair_unescaped_quotes(candidate))


def parse_field_blocks(raw: str) -> Optional[ResultSet]:
    return extract_by_field_blocks(sanitize_control_chars(raw))


def parse_positional(raw: str) -> Optional[ResultSet]:
    return harvest_positional(sanitize_control_chars(raw))


STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("strict", parse_strict),
    ("sanitized", parse_sanitized),
    ("quote_repair", parse_quote_repaired),
    ("field_blocks", parse_field_blocks),
    ("positional", parse_positional),
)


# ------------------------------------------------------------------------------
# Diagnostics
# ------------------------------------------------------------------------------

@dataclass(frozen=True)
class StageAttempt:
    stage: str
    succeeded: bool


@dataclass(frozen=True)
class ExtractionOutcome:
    """Result of one cascade run. `result` is None only when every stage failed."""

    result: Optional[ResultSet]
    stage: Optional[str]
    attempts: Tuple[StageAttempt, ...] = field(default_factory=tuple)
    excerpt: str = ""

    @property
    def ok(self) -> bool:
        return self.result is not None

    def to_log_payload(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "stage": self.stage,
            "attempts": [{"stage": a.stage, "succeeded": a.succeeded} for a in self.attempts],
            "excerpt": self.excerpt,
        }


class TitleExtractionError(Exception):
    """Base class for title extraction failures."""


class UnrecoverableExtractionError(TitleExtractionError):
    """Every strategy was exhausted without a complete ResultSet."""

    def __init__(self, excerpt: str, attempts: Tuple[StageAttempt, ...] = ()):
        super().__init__(UNRECOVERABLE_MESSAGE)
        self.excerpt = excerpt
        self.attempts = attempts


def make_excerpt(raw: str, limit: int = EXCERPT_MAX_CHARS) -> str:
    """Bounded, control-character-free prefix of the untrusted reply for diagnostics."""
    clean = sanitize_control_chars(raw)
    if len(clean) <= limit:
        return clean
    return clean[:limit] + "…"


# ------------------------------------------------------------------------------
# Controller
# ------------------------------------------------------------------------------

def first_success(
    strategies: Iterable[Tuple[str, Strategy]],
    text: str,
) -> Tuple[Optional[ResultSet], Optional[str], Tuple[StageAttempt, ...]]:
    """Try strategies in order; stop at the first one returning a ResultSet."""
    attempts = []
    for name, strategy in strategies:
        result = strategy(text)
        attempts.append(StageAttempt(stage=name, succeeded=result is not None))
        if result is not None:
            return result, name, tuple(attempts)
    return None, None, tuple(attempts)


def run_cascade(
    raw: str,
    *,
    strategies: Iterable[Tuple[str, Strategy]] = STRATEGIES,
    excerpt_chars: int = EXCERPT_MAX_CHARS,
) -> ExtractionOutcome:
    if not isinstance(raw, str):
        raise TypeError(f"model output must be str, got {type(raw).__name__}")
    result, stage, attempts = first_success(strategies, raw)
    return ExtractionOutcome(
        result=result,
        stage=stage,
        attempts=attempts,
        excerpt=make_excerpt(raw, excerpt_chars),
    )


def extract_titles(raw: str) -> Optional[ResultSet]:
    """Pure entry point: RawText -> ResultSet | None."""
    return run_cascade(raw).result


def extract_titles_or_raise(raw: str) -> ResultSet:
    outcome = run_cascade(raw)
    if outcome.result is None:
        raise UnrecoverableExtractionError(outcome.excerpt, outcome.attempts)
    return outcome.result


def build_response(raw: str) -> Tuple[int, Dict[str, Any]]:
    """
    Map a reply to the (status, body) pair the request handler sends back.
    Success: 200 {"success": true, "titles": {...}}; failure: 500 {"error": ...}.
    """
    outcome = run_cascade(raw)
    if outcome.result is None:
        return 500, {"error": "Invalid response structure"}
    return 200, {"success": True, "titles": outcome.result.to_payload()}
