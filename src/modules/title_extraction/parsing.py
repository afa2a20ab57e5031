"""
Parsing utilities: fence/prose stripping and strict JSON parsing of model replies.
"""

from __future__ import annotations
import json
import re
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from src.models import ResultSet

# A fence line: ``` optionally followed by a language tag (```json, ```JSON, ```js ...)
_LEADING_FENCE_RE = re.compile(r"^```[A-Za-z0-9_+-]*[ \t]*(?:\r?\n)?")
_TRAILING_FENCE_RE = re.compile(r"(?:\r?\n)?[ \t]*```$")


def strip_code_fences(text: str) -> str:
    """
    Remove a single leading and a single trailing fence marker, then trim.
    Fences that are not at the very start/end are left alone.
    """
    s = text.strip()
    s = _LEADING_FENCE_RE.sub("", s, count=1)
    s = _TRAILING_FENCE_RE.sub("", s.rstrip(), count=1)
    return s.strip()


def narrow_to_object(text: str) -> str:
    """
    Narrow to the span between the first '{' and the last '}'.
    Greedy on purpose: braces after the intended closing brace are not handled.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end <= start:
        return text
    return text[start : end + 1]


def normalize_model_text(raw: str) -> str:
    return narrow_to_object(strip_code_fences(raw))


def result_set_from_mapping(data: Mapping[str, Any]) -> Optional[ResultSet]:
    """Validate a parsed mapping; a missing or malformed framework means no result."""
    try:
        return ResultSet.model_validate(data)
    except ValidationError:
        return None


def strict_parse(candidate: str) -> Optional[ResultSet]:
    """
    Standard JSON parse of a candidate string. Only a top-level object counts;
    any syntax error or shape mismatch returns None so the next strategy can run.
    """
    try:
        data = json.loads(candidate)
    except (ValueError, RecursionError):
        # JSONDecodeError, oversized integer literals, pathological nesting
        return None
    if not isinstance(data, dict):
        return None
    return result_set_from_mapping(data)
