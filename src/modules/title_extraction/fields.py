"""
Structure-tolerant recovery: per-framework regex extraction and positional harvest.
Both operate on sanitized text and ignore JSON syntax outside the matched spans.
"""

from __future__ import annotations
import json
import re
from typing import Dict, List, Optional

from src.config import DEFAULT_REASONING, DEFAULT_SUBTITLE, FRAMEWORK_KEYS
from src.models import ResultSet

from .parsing import result_set_from_mapping

# Double-quoted JSON string body, escapes allowed.
_STRING_VALUE = r'"((?:[^"\\]|\\.)*)"'


def _key_value_re(key: str) -> re.Pattern:
    # Lookbehind keeps "title" from matching inside "subtitle".
    return re.compile(rf'(?<![\w"])"?{key}"?\s*:\s*{_STRING_VALUE}', re.DOTALL)


def _block_re(framework: str) -> re.Pattern:
    # Block runs to the first closing brace outside a quoted string, or to the end when it is missing.
    return re.compile(
        rf'(?<![\w"])"?{framework}"?\s*:\s*\{{((?:"(?:[^"\\]|\\.)*"|[^}}])*)',
        re.IGNORECASE,
    )


_VALUE_RES: Dict[str, re.Pattern] = {k: _key_value_re(k) for k in ("title", "subtitle", "reasoning")}
_BLOCK_RES: Dict[str, re.Pattern] = {k: _block_re(k) for k in FRAMEWORK_KEYS}


def decode_json_string(body: str) -> str:
    """Decode JSON escapes in a harvested string body; keep it raw if they are invalid."""
    try:
        return json.loads(f'"{body}"')
    except (ValueError, RecursionError):
        return body


def _first_value(block: str, key: str) -> Optional[str]:
    m = _VALUE_RES[key].search(block)
    return decode_json_string(m.group(1)) if m else None


def _all_values(text: str, key: str) -> List[str]:
    return [decode_json_string(body) for body in _VALUE_RES[key].findall(text)]


def extract_by_field_blocks(text: str) -> Optional[ResultSet]:
    """
    Locate each framework's block independently and read its fields.
    Any framework without a title fails the whole stage.
    """
    data: Dict[str, Dict[str, str]] = {}
    for framework in FRAMEWORK_KEYS:
        m = _BLOCK_RES[framework].search(text)
        if not m:
            return None
        block = m.group(1)
        title = _first_value(block, "title")
        if not title or not title.strip():
            return None
        subtitle = _first_value(block, "subtitle")
        reasoning = _first_value(block, "reasoning")
        data[framework] = {
            "title": title,
            "subtitle": DEFAULT_SUBTITLE if subtitle is None else subtitle,
            "reasoning": DEFAULT_REASONING if reasoning is None else reasoning,
        }
    return result_set_from_mapping(data)


def harvest_positional(text: str) -> Optional[ResultSet]:
    """
    Last resort: pair the first three titles with same-ordinal subtitles in
    document order. Which framework a title belonged to is lost.
    """
    titles = _all_values(text, "title")
    if len(titles) < len(FRAMEWORK_KEYS):
        return None
    subtitles = _all_values(text, "subtitle")
    data: Dict[str, Dict[str, str]] = {}
    for i, framework in enumerate(FRAMEWORK_KEYS):
        data[framework] = {
            "title": titles[i],
            "subtitle": subtitles[i] if i < len(subtitles) else DEFAULT_SUBTITLE,
            "reasoning": DEFAULT_REASONING,
        }
    return result_set_from_mapping(data)
