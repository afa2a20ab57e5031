"""
Text repairs applied before re-trying the strict parser.
"""

from __future__ import annotations
import re
from typing import Dict, Optional

# 0x00-0x1F and 0x7F: whitespace-class controls become one space, the rest are dropped.
_CONTROL_TRANSLATION: Dict[int, Optional[str]] = {c: None for c in range(0x20)}
_CONTROL_TRANSLATION[0x7F] = None
_CONTROL_TRANSLATION[ord("\n")] = " "
_CONTROL_TRANSLATION[ord("\r")] = " "
_CONTROL_TRANSLATION[ord("\t")] = " "

# "key": "value" for the record's string fields. The value ends at the first quote
# that is followed by a delimiter (',', '}', ']') or the end of the text.
_STRING_FIELD_RE = re.compile(
    r'("(?:title|subtitle|reasoning)"\s*:\s*")(.*?)"(?=\s*(?:[,}\]]|$))',
    re.DOTALL,
)
_UNESCAPED_QUOTE_RE = re.compile(r'(?<!\\)"')


def sanitize_control_chars(text: str) -> str:
    return text.translate(_CONTROL_TRANSLATION)


def _escape_inner_quotes(m: re.Match) -> str:
    value = _UNESCAPED_QUOTE_RE.sub(r'\\"', m.group(2))
    return f'{m.group(1)}{value}"'


def repair_unescaped_quotes(text: str) -> str:
    """
    Escape quotes sitting inside title/subtitle/reasoning values.

    Best effort only: a value containing a quote immediately followed by a
    comma or closing brace is cut at that point, so several stray quotes in
    one value may still be misrepaired.
    """
    return _STRING_FIELD_RE.sub(_escape_inner_quotes, text)
