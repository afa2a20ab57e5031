from __future__ import annotations
from typing import Any, Dict, Iterator, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.config import DEFAULT_REASONING, DEFAULT_SUBTITLE, FRAMEWORK_ATTRS, FRAMEWORK_KEYS


def _scalar_to_str(v: Any) -> Any:
    """Numbers and booleans occasionally come back unquoted; keep them as text."""
    if isinstance(v, (bool, int, float)):
        return str(v)
    return v


class TitleRecord(BaseModel):
    """One title suggestion for a single psychological framework."""

    # No str_strip_whitespace: strict parses must round-trip exactly.
    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str = Field(min_length=1)
    subtitle: str = Field(default=DEFAULT_SUBTITLE)
    reasoning: str = Field(default=DEFAULT_REASONING)

    @field_validator("title", mode="before")
    @classmethod
    def _title_not_blank(cls, v):
        v = _scalar_to_str(v)
        if isinstance(v, str) and not v.strip():
            raise ValueError("title is blank")
        return v

    @field_validator("subtitle", mode="before")
    @classmethod
    def _subtitle_default(cls, v):
        if v is None:
            return DEFAULT_SUBTITLE
        return _scalar_to_str(v)

    @field_validator("reasoning", mode="before")
    @classmethod
    def _reasoning_default(cls, v):
        if v is None:
            return DEFAULT_REASONING
        return _scalar_to_str(v)


class ResultSet(BaseModel):
    """
    The three required TitleRecords. All-or-nothing: a payload missing any
    framework fails validation instead of producing a partial result.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    benefit: TitleRecord
    curiosity: TitleRecord
    double_entendre: TitleRecord = Field(alias="doubleEntendre")

    def records(self) -> Iterator[Tuple[str, TitleRecord]]:
        """Yield (wire_key, record) pairs in framework order."""
        for key in FRAMEWORK_KEYS:
            yield key, getattr(self, FRAMEWORK_ATTRS[key])

    def to_payload(self) -> Dict[str, Dict[str, str]]:
        return self.model_dump(by_alias=True)

    def flatten(self) -> Dict[str, str]:
        """Flat `<framework>_<field>` mapping, used for tabular output."""
        row: Dict[str, str] = {}
        for key, rec in self.records():
            for field, value in rec.model_dump().items():
                row[f"{key}_{field}"] = value
        return row
