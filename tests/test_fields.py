# tests/test_fields.py
"""
Tests for per-framework regex extraction and positional harvest.
"""

from src.modules.title_extraction.fields import (
    decode_json_string,
    extract_by_field_blocks,
    harvest_positional,
)

BROKEN_BENEFIT = (
    '{"benefit":{"title":"Atomic","subtitle":"Tiny","reasoning":"x",'
    '"curiosity":{"title":"Blink","subtitle":"S","reasoning":"y"},'
    '"doubleEntendre":{"title":"D","subtitle":"","reasoning":"z"}}'
)


class TestFieldBlocks:

    def test_recovers_when_benefit_block_is_unclosed(self):
        rs = extract_by_field_blocks(BROKEN_BENEFIT)
        assert rs is not None
        assert (rs.benefit.title, rs.benefit.subtitle, rs.benefit.reasoning) == ("Atomic", "Tiny", "x")
        assert (rs.curiosity.title, rs.curiosity.subtitle, rs.curiosity.reasoning) == ("Blink", "S", "y")
        assert (rs.double_entendre.title, rs.double_entendre.reasoning) == ("D", "z")

    def test_framework_names_are_case_insensitive(self):
        text = (
            '{"BENEFIT": {"title": "A"}, "Curiosity": {"title": "B"}, '
            '"doubleentendre": {"title": "C"}}'
        )
        rs = extract_by_field_blocks(text)
        assert rs is not None
        assert [r.title for _, r in rs.records()] == ["A", "B", "C"]

    def test_missing_subtitle_and_reasoning_use_defaults(self):
        text = 'benefit: {"title": "A"} curiosity: {"title": "B"} doubleEntendre: {"title": "C"}'
        rs = extract_by_field_blocks(text)
        assert rs is not None
        assert rs.curiosity.subtitle == ""
        assert rs.curiosity.reasoning == "Generated title"

    def test_subtitle_key_does_not_count_as_title(self):
        text = (
            '{"benefit": {"subtitle": "only a subtitle"}, "curiosity": {"title": "B"}, '
            '"doubleEntendre": {"title": "C"}}'
        )
        assert extract_by_field_blocks(text) is None

    def test_missing_framework_fails(self):
        text = '{"benefit": {"title": "A"}, "curiosity": {"title": "B"}}'
        assert extract_by_field_blocks(text) is None

    def test_blank_title_fails(self):
        text = (
            '{"benefit": {"title": " "}, "curiosity": {"title": "B"}, '
            '"doubleEntendre": {"title": "C"}}'
        )
        assert extract_by_field_blocks(text) is None

    def test_escapes_are_decoded(self):
        text = (
            '{"benefit": {"title": "Say \\"Yes\\""}, "curiosity": {"title": "Caf\\u00e9"}, '
            '"doubleEntendre": {"title": "C"}}'
        )
        rs = extract_by_field_blocks(text)
        assert rs.benefit.title == 'Say "Yes"'
        assert rs.curiosity.title == "Café"


class TestPositionalHarvest:

    def test_pairs_by_ordinal(self):
        text = 'title: "A" ... "title": "B", "subtitle": "S1" ... "title": "C"'
        rs = harvest_positional(text)
        assert rs is not None
        assert [r.title for _, r in rs.records()] == ["A", "B", "C"]
        assert rs.benefit.subtitle == "S1"
        assert rs.curiosity.subtitle == ""
        assert rs.double_entendre.subtitle == ""
        assert {r.reasoning for _, r in rs.records()} == {"Generated title"}

    def test_extra_titles_are_ignored(self):
        text = '"title":"A" "title":"B" "title":"C" "title":"D"'
        rs = harvest_positional(text)
        assert rs.double_entendre.title == "C"

    def test_two_titles_is_not_enough(self):
        assert harvest_positional('"title": "A", "subtitle": "x", "title": "B"') is None


class TestDecode:

    def test_invalid_escape_kept_raw(self):
        assert decode_json_string("bad \\x escape") == "bad \\x escape"

    def test_plain_text(self):
        assert decode_json_string("plain") == "plain"


class TestBracesInsideValues:

    def test_brace_inside_string_does_not_end_block(self):
        text = (
            '{"benefit": {"title": "A", "subtitle": "S", "reasoning": "uses {braces} here"}, '
            '"curiosity": {"title": "B", "reasoning": "a } alone"}, "doubleEntendre": {"title": "C"}}'
        )
        rs = extract_by_field_blocks(text)
        assert rs is not None
        assert rs.benefit.reasoning == "uses {braces} here"
        assert rs.curiosity.reasoning == "a } alone"
        assert rs.double_entendre.title == "C"
