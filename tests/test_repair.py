# tests/test_repair.py
"""
Tests for control-character sanitizing and quote repair.
"""

from src.modules.title_extraction.repair import repair_unescaped_quotes, sanitize_control_chars


class TestSanitizer:

    def test_whitespace_controls_become_single_spaces(self):
        assert sanitize_control_chars("a\nb\tc\rd") == "a b c d"

    def test_crlf_maps_each_character(self):
        assert sanitize_control_chars("a\r\nb") == "a  b"

    def test_other_controls_are_deleted(self):
        assert sanitize_control_chars("a\x00b\x07c\x1bd\x7fe") == "abcde"

    def test_printable_text_untouched(self):
        text = '{"title": "Café \\"Noir\\""} ü €'
        assert sanitize_control_chars(text) == text


class TestQuoteRepair:

    def test_escapes_inner_quotes(self):
        text = '{"reasoning":"He said "hi" there"}'
        assert repair_unescaped_quotes(text) == '{"reasoning":"He said \\"hi\\" there"}'

    def test_single_stray_quote(self):
        text = '{"title":"A","reasoning":"The 5" format works"}'
        assert repair_unescaped_quotes(text) == '{"title":"A","reasoning":"The 5\\" format works"}'

    def test_already_escaped_quotes_unchanged(self):
        text = '{"title":"Say \\"Yes\\"","subtitle":""}'
        assert repair_unescaped_quotes(text) == text

    def test_well_formed_json_unchanged(self, valid_json):
        assert repair_unescaped_quotes(valid_json) == valid_json

    def test_other_keys_untouched(self):
        text = '{"note":"a "b" c"}'
        assert repair_unescaped_quotes(text) == text
