"""Tests for tolerant package.json parsing."""

import pytest

from perfpilot.bundle import ManifestParseError, parse_manifest
from perfpilot.bundle.manifest import repair_json, strip_comments


class TestStrictParse:
    def test_valid_json(self):
        data = parse_manifest('{"dependencies": {"react": "^18.2.0"}}')
        assert data == {"dependencies": {"react": "^18.2.0"}}

    def test_top_level_array_rejected(self):
        with pytest.raises(ManifestParseError):
            parse_manifest("[1, 2, 3]")

    def test_garbage_rejected(self):
        with pytest.raises(ManifestParseError):
            parse_manifest("this is not a manifest")

    def test_empty_rejected(self):
        with pytest.raises(ManifestParseError):
            parse_manifest("")


class TestRepair:
    def test_comments_and_trailing_commas(self):
        text = """{
  // runtime deps
  "dependencies": {
    "react": "^18.2.0", /* ui */
    "moment": "^2.29.0",
  },
}"""
        data = parse_manifest(text)
        assert list(data["dependencies"]) == ["react", "moment"]

    def test_comment_markers_inside_strings_preserved(self):
        text = '{"homepage": "https://example.com/a//b", "dependencies": {"a": "1"},}'
        data = parse_manifest(text)
        assert data["homepage"] == "https://example.com/a//b"
        assert data["dependencies"] == {"a": "1"}

    def test_bare_keys_and_single_quotes(self):
        data = parse_manifest("{dependencies: {'react': '^18.0.0'}}")
        assert data == {"dependencies": {"react": "^18.0.0"}}

    def test_invalid_escape_becomes_literal_backslash(self):
        data = parse_manifest(r'{"path": "C:\dev\app",}')
        assert data["path"] == "C:\\dev\\app"

    def test_valid_escapes_untouched(self):
        data = parse_manifest(r'{"pattern": "a\\d+\n", "x": 1,}')
        assert data["pattern"] == "a\\d+\n"

    def test_repair_never_evaluates_code(self):
        # A JS expression is not a manifest, whatever it would evaluate to.
        with pytest.raises(ManifestParseError):
            parse_manifest("({dependencies: (() => ({react: '1'}))()})")


class TestStripComments:
    def test_line_comment(self):
        assert strip_comments('{"a": 1} // trailing').strip() == '{"a": 1}'

    def test_unterminated_block_comment_drops_rest(self):
        assert strip_comments('{"a": 1} /* never closed').strip() == '{"a": 1}'

    def test_escaped_quote_inside_string(self):
        text = r'{"a": "say \"//hi\""}'
        assert strip_comments(text) == text


class TestSectionExtraction:
    def test_dependency_blocks_extracted_from_broken_document(self):
        text = (
            '{"name": "app" "dependencies": {"react": "18.2.0"}, '
            '"devDependencies": {"jest": "29"}'
        )
        data = parse_manifest(text)
        assert data == {
            "dependencies": {"react": "18.2.0"},
            "devDependencies": {"jest": "29"},
        }

    def test_repair_output_is_json_text(self):
        assert repair_json("{a: 'b',}") == '{"a": "b"}'
