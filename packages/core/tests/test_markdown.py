"""Tests for the shared fencing and truncation helpers."""

from prcontext_core.utils.markdown import NO_OUTPUT, TRUNCATION_MARKER, fenced, truncate


class TestFenced:
    def test_wraps_code_with_language_tag(self):
        assert fenced("const x = 1;", "ts") == "```ts\nconst x = 1;\n```\n"

    def test_wraps_without_language_tag(self):
        assert fenced("hello") == "```\nhello\n```\n"

    def test_empty_content_returns_placeholder(self):
        assert fenced("") == NO_OUTPUT
        assert fenced("") == "(no output)\n"

    def test_whitespace_only_returns_placeholder(self):
        # A blank body must never render as an empty fence.
        assert fenced("   \n\t  ") == "(no output)\n"

    def test_trailing_whitespace_trimmed(self):
        assert fenced("code   \n\n") == "```\ncode\n```\n"

    def test_leading_indentation_preserved(self):
        assert fenced("    indented") == "```\n    indented\n```\n"


class TestTruncate:
    def test_under_limit_unchanged(self):
        assert truncate("short", 100) == "short"

    def test_over_limit_cut_with_marker(self):
        assert truncate("toolong", 4) == "tool\n... (truncated)"

    def test_exactly_at_limit_unchanged(self):
        assert truncate("12345", 5) == "12345"

    def test_one_over_limit_truncated(self):
        assert truncate("123456", 5) == "12345" + TRUNCATION_MARKER

    def test_limit_measured_after_trimming(self):
        assert truncate("  text  ", 4) == "text"
        assert truncate("  text  ", 100) == "text"

    def test_empty_string(self):
        assert truncate("", 10) == ""
