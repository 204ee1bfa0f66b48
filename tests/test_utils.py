"""Tests for pi.pager.utils -- terminal text utilities."""

from __future__ import annotations

from pi.pager.utils import (
    center_to_width,
    sanitize_line,
    truncate_to_width,
    visible_width,
)


# ---------------------------------------------------------------------------
# visible_width
# ---------------------------------------------------------------------------


class TestVisibleWidth:
    """Measure the visible terminal width of text."""

    def test_plain_ascii(self) -> None:
        assert visible_width("hello") == 5

    def test_empty_string(self) -> None:
        assert visible_width("") == 0

    def test_wide_cjk_characters_count_as_two(self) -> None:
        assert visible_width("世") == 2

    def test_mixed_ascii_and_wide(self) -> None:
        assert visible_width("A世B") == 4

    def test_combining_mark_is_zero_width(self) -> None:
        # "e" + combining acute accent
        assert visible_width("e\u0301") == 1

    def test_tab_counts_as_three_spaces(self) -> None:
        assert visible_width("\t") == 3


# ---------------------------------------------------------------------------
# truncate_to_width
# ---------------------------------------------------------------------------


class TestTruncateToWidth:
    def test_short_text_unchanged(self) -> None:
        assert truncate_to_width("abc", 10) == "abc"

    def test_pads_when_requested(self) -> None:
        assert truncate_to_width("abc", 6, pad=True) == "abc   "

    def test_truncates_with_ellipsis(self) -> None:
        assert truncate_to_width("abcdefghij", 6) == "abc..."

    def test_truncates_without_ellipsis(self) -> None:
        assert truncate_to_width("abcdefghij", 4, ellipsis="") == "abcd"

    def test_zero_width(self) -> None:
        assert truncate_to_width("abc", 0) == ""

    def test_wide_char_not_split(self) -> None:
        # Two wide chars (4 cols) into 3 cols: only one fits, then pad
        result = truncate_to_width("世界", 3, ellipsis="", pad=True)
        assert result == "世 "
        assert visible_width(result) == 3

    def test_combining_sequence_kept_together(self) -> None:
        assert truncate_to_width("e\u0301xyz", 1, ellipsis="") == "e\u0301"


# ---------------------------------------------------------------------------
# center_to_width
# ---------------------------------------------------------------------------


class TestCenterToWidth:
    def test_centers(self) -> None:
        assert center_to_width("ab", 6) == "  ab  "

    def test_odd_slack_goes_right(self) -> None:
        assert center_to_width("ab", 5) == " ab  "

    def test_too_long_is_cut(self) -> None:
        assert center_to_width("abcdef", 4) == "abcd"

    def test_zero_width(self) -> None:
        assert center_to_width("abc", 0) == ""


# ---------------------------------------------------------------------------
# sanitize_line
# ---------------------------------------------------------------------------


class TestSanitizeLine:
    def test_plain_text_unchanged(self) -> None:
        assert sanitize_line("hello world") == "hello world"

    def test_tabs_expand(self) -> None:
        assert sanitize_line("a\tb") == "a   b"

    def test_escape_sequences_are_neutralized(self) -> None:
        assert sanitize_line("\x1b[2Jboom") == "[2Jboom"

    def test_carriage_return_removed(self) -> None:
        assert sanitize_line("abc\r") == "abc"

    def test_unicode_kept(self) -> None:
        assert sanitize_line("héllo 世") == "héllo 世"
