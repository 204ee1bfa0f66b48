"""Tests for pi.pager.screen -- layout and painting.

Uses the VirtualTerminal to capture output and verify what reaches the
terminal on full and differential paints.
"""

from __future__ import annotations

import pytest

from pi.pager.compositor import Frame
from pi.pager.errors import TerminalError
from pi.pager.screen import Rect, Screen, split_layout

from .virtual_terminal import VirtualTerminal


def make_frame(*body: str, header: str = "head", footer: str = "foot") -> Frame:
    return Frame(header_text=header, body_lines=tuple(body), footer_text=footer)


# ---------------------------------------------------------------------------
# split_layout
# ---------------------------------------------------------------------------


class TestSplitLayout:
    def test_regular_terminal(self) -> None:
        layout = split_layout(24, 80)
        assert layout.header == Rect(y=0, height=1, width=80)
        assert layout.body == Rect(y=1, height=22, width=80)
        assert layout.footer == Rect(y=23, height=1, width=80)

    @pytest.mark.parametrize(
        "rows,heights",
        [(3, (1, 1, 1)), (2, (1, 0, 1)), (1, (1, 0, 0)), (0, (0, 0, 0))],
    )
    def test_small_terminals(self, rows: int, heights: tuple[int, int, int]) -> None:
        layout = split_layout(rows, 10)
        assert (layout.header.height, layout.body.height, layout.footer.height) == heights

    def test_regions_are_contiguous(self) -> None:
        layout = split_layout(10, 40)
        assert list(layout.header.rows) + list(layout.body.rows) + list(
            layout.footer.rows
        ) == list(range(10))

    def test_negative_sizes_clamp(self) -> None:
        layout = split_layout(-5, -1)
        assert layout.body.height == 0
        assert layout.body.width == 0


# ---------------------------------------------------------------------------
# render_lines
# ---------------------------------------------------------------------------


class TestRenderLines:
    def test_one_line_per_row(self) -> None:
        screen = Screen(VirtualTerminal(rows=6, columns=20))
        lines = screen.render_lines(make_frame("a", "b"), screen.layout())
        assert len(lines) == 6

    def test_header_is_bold_and_centered(self) -> None:
        screen = Screen(VirtualTerminal(rows=5, columns=10))
        lines = screen.render_lines(make_frame(header="ab"), screen.layout())
        assert lines[0] == "\x1b[1m    ab    \x1b[0m"

    def test_footer_is_dark_gray(self) -> None:
        screen = Screen(VirtualTerminal(rows=5, columns=10))
        lines = screen.render_lines(make_frame(footer="q"), screen.layout())
        assert lines[-1].startswith("\x1b[90m")
        assert lines[-1].endswith("\x1b[0m")

    def test_body_lines_padded_and_truncated(self) -> None:
        screen = Screen(VirtualTerminal(rows=5, columns=6))
        lines = screen.render_lines(make_frame("abc", "abcdefghij"), screen.layout())
        assert lines[1] == "abc   "
        assert lines[2] == "abcdef"
        # Remaining body row is blank
        assert lines[3] == "      "

    def test_control_characters_removed(self) -> None:
        screen = Screen(VirtualTerminal(rows=3, columns=12))
        lines = screen.render_lines(make_frame("\x1b[31mred\tx"), screen.layout())
        assert lines[1] == "[31mred   x "

    def test_two_row_terminal_has_no_body(self) -> None:
        screen = Screen(VirtualTerminal(rows=2, columns=8))
        lines = screen.render_lines(make_frame("ignored"), screen.layout())
        assert len(lines) == 2
        assert "ignored" not in "".join(lines)


# ---------------------------------------------------------------------------
# draw
# ---------------------------------------------------------------------------


class TestDraw:
    def test_first_draw_is_full(self) -> None:
        term = VirtualTerminal(rows=4, columns=10)
        screen = Screen(term)
        screen.draw(make_frame("one", "two"))
        assert term.write_count == 1
        assert term.output.startswith("\x1b[2J")
        assert "one" in term.output and "two" in term.output
        assert screen.full_redraws == 1

    def test_unchanged_frame_writes_nothing(self) -> None:
        term = VirtualTerminal(rows=4, columns=10)
        screen = Screen(term)
        screen.draw(make_frame("one", "two"))
        term.clear_buffer()
        screen.draw(make_frame("one", "two"))
        assert term.write_count == 0

    def test_only_changed_rows_rewritten(self) -> None:
        term = VirtualTerminal(rows=4, columns=10)
        screen = Screen(term)
        screen.draw(make_frame("one", "two"))
        term.clear_buffer()
        screen.draw(make_frame("one", "TWO"))
        assert term.output == "\x1b[3;1HTWO       "
        assert screen.full_redraws == 1

    def test_resize_forces_full_redraw(self) -> None:
        term = VirtualTerminal(rows=4, columns=10)
        screen = Screen(term)
        screen.draw(make_frame("one", "two"))
        term.columns = 12
        term.clear_buffer()
        screen.draw(make_frame("one", "two"))
        assert term.output.startswith("\x1b[2J")
        assert screen.full_redraws == 2

    def test_invalidate_forces_full_redraw(self) -> None:
        term = VirtualTerminal(rows=4, columns=10)
        screen = Screen(term)
        screen.draw(make_frame("one"))
        screen.invalidate()
        term.clear_buffer()
        screen.draw(make_frame("one"))
        assert term.output.startswith("\x1b[2J")

    def test_failed_write_keeps_previous_baseline(self) -> None:
        term = VirtualTerminal(rows=4, columns=10)
        screen = Screen(term)
        screen.draw(make_frame("one", "two"))
        term.fail_on_write = True
        with pytest.raises(TerminalError):
            screen.draw(make_frame("one", "TWO"))
        term.fail_on_write = False
        term.clear_buffer()
        screen.draw(make_frame("one", "TWO"))
        assert term.output == "\x1b[3;1HTWO       "

    def test_failed_first_write_is_not_counted(self) -> None:
        term = VirtualTerminal(rows=4, columns=10)
        term.fail_on_write = True
        screen = Screen(term)
        with pytest.raises(TerminalError):
            screen.draw(make_frame("one"))
        assert screen.full_redraws == 0
        term.fail_on_write = False
        screen.draw(make_frame("one"))
        assert term.output.startswith("\x1b[2J")
        assert screen.full_redraws == 1
