"""Layout and draw surface.

``split_layout`` divides the terminal into a one-row header, a body and a
one-row footer.  ``Screen`` paints a :class:`~pi.pager.compositor.Frame`
into that layout, rewriting only the rows that changed since the previous
paint.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pi.pager.compositor import Frame
from pi.pager.terminal import Terminal
from pi.pager.utils import center_to_width, sanitize_line, truncate_to_width

logger = logging.getLogger(__name__)

_BOLD = "\x1b[1m"
_DARK_GRAY = "\x1b[90m"
_RESET = "\x1b[0m"
_CLEAR_SCREEN = "\x1b[2J"
_MOVE_TO_FMT = "\x1b[{};1H"


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Rect:
    """A screen region; ``y`` is the 0-based top row."""

    y: int
    height: int
    width: int

    @property
    def rows(self) -> range:
        return range(self.y, self.y + self.height)


@dataclass(frozen=True)
class Layout:
    header: Rect
    body: Rect
    footer: Rect


def split_layout(rows: int, columns: int) -> Layout:
    """Split a *rows* x *columns* area into header, body and footer.

    The header takes the first row and the footer the last; the body gets
    whatever is left, which is nothing on terminals under three rows tall.
    """
    rows = max(0, rows)
    columns = max(0, columns)

    header_h = min(1, rows)
    footer_h = min(1, rows - header_h)
    body_h = rows - header_h - footer_h

    return Layout(
        header=Rect(y=0, height=header_h, width=columns),
        body=Rect(y=header_h, height=body_h, width=columns),
        footer=Rect(y=header_h + body_h, height=footer_h, width=columns),
    )


# ---------------------------------------------------------------------------
# Screen
# ---------------------------------------------------------------------------


class Screen:
    """Paints frames onto a :class:`~pi.pager.terminal.Terminal`.

    Keeps the lines of the previous paint so that unchanged rows are not
    rewritten; a size change or :meth:`invalidate` forces a full repaint.
    """

    def __init__(self, terminal: Terminal) -> None:
        self.terminal = terminal
        self._previous_lines: list[str] = []
        self._previous_size: tuple[int, int] = (-1, -1)
        self._full_redraw_count: int = 0

    @property
    def full_redraws(self) -> int:
        return self._full_redraw_count

    def layout(self) -> Layout:
        """Layout for the terminal's current size."""
        return split_layout(self.terminal.rows, self.terminal.columns)

    def invalidate(self) -> None:
        """Force the next :meth:`draw` to repaint every row."""
        self._previous_lines = []
        self._previous_size = (-1, -1)

    def render_lines(self, frame: Frame, layout: Layout) -> list[str]:
        """Turn *frame* into one styled, width-fitted string per screen row."""
        width = layout.body.width
        lines: list[str] = []

        if layout.header.height:
            header = center_to_width(sanitize_line(frame.header_text), width)
            lines.append(f"{_BOLD}{header}{_RESET}")

        for i in range(layout.body.height):
            if i < len(frame.body_lines):
                text = sanitize_line(frame.body_lines[i])
                lines.append(truncate_to_width(text, width, ellipsis="", pad=True))
            else:
                lines.append(" " * width)

        if layout.footer.height:
            footer = center_to_width(sanitize_line(frame.footer_text), width)
            lines.append(f"{_DARK_GRAY}{footer}{_RESET}")

        return lines

    def draw(self, frame: Frame, layout: Layout | None = None) -> None:
        """Paint *frame* with a single terminal write."""
        layout = layout or self.layout()
        lines = self.render_lines(frame, layout)
        size = (layout.header.height + layout.body.height + layout.footer.height,
                layout.body.width)

        out: list[str] = []
        force_full = size != self._previous_size
        if force_full:
            out.append(_CLEAR_SCREEN)

        for row, line in enumerate(lines):
            if not force_full and row < len(self._previous_lines) and (
                self._previous_lines[row] == line
            ):
                continue
            out.append(_MOVE_TO_FMT.format(row + 1))
            out.append(line)

        if out:
            self.terminal.write("".join(out))

        # Only a frame that reached the terminal becomes the diff baseline
        self._previous_lines = lines
        self._previous_size = size
        if force_full:
            self._full_redraw_count += 1
        logger.debug(
            "Painted frame (%s, %d rows)", "full" if force_full else "diff", len(lines)
        )
