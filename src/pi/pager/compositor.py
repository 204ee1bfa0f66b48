"""Render compositor: maps viewport state onto header/body/footer text.

``compose`` is pure.  It decides *what* goes in each region; fitting the
text to the terminal width is left to :mod:`pi.pager.screen`.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass

from pi.pager.config import DEFAULT_FOOTER_LEGEND
from pi.pager.viewport import Viewport

__all__ = ["Frame", "compose", "header_text"]


@dataclass(frozen=True)
class Frame:
    """Text for one paint of the screen."""

    header_text: str
    body_lines: tuple[str, ...]
    footer_text: str


def header_text(viewport: Viewport, area_height: int) -> str:
    """Describe the 1-based inclusive range of visible lines."""
    name = viewport.document.name or "File viewer"
    total = viewport.line_count
    if total == 0:
        return f"{name} – (empty file)"
    if area_height == 0:
        return f"{name} – no lines visible of {total}"
    first = viewport.offset + 1
    last = min(viewport.offset + area_height, total)
    return f"{name} – lines {first}-{last} of {total}"


def compose(
    viewport: Viewport,
    area_height: int,
    legend: str = DEFAULT_FOOTER_LEGEND,
) -> Frame:
    """Compute the frame for a body area *area_height* rows tall."""
    area_height = operator.index(area_height)
    if area_height < 0:
        raise ValueError(f"area_height must not be negative, got {area_height}")

    start = viewport.offset
    body = viewport.document.lines[start : start + area_height]
    return Frame(
        header_text=header_text(viewport, area_height),
        body_lines=body,
        footer_text=legend,
    )
