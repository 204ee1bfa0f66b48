"""Terminal text utilities: display width, truncation, alignment.

Widths are measured per grapheme cluster so that wide (CJK), combining and
emoji sequences occupy the columns a terminal actually gives them.
"""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth

# ---------------------------------------------------------------------------
# Regex patterns
# ---------------------------------------------------------------------------

# C0 controls (except tab), DEL and C1 controls; ESC is among them, so raw
# escape sequences in a file cannot reach the terminal
_CONTROL_RE = re.compile(r"[\x00-\x08\x0a-\x1f\x7f-\x9f]")

TAB_WIDTH = 3

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------


def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Control characters and lone combining marks are zero width; emoji
    sequences (VS16, ZWJ, skin tones, flags) are two columns; everything
    else is delegated to wcwidth.
    """
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first_cp = ord(g[0])
    if first_cp >= 0x1F000 or 0x2600 <= first_cp <= 0x27BF:
        return 2

    cat = unicodedata.category(g[0])
    if cat.startswith("M") or cat == "Cf":
        return 0

    return max(_wcwidth.wcwidth(g[0]), 0)


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------


def sanitize_line(text: str) -> str:
    """Make a document line safe to paint on a single terminal row.

    Tabs become spaces; any other control character is dropped.
    """
    return _CONTROL_RE.sub("", text.replace("\t", " " * TAB_WIDTH))


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*.

    Tabs count as three columns.
    """
    if not text:
        return 0

    expanded = text.replace("\t", " " * TAB_WIDTH)

    if expanded.isascii() and expanded.isprintable():
        return len(expanded)

    cached = _width_cache.get(expanded)
    if cached is not None:
        return cached

    total = 0
    for g in grapheme.graphemes(expanded):
        total += _grapheme_width(g)

    return _cache_width(expanded, total)


def truncate_to_width(
    text: str,
    max_width: int,
    ellipsis: str = "...",
    pad: bool = False,
) -> str:
    """Truncate plain *text* to fit within *max_width* visible columns.

    If the text is wider than *max_width* it is cut at a grapheme boundary
    and *ellipsis* is appended (the ellipsis counts towards the width).  If
    *pad* is ``True`` the result is right-padded to exactly *max_width*.
    """
    if max_width <= 0:
        return ""

    text_width = visible_width(text)
    if text_width <= max_width:
        if pad:
            return text + " " * (max_width - text_width)
        return text

    ellipsis_width = visible_width(ellipsis)
    target_width = max_width - ellipsis_width
    if target_width <= 0:
        result = _take_columns(ellipsis, max_width)
    else:
        result = _take_columns(text, target_width) + ellipsis

    if pad:
        result_width = visible_width(result)
        if result_width < max_width:
            result += " " * (max_width - result_width)

    return result


def center_to_width(text: str, width: int) -> str:
    """Center *text* in *width* columns, truncating it first if needed."""
    if width <= 0:
        return ""
    fitted = truncate_to_width(text, width, ellipsis="")
    slack = width - visible_width(fitted)
    left = slack // 2
    return " " * left + fitted + " " * (slack - left)


def _take_columns(text: str, max_cols: int) -> str:
    """Return the longest grapheme prefix of *text* within *max_cols*."""
    result: list[str] = []
    cols = 0
    for g in grapheme.graphemes(text):
        w = _grapheme_width(g)
        if cols + w > max_cols:
            break
        result.append(g)
        cols += w
    return "".join(result)
