"""Pager configuration."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_FOOTER_LEGEND = "↑/k ↓/j PgUp PgDn  q: quit"


@dataclass(frozen=True)
class PagerConfig:
    """Runtime settings for a pager session."""

    page_size: int = 10
    footer_legend: str = DEFAULT_FOOTER_LEGEND
    mouse_capture: bool = True
    bracketed_paste: bool = True
    # Seconds to wait for the rest of a partial escape sequence
    escape_timeout: float = 0.01

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError(f"page_size must be positive, got {self.page_size}")
        if self.escape_timeout < 0:
            raise ValueError(
                f"escape_timeout must not be negative, got {self.escape_timeout}"
            )
