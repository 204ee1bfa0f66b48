"""Viewport state: the loaded document and the current scroll offset.

Both scroll operations saturate: moving up clamps at line 0 and moving down
clamps at the last line index, whatever the size of the step.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass

from pi.pager.document import Document


@dataclass
class Viewport:
    """First visible line (``offset``) over an immutable :class:`Document`.

    ``offset`` always satisfies ``0 <= offset <= last_index``.
    """

    document: Document
    offset: int = 0

    def __post_init__(self) -> None:
        self.offset = operator.index(self.offset)
        if not 0 <= self.offset <= self.last_index:
            raise ValueError(
                f"offset must be between 0 and {self.last_index}, got {self.offset}"
            )

    @classmethod
    def create(cls, document: Document) -> Viewport:
        return cls(document=document, offset=0)

    @property
    def line_count(self) -> int:
        return len(self.document)

    @property
    def last_index(self) -> int:
        """Index of the last line, or 0 for an empty document."""
        return max(0, len(self.document) - 1)

    def scroll_up(self, amount: int) -> None:
        """Move the viewport *amount* lines towards the start."""
        amount = _check_amount(amount)
        self.offset = max(0, self.offset - amount)

    def scroll_down(self, amount: int) -> None:
        """Move the viewport *amount* lines towards the end."""
        amount = _check_amount(amount)
        self.offset = min(self.offset + amount, self.last_index)


def _check_amount(amount: int) -> int:
    # Non-integers raise TypeError
    amount = operator.index(amount)
    if amount < 0:
        raise ValueError(f"scroll amount must not be negative, got {amount}")
    return amount
