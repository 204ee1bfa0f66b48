"""The text being viewed: an immutable sequence of lines."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from pi.pager.errors import LoadError

logger = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    """Split *text* on ``\\n``, dropping a ``\\r`` before each break.

    A trailing newline terminates the last line rather than starting an
    empty one, so ``"a\\nb\\n"`` is two lines and ``""`` is none.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


@dataclass(frozen=True)
class Document:
    """Lines of a loaded file together with the name shown in the header."""

    lines: tuple[str, ...] = ()
    name: str = ""

    def __len__(self) -> int:
        return len(self.lines)

    @classmethod
    def from_text(cls, text: str, name: str = "") -> Document:
        return cls(lines=tuple(split_lines(text)), name=name)

    @classmethod
    def load(cls, path: str | Path) -> Document:
        """Read *path* as UTF-8 and split it into lines.

        Raises :class:`LoadError` when the file cannot be opened or is not
        valid UTF-8.
        """
        name = str(path)
        try:
            text = Path(path).read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise LoadError(name, f"not valid UTF-8 ({e.reason})") from e
        except OSError as e:
            raise LoadError(name, e.strerror or str(e)) from e

        document = cls.from_text(text, name=name)
        logger.debug("Loaded %s (%d lines)", name, len(document))
        return document
