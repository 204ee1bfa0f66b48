"""Exception hierarchy for the pager.

Every failure that reaches the command line is a :class:`PagerError`; the
``exit_code`` attribute is the process status the CLI exits with.  Quitting
is not an error and never raises.
"""

from __future__ import annotations


class PagerError(Exception):
    """Base class for errors surfaced to the user."""

    exit_code: int = 1


class UsageError(PagerError):
    """The command line was malformed (e.g. no file path given)."""

    exit_code = 2


class LoadError(PagerError):
    """The file to view could not be read or decoded."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"cannot read '{path}': {reason}")
        self.path = path
        self.reason = reason


class TerminalError(PagerError):
    """Interaction with the terminal device failed."""
