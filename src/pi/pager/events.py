"""Discrete input events delivered to the event loop."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pi.pager.keys import KeyId, is_mouse_sequence, parse_key

EventKind = Literal["key", "mouse", "paste", "resize", "unknown"]


@dataclass(frozen=True)
class InputEvent:
    """One input event: a keystroke, mouse report, paste or resize.

    ``key`` is set only for ``"key"`` events.
    """

    kind: EventKind
    data: str = ""
    key: KeyId | None = None


RESIZE_EVENT = InputEvent(kind="resize")


def decode_input(data: str) -> InputEvent:
    """Classify one complete input sequence."""
    if is_mouse_sequence(data):
        return InputEvent(kind="mouse", data=data)
    key = parse_key(data)
    if key is None:
        return InputEvent(kind="unknown", data=data)
    return InputEvent(kind="key", data=data, key=key)


def paste_event(content: str) -> InputEvent:
    return InputEvent(kind="paste", data=content)
