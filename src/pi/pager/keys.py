"""Keyboard input parsing for the pager.

Turns one complete input sequence (as emitted by
:class:`pi.pager.stdin_buffer.StdinBuffer`) into a key identifier such as
``"q"``, ``"up"``, ``"pageDown"`` or ``"ctrl+up"``.  Legacy VT/xterm
sequences and the xterm modifier encoding are recognized.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------

KeyId = str

# ---------------------------------------------------------------------------
# Key helper object
# ---------------------------------------------------------------------------


class Key:
    """Named key constants."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    insert = "insert"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MODIFIERS: dict[str, int] = {
    "shift": 1,
    "alt": 2,
    "ctrl": 4,
}

# Caps lock / num lock bits reported by some terminals
LOCK_MASK = 64 + 128

# Legacy escape sequences -> key names
LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": Key.up,
    "\x1b[B": Key.down,
    "\x1b[C": Key.right,
    "\x1b[D": Key.left,
    "\x1b[H": Key.home,
    "\x1b[F": Key.end,
    "\x1bOA": Key.up,
    "\x1bOB": Key.down,
    "\x1bOC": Key.right,
    "\x1bOD": Key.left,
    "\x1bOH": Key.home,
    "\x1bOF": Key.end,
    "\x1b[1~": Key.home,
    "\x1b[2~": Key.insert,
    "\x1b[3~": Key.delete,
    "\x1b[4~": Key.end,
    "\x1b[5~": Key.page_up,
    "\x1b[6~": Key.page_down,
    "\x1b[7~": Key.home,
    "\x1b[8~": Key.end,
    "\x1bOP": "f1",
    "\x1bOQ": "f2",
    "\x1bOR": "f3",
    "\x1bOS": "f4",
    "\x1b[15~": "f5",
    "\x1b[17~": "f6",
    "\x1b[18~": "f7",
    "\x1b[19~": "f8",
    "\x1b[20~": "f9",
    "\x1b[21~": "f10",
    "\x1b[23~": "f11",
    "\x1b[24~": "f12",
    "\x1b[E": "clear",
    "\x1b[Z": "shift+tab",
}

# Final byte of ``CSI 1 ; <mod> <final>`` -> key name
_LETTER_KEYS: dict[str, str] = {
    "A": Key.up,
    "B": Key.down,
    "C": Key.right,
    "D": Key.left,
    "H": Key.home,
    "F": Key.end,
    "P": "f1",
    "Q": "f2",
    "R": "f3",
    "S": "f4",
}

# Number of ``CSI <n> ; <mod> ~`` -> key name
_TILDE_KEYS: dict[int, str] = {
    1: Key.home,
    2: Key.insert,
    3: Key.delete,
    4: Key.end,
    5: Key.page_up,
    6: Key.page_down,
    15: "f5",
    17: "f6",
    18: "f7",
    19: "f8",
    20: "f9",
    21: "f10",
    23: "f11",
    24: "f12",
}

# ---------------------------------------------------------------------------
# Regex patterns for modified sequences
# ---------------------------------------------------------------------------

# Arrows, Home/End and F1-F4 with modifier: \x1b[1;<modifier>[ABCDHFPQRS]
_MODIFIED_LETTER_RE = re.compile(r"^\x1b\[1;(\d+)([ABCDHFPQRS])$")

# Functional keys with modifier: \x1b[<number>;<modifier>~
_MODIFIED_TILDE_RE = re.compile(r"^\x1b\[(\d+);(\d+)~$")

# Mouse reports: SGR (\x1b[<b;x;yM) and legacy X10 (\x1b[Mbxy)
_MOUSE_RE = re.compile(r"^\x1b\[(?:<\d+;\d+;\d+[Mm]|M...)$", re.DOTALL)


def _modifier_prefix(modifier: int) -> str:
    mod = (modifier - 1) & ~LOCK_MASK
    prefix = ""
    if mod & MODIFIERS["ctrl"]:
        prefix += "ctrl+"
    if mod & MODIFIERS["shift"]:
        prefix += "shift+"
    if mod & MODIFIERS["alt"]:
        prefix += "alt+"
    return prefix


def is_mouse_sequence(data: str) -> bool:
    """Check whether *data* is a mouse report rather than a keystroke."""
    return bool(_MOUSE_RE.match(data))


# ---------------------------------------------------------------------------
# parse_key — determine what key was pressed from raw input
# ---------------------------------------------------------------------------


def parse_key(data: str) -> KeyId | None:  # noqa: C901
    """Parse one input sequence and return the key identifier, or ``None``.

    Examples: ``"q"``, ``"up"``, ``"pageUp"``, ``"ctrl+up"``,
    ``"shift+pageDown"``, ``"alt+x"``, ``"ctrl+c"``.
    """
    if not data:
        return None

    # --- Legacy escape sequences ---
    key = LEGACY_KEY_SEQUENCES.get(data)
    if key is not None:
        return key

    # --- xterm modifier encoding ---
    match = _MODIFIED_LETTER_RE.match(data)
    if match:
        return _modifier_prefix(int(match.group(1))) + _LETTER_KEYS[match.group(2)]

    match = _MODIFIED_TILDE_RE.match(data)
    if match:
        name = _TILDE_KEYS.get(int(match.group(1)))
        if name is None:
            return None
        return _modifier_prefix(int(match.group(2))) + name

    # --- Simple single-byte keys ---
    if data == "\x1b":
        return Key.escape
    if data == "\r" or data == "\n":
        return Key.enter
    if data == "\t":
        return Key.tab
    if data == " ":
        return Key.space
    if data == "\x7f" or data == "\x08":
        return Key.backspace
    if data == "\x00":
        return "ctrl+space"

    # --- Ctrl + letter (0x01 - 0x1a) ---
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)

    # --- Alt + key (ESC prefix) ---
    if len(data) == 2 and data[0] == "\x1b":
        ch = data[1]
        if ch == "\x1b":
            return "alt+escape"
        if ch == "\r" or ch == "\n":
            return "alt+enter"
        if ch == " ":
            return "alt+space"
        if ch == "\x7f" or ch == "\x08":
            return "alt+backspace"
        if 1 <= ord(ch) <= 26:
            return "ctrl+alt+" + chr(ord(ch) + ord("a") - 1)
        if ch.isupper():
            return "shift+alt+" + ch.lower()
        if ch.isprintable():
            return "alt+" + ch

    # --- Plain printable character ---
    if len(data) == 1 and data.isprintable():
        return data

    return None
