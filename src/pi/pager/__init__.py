"""pi-pager: interactive terminal pager."""

# Document and viewport state
from pi.pager.document import Document
from pi.pager.viewport import Viewport

# Frame composition
from pi.pager.compositor import Frame, compose

# Configuration and errors
from pi.pager.config import PagerConfig
from pi.pager.errors import LoadError, PagerError, TerminalError, UsageError

# Input handling
from pi.pager.events import InputEvent, decode_input
from pi.pager.keybindings import (
    DEFAULT_PAGER_KEYBINDINGS,
    PagerAction,
    PagerKeybindingsManager,
    get_pager_keybindings,
    set_pager_keybindings,
)
from pi.pager.keys import Key, KeyId, parse_key
from pi.pager.stdin_buffer import StdinBuffer

# Terminal and drawing
from pi.pager.screen import Layout, Rect, Screen, split_layout
from pi.pager.terminal import ProcessTerminal, Terminal, terminal_session

# Event loop
from pi.pager.pager import LoopExit, run

__all__ = [
    # State
    "Document",
    "Viewport",
    # Composition
    "Frame",
    "compose",
    # Configuration and errors
    "PagerConfig",
    "PagerError",
    "UsageError",
    "LoadError",
    "TerminalError",
    # Input
    "InputEvent",
    "decode_input",
    "DEFAULT_PAGER_KEYBINDINGS",
    "PagerAction",
    "PagerKeybindingsManager",
    "get_pager_keybindings",
    "set_pager_keybindings",
    "Key",
    "KeyId",
    "parse_key",
    "StdinBuffer",
    # Terminal and drawing
    "Layout",
    "Rect",
    "Screen",
    "split_layout",
    "ProcessTerminal",
    "Terminal",
    "terminal_session",
    # Event loop
    "LoopExit",
    "run",
]
