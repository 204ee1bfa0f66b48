"""The pager event loop: redraw, wait for input, apply, repeat.

The loop ends in one of two ways: the quit key returns
:attr:`LoopExit.QUIT`, and a terminal failure raises
:class:`~pi.pager.errors.TerminalError`.  Restoring the terminal is the
caller's job (see :func:`pi.pager.terminal.terminal_session`).
"""

from __future__ import annotations

import enum
import logging

from pi.pager.compositor import compose
from pi.pager.config import PagerConfig
from pi.pager.events import InputEvent
from pi.pager.keybindings import (
    PagerAction,
    PagerKeybindingsManager,
    get_pager_keybindings,
)
from pi.pager.screen import Screen
from pi.pager.terminal import Terminal
from pi.pager.viewport import Viewport

logger = logging.getLogger(__name__)


class LoopExit(enum.Enum):
    """How the event loop terminated."""

    QUIT = "quit"


def translate(
    event: InputEvent, keybindings: PagerKeybindingsManager
) -> PagerAction | None:
    """Map an input event to a pager action; non-key events map to ``None``."""
    if event.kind != "key":
        return None
    return keybindings.action_for(event.key)


def apply_action(viewport: Viewport, action: PagerAction, page_size: int) -> None:
    """Apply a scroll action to *viewport*.  ``quit`` is handled by the loop."""
    if action == "scrollUp":
        viewport.scroll_up(1)
    elif action == "scrollDown":
        viewport.scroll_down(1)
    elif action == "pageUp":
        viewport.scroll_up(page_size)
    elif action == "pageDown":
        viewport.scroll_down(page_size)


def draw(screen: Screen, viewport: Viewport, config: PagerConfig) -> None:
    """Compose the current viewport for the terminal's size and paint it."""
    layout = screen.layout()
    frame = compose(viewport, layout.body.height, legend=config.footer_legend)
    screen.draw(frame, layout)


def run(
    terminal: Terminal,
    viewport: Viewport,
    *,
    screen: Screen | None = None,
    keybindings: PagerKeybindingsManager | None = None,
    config: PagerConfig | None = None,
) -> LoopExit:
    """Drive the read-translate-mutate-redraw cycle until the user quits."""
    config = config or PagerConfig()
    screen = screen or Screen(terminal)
    keybindings = keybindings or get_pager_keybindings()

    while True:
        draw(screen, viewport, config)

        event = terminal.read_event()
        action = translate(event, keybindings)
        if action is None:
            logger.debug("Ignored %s event %r", event.kind, event.data)
            continue
        if action == "quit":
            logger.debug("Quit at offset %d", viewport.offset)
            return LoopExit.QUIT

        apply_action(viewport, action, config.page_size)
        logger.debug("%s -> offset %d", action, viewport.offset)
