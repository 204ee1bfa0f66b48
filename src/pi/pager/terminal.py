"""Terminal abstraction for raw-mode stdin/stdout interaction.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal``
implementation that manages raw mode, the alternate screen, mouse capture,
bracketed paste and cursor visibility via termios and ANSI escape sequences,
and reads input as a blocking stream of :class:`InputEvent` objects.

The terminal modes form a scoped resource: :func:`terminal_session` (or
``with ProcessTerminal() as term``) guarantees that every mode enabled by
``start`` is disabled again on every exit path.
"""

from __future__ import annotations

import codecs
import collections
import contextlib
import logging
import os
import select
import signal
import sys
import termios
import tty
from typing import Callable, Iterator, Protocol, TextIO

from pi.pager.config import PagerConfig
from pi.pager.errors import TerminalError
from pi.pager.events import RESIZE_EVENT, InputEvent, decode_input, paste_event
from pi.pager.stdin_buffer import StdinBuffer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_ALT_SCREEN_ENTER = "\x1b[?1049h"
_ALT_SCREEN_LEAVE = "\x1b[?1049l"

# Normal tracking, button-event tracking, any-event tracking, SGR encoding
_MOUSE_ENABLE = "\x1b[?1000h\x1b[?1002h\x1b[?1003h\x1b[?1006h"
_MOUSE_DISABLE = "\x1b[?1006l\x1b[?1003l\x1b[?1002l\x1b[?1000l"

_BRACKETED_PASTE_ENABLE = "\x1b[?2004h"
_BRACKETED_PASTE_DISABLE = "\x1b[?2004l"

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"

_READ_SIZE = 4096

_TERMINAL_ERRORS = (OSError, termios.error)


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def read_event(self) -> InputEvent: ...

    def write(self, data: str) -> None: ...

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...


@contextlib.contextmanager
def terminal_session(terminal: Terminal) -> Iterator[Terminal]:
    """Run the body with *terminal* started, stopping it on every exit path.

    When the body fails and teardown fails too, the body's error is the one
    propagated; the teardown failure is logged.
    """
    terminal.start()
    try:
        yield terminal
    except BaseException:
        try:
            terminal.stop()
        except TerminalError:
            logger.warning("Terminal teardown failed", exc_info=True)
        raise
    terminal.stop()


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal implementation backed by ``sys.stdin``/``sys.stdout``.

    Input is read with a blocking ``select`` on stdin and on a wake-up pipe
    fed by the SIGWINCH handler, so a resize interrupts the wait and is
    reported as a ``"resize"`` event.
    """

    def __init__(
        self,
        config: PagerConfig | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self._config = config or PagerConfig()
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout

        # Terminal session state
        self._raw_mode: bool = False
        self._alternate_screen: bool = False
        self._mouse_capture: bool = False
        self._bracketed_paste: bool = False
        self._cursor_hidden: bool = False

        self._original_termios: list | None = None
        self._sigwinch_installed: bool = False
        self._prev_sigwinch_handler: Callable | int | None = None
        self._wake_r: int | None = None
        self._wake_w: int | None = None

        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending: collections.deque[InputEvent] = collections.deque()
        self._stdin_buffer = StdinBuffer()
        self._stdin_buffer.on_data(lambda seq: self._pending.append(decode_input(seq)))
        self._stdin_buffer.on_paste(lambda text: self._pending.append(paste_event(text)))

    # -- context manager ----------------------------------------------------

    def __enter__(self) -> ProcessTerminal:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.stop()
            return
        try:
            self.stop()
        except TerminalError:
            logger.warning("Terminal teardown failed", exc_info=True)

    # -- properties ---------------------------------------------------------

    @property
    def raw_mode(self) -> bool:
        return self._raw_mode

    @property
    def alternate_screen(self) -> bool:
        return self._alternate_screen

    @property
    def mouse_capture(self) -> bool:
        return self._mouse_capture

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(self._stdout.fileno()).columns
        except (ValueError, OSError):
            return 80

    @property
    def rows(self) -> int:
        try:
            return os.get_terminal_size(self._stdout.fileno()).lines
        except (ValueError, OSError):
            return 24

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Enter raw mode and the alternate screen, enable mouse capture.

        If a step fails, the steps already taken are undone before the
        failure is raised as :class:`TerminalError`.
        """
        try:
            fd = self._stdin.fileno()
            self._original_termios = termios.tcgetattr(fd)
            tty.setraw(fd)
            self._raw_mode = True

            self._raw_write(_ALT_SCREEN_ENTER)
            self._alternate_screen = True

            if self._config.mouse_capture:
                self._raw_write(_MOUSE_ENABLE)
                self._mouse_capture = True

            if self._config.bracketed_paste:
                self._raw_write(_BRACKETED_PASTE_ENABLE)
                self._bracketed_paste = True

            self._raw_write(_HIDE_CURSOR)
            self._cursor_hidden = True

            self._install_resize_handler()
        except _TERMINAL_ERRORS as e:
            try:
                self.stop()
            except TerminalError:
                logger.warning("Rollback of partial terminal setup failed", exc_info=True)
            raise TerminalError(f"cannot set up terminal: {e}") from e

        logger.debug("Terminal session started")

    def stop(self) -> None:
        """Restore every terminal mode enabled by :meth:`start`.

        Each step is attempted even if an earlier one fails; the first
        failure is raised afterwards.  Calling ``stop`` twice is harmless.
        """
        errors: list[BaseException] = []

        def attempt(step: Callable[[], None]) -> None:
            try:
                step()
            except _TERMINAL_ERRORS as e:
                errors.append(e)

        attempt(self._remove_resize_handler)

        if self._cursor_hidden:
            self._cursor_hidden = False
            attempt(lambda: self._raw_write(_SHOW_CURSOR))

        if self._bracketed_paste:
            self._bracketed_paste = False
            attempt(lambda: self._raw_write(_BRACKETED_PASTE_DISABLE))

        if self._mouse_capture:
            self._mouse_capture = False
            attempt(lambda: self._raw_write(_MOUSE_DISABLE))

        if self._alternate_screen:
            self._alternate_screen = False
            attempt(lambda: self._raw_write(_ALT_SCREEN_LEAVE))

        if self._raw_mode:
            self._raw_mode = False
            original = self._original_termios
            self._original_termios = None
            if original is not None:
                attempt(
                    lambda: termios.tcsetattr(
                        self._stdin.fileno(), termios.TCSADRAIN, original
                    )
                )

        self._stdin_buffer.clear()
        self._pending.clear()

        if errors:
            raise TerminalError(f"cannot restore terminal: {errors[0]}") from errors[0]

        logger.debug("Terminal session stopped")

    # -- input ----------------------------------------------------------------

    def read_event(self) -> InputEvent:
        """Block until the next input event is available and return it."""
        while not self._pending:
            self._wait_for_input()
        return self._pending.popleft()

    def _wait_for_input(self) -> None:
        fd = self._stdin.fileno()
        watched = [fd]
        if self._wake_r is not None:
            watched.append(self._wake_r)

        # Only a partial escape sequence bounds the wait
        timeout = self._config.escape_timeout if self._stdin_buffer.pending else None

        try:
            readable, _, _ = select.select(watched, [], [], timeout)
        except OSError as e:
            raise TerminalError(f"cannot wait for input: {e}") from e

        if not readable:
            for sequence in self._stdin_buffer.flush():
                self._pending.append(decode_input(sequence))
            return

        if self._wake_r is not None and self._wake_r in readable:
            self._drain_wake_pipe()
            self._pending.append(RESIZE_EVENT)

        if fd in readable:
            try:
                raw = os.read(fd, _READ_SIZE)
            except OSError as e:
                raise TerminalError(f"cannot read input: {e}") from e
            if not raw:
                raise TerminalError("cannot read input: end of file on stdin")
            self._stdin_buffer.process(self._decoder.decode(raw))

    # -- output ---------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write *data* to the terminal, raising :class:`TerminalError` on failure."""
        try:
            self._raw_write(data)
        except OSError as e:
            raise TerminalError(f"cannot write to terminal: {e}") from e

    # -- private: SIGWINCH ----------------------------------------------------

    def _install_resize_handler(self) -> None:
        self._wake_r, self._wake_w = os.pipe()
        os.set_blocking(self._wake_r, False)
        os.set_blocking(self._wake_w, False)
        try:
            previous = signal.signal(signal.SIGWINCH, self._on_sigwinch)
        except ValueError:
            # Not on the main thread: resizes are picked up on the next key
            logger.debug("SIGWINCH handler not installed", exc_info=True)
            self._close_wake_pipe()
            return
        self._prev_sigwinch_handler = signal.SIG_DFL if previous is None else previous
        self._sigwinch_installed = True

    def _remove_resize_handler(self) -> None:
        if self._sigwinch_installed:
            signal.signal(signal.SIGWINCH, self._prev_sigwinch_handler)
            self._sigwinch_installed = False
            self._prev_sigwinch_handler = None
        self._close_wake_pipe()

    def _close_wake_pipe(self) -> None:
        fds = (self._wake_r, self._wake_w)
        self._wake_r = None
        self._wake_w = None
        for fd in fds:
            if fd is not None:
                os.close(fd)

    def _drain_wake_pipe(self) -> None:
        assert self._wake_r is not None
        while True:
            try:
                if not os.read(self._wake_r, 64):
                    return
            except BlockingIOError:
                return

    def _on_sigwinch(self, signum: int, frame: object) -> None:
        """Handle terminal resize signals by waking up ``read_event``."""
        if self._wake_w is None:
            return
        try:
            os.write(self._wake_w, b"\0")
        except BlockingIOError:
            # Pipe full: a wake-up is already pending
            return

    # -- private: raw write ---------------------------------------------------

    def _raw_write(self, data: str) -> None:
        self._stdout.write(data)
        self._stdout.flush()
