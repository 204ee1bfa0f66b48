"""CLI entry point for pi-pager."""

from __future__ import annotations

import argparse
import logging
import sys

from pi.pager.config import PagerConfig
from pi.pager.document import Document
from pi.pager.errors import PagerError, UsageError
from pi.pager.pager import LoopExit, run
from pi.pager.terminal import ProcessTerminal, Terminal, terminal_session
from pi.pager.viewport import Viewport

logger = logging.getLogger(__name__)

PROG = "pi-pager"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="View a text file in the terminal",
    )
    parser.add_argument("path", nargs="?", help="File to view")
    return parser.parse_args(argv)


def main(
    argv: list[str] | None = None,
    terminal: Terminal | None = None,
    config: PagerConfig | None = None,
) -> int:
    """Run the pager and return the process exit status."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    args = parse_args(argv)
    config = config or PagerConfig()

    try:
        # Usage and load errors are reported before the terminal is touched
        if args.path is None:
            raise UsageError("missing file path")
        viewport = Viewport.create(Document.load(args.path))

        terminal = terminal or ProcessTerminal(config)
        with terminal_session(terminal):
            result = run(terminal, viewport, config=config)
    except PagerError as e:
        print(f"{PROG}: error: {e}", file=sys.stderr)
        return e.exit_code
    except KeyboardInterrupt:
        return 130

    logger.debug("Session ended: %s", result.value)
    return 0 if result is LoopExit.QUIT else 1


def entry() -> None:
    sys.exit(main())


if __name__ == "__main__":
    entry()
