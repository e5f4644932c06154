"""Rich-backed terminal render surface.

Exposes the handful of cursor primitives the screen needs: clear the
screen, move to a fixed row, clear the current line, show or hide the
cursor, write styled text, and flush.  Control sequences are emitted
through :class:`rich.control.Control` so a StringIO-backed console in
tests records exactly what a real terminal would receive.
"""

from __future__ import annotations

import sys
from typing import IO

from rich.console import Console
from rich.control import Control
from rich.segment import ControlType
from rich.theme import Theme

POMO_THEME = Theme(
    {
        "pomo.banner": "bold magenta",
        "pomo.phase.work": "bold red",
        "pomo.phase.break": "bold green",
        "pomo.time": "bold",
        "pomo.menu": "dim",
        "pomo.notice": "bold yellow",
        "pomo.error": "bold red",
        "pomo.ok": "bold green",
        "pomo.prompt": "bold cyan",
    }
)

_ERASE_TO_END = 0
_ERASE_LINE = 2


class Terminal:
    """Cursor-addressed writer over a Rich :class:`Console`."""

    def __init__(self, console: Console) -> None:
        self._console = console

    @property
    def console(self) -> Console:
        return self._console

    def clear_screen(self) -> None:
        self._console.control(Control.clear(), Control.home())

    def move_to_row(self, row: int, column: int = 0) -> None:
        self._console.control(Control.move_to(column, row))

    def clear_line(self) -> None:
        self._console.control(
            Control((ControlType.ERASE_IN_LINE, _ERASE_LINE)),
            Control.move_to_column(0),
        )

    def clear_to_end_of_line(self) -> None:
        self._console.control(Control((ControlType.ERASE_IN_LINE, _ERASE_TO_END)))

    def show_cursor(self, show: bool = True) -> None:
        self._console.control(Control.show_cursor(show))

    def write(self, text: str, style: str | None = None) -> None:
        """Write *text* without a trailing newline, wrapping, or markup."""
        self._console.print(text, style=style, end="", markup=False, soft_wrap=True)

    def newline(self) -> None:
        self._console.print()

    def flush(self) -> None:
        self._console.file.flush()


def create_terminal(
    file: IO[str] | None = None,
    *,
    no_color: bool = False,
    width: int | None = None,
) -> Terminal:
    """Create a :class:`Terminal` writing to *file* (default: stdout).

    The console is always treated as a terminal: the screen is
    cursor-addressed, and Rich drops control codes for any stream it does
    not detect as a TTY.

    Args:
        file: Output stream; tests pass a StringIO.
        no_color: Emit no style codes at all (cursor control is unaffected).
        width: Override terminal width.
    """
    console = Console(
        file=file or sys.stdout,
        theme=POMO_THEME,
        force_terminal=True,
        color_system=None if no_color else "auto",
        no_color=no_color,
        highlight=False,
        width=width,
    )
    return Terminal(console)
