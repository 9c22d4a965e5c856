"""Terminal capability and geometry queries."""

from __future__ import annotations

import os
import sys
from contextlib import AbstractContextManager
from typing import TextIO

from blessed import Terminal

from .errors import TerminalSizeError


class TerminalProbe:
    """Answer questions about the output terminal.

    Geometry comes straight from the output descriptor so that a failed query
    is reported instead of silently replaced by a default size.
    """

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stdout
        self.terminal = Terminal(stream=self.stream)

    @property
    def is_interactive(self) -> bool:
        """Whether output goes to an interactive terminal."""
        return self.terminal.is_a_tty

    def size(self) -> tuple[int, int]:
        """Return (columns, rows) of the terminal.

        :raises TerminalSizeError: If the size cannot be queried
        """
        try:
            size = os.get_terminal_size(self.stream.fileno())
        except (OSError, ValueError, AttributeError) as e:
            raise TerminalSizeError(f"Error while getting size of the terminal: {e}") from e
        return size.columns, size.lines

    def hidden_cursor(self) -> AbstractContextManager:
        """Context manager hiding the cursor until exit."""
        return self.terminal.hidden_cursor()


__all__ = ["TerminalProbe"]
