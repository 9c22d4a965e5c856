"""Tests for terminal queries."""

import io
import os
from unittest.mock import patch

import pytest

from glyphreel.errors import TerminalSizeError
from glyphreel.terminal import TerminalProbe


class TestTerminalProbe:
    """Tests for TerminalProbe."""

    def test_not_interactive(self):
        probe = TerminalProbe(io.StringIO())
        assert not probe.is_interactive

    def test_size_of_non_terminal_fails(self):
        with pytest.raises(TerminalSizeError):
            TerminalProbe(io.StringIO()).size()

    def test_size(self):
        probe = TerminalProbe(io.StringIO())
        with patch.object(probe.stream, "fileno", return_value=1), \
                patch("glyphreel.terminal.os.get_terminal_size", return_value=os.terminal_size((120, 40))):
            assert probe.size() == (120, 40)

    def test_size_oserror(self):
        probe = TerminalProbe(io.StringIO())
        with patch.object(probe.stream, "fileno", return_value=1), \
                patch("glyphreel.terminal.os.get_terminal_size", side_effect=OSError(25, "Inappropriate ioctl")):
            with pytest.raises(TerminalSizeError):
                probe.size()
