"""Interactive prompt loop driving an :class:`EditEngine` from a terminal.

Provides a ``LineIO`` protocol, a raw-mode ``ProcessTerminal`` backed by the
process's stdin/stdout, a ``StreamIO`` for non-interactive streams, and the
``LineEditor`` that reads keys, applies them and repaints the line.
"""

from __future__ import annotations

import codecs
import logging
import os
import sys
import termios
import tty
from typing import Protocol, TextIO

from pi.line.commands import AppendToHistory, Clear
from pi.line.engine import EditEngine
from pi.line.keymap import commands_for_key, extract_keys, session_action
from pi.line.utils import display_width

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_CLEAR_TO_EOL = "\x1b[K"
_CURSOR_FORWARD_FMT = "\x1b[{}C"

EXIT_COMMAND = "exit"


class LineIO(Protocol):
    """Where keys come from and where the line is drawn."""

    def read(self) -> str:
        """Return the next chunk of input, or ``""`` at end of input."""
        ...

    def write(self, data: str) -> None: ...


class ProcessTerminal:
    """Raw-mode terminal on ``sys.stdin``/``sys.stdout``.

    Use as a context manager; the original ``termios`` attributes are
    restored on exit.
    """

    def __init__(self) -> None:
        self._fd = sys.stdin.fileno()
        self._original_termios: list | None = None
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def __enter__(self) -> ProcessTerminal:
        self._original_termios = termios.tcgetattr(self._fd)
        tty.setraw(self._fd)
        return self

    def __exit__(self, *exc: object) -> None:
        if self._original_termios is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._original_termios)
            self._original_termios = None

    def read(self) -> str:
        # A multi-byte character can straddle two reads; the decoder holds the rest.
        while True:
            chunk = os.read(self._fd, 1024)
            if not chunk:
                return ""
            data = self._decoder.decode(chunk)
            if data:
                return data

    def write(self, data: str) -> None:
        sys.stdout.write(data)
        sys.stdout.flush()


class StreamIO:
    """Line editing over plain text streams (pipes, test harnesses)."""

    def __init__(self, stdin: TextIO, stdout: TextIO) -> None:
        self._stdin = stdin
        self._stdout = stdout

    def read(self) -> str:
        return self._stdin.read(1024)

    def write(self, data: str) -> None:
        self._stdout.write(data)
        self._stdout.flush()


class LineEditor:
    """Prompt, read keys, apply them to the engine and repaint after each key."""

    def __init__(
        self,
        io: LineIO,
        prompt: str = "> ",
        engine: EditEngine | None = None,
    ) -> None:
        self._io = io
        self.prompt = prompt
        self.engine = engine or EditEngine()
        self._pending: list[str] = []
        self._partial = ""
        self._last_key = ""

    def _next_key(self) -> str:
        while True:
            while not self._pending:
                data = self._io.read()
                if not data:
                    raise EOFError
                keys, self._partial = extract_keys(self._partial + data)
                self._pending.extend(keys)
            key = self._pending.pop(0)
            # CRLF line endings submit once
            skip = key == "\n" and self._last_key == "\r"
            self._last_key = key
            if not skip:
                return key

    def read_line(self) -> str:
        """Edit one line and return it when the user presses Enter.

        Raises:
            EOFError: end of input, or Ctrl-D on an empty line.
            KeyboardInterrupt: Ctrl-C.
        """
        engine = self.engine
        self.repaint()
        while True:
            key = self._next_key()
            action = session_action(key, line_empty=engine.is_empty)
            if action == "submit":
                line = engine.content
                self._io.write("\r\n")
                engine.run_edit_commands([AppendToHistory(), Clear()])
                return line
            if action == "interrupt":
                self._io.write("\r\n")
                raise KeyboardInterrupt
            if action == "eof":
                self._io.write("\r\n")
                raise EOFError

            commands = commands_for_key(key)
            if not commands:
                logger.debug("unbound key %r", key)
                continue
            engine.run_edit_commands(commands)
            self.repaint()

    def repaint(self) -> None:
        """Redraw prompt and line, then place the terminal cursor."""
        engine = self.engine
        column = display_width(self.prompt) + engine.display_column()
        line = engine.content.replace("\t", "   ")
        out = "\r" + self.prompt + line + _CLEAR_TO_EOL + "\r"
        if column > 0:
            out += _CURSOR_FORWARD_FMT.format(column)
        self._io.write(out)

    def print_message(self, msg: str) -> None:
        self._io.write(msg + "\r\n")

    def run(self) -> None:
        """Echo submitted lines until ``exit``, end of input or interrupt."""
        while True:
            try:
                line = self.read_line()
            except (EOFError, KeyboardInterrupt):
                return
            if line == EXIT_COMMAND:
                return
            self.print_message(f"Buffer: {line}")
