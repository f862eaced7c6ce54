"""Edit engine: applies batches of edit commands to a line, its history and kill buffer."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from pi.line.commands import (
    AppendToHistory,
    Backspace,
    Clear,
    CutToEnd,
    Delete,
    EditCommand,
    InsertChar,
    InsertCutBuffer,
    MoveLeft,
    MoveRight,
    MoveToEnd,
    MoveToStart,
    MoveWordLeft,
    MoveWordRight,
    NextHistory,
    PreviousHistory,
)
from pi.line.history import HISTORY_SIZE, History
from pi.line.kill_ring import KillBuffer
from pi.line.text_buffer import TextBuffer
from pi.line.utils import byte_length

logger = logging.getLogger(__name__)


@dataclass
class EngineOptions:
    history_size: int = HISTORY_SIZE


class EditEngine:
    """Owns one line buffer, a single-slot kill buffer and a bounded history.

    Every command is total over the engine state: when its preconditions do
    not hold (empty line, cursor at a boundary, nothing to browse) it does
    nothing.
    """

    def __init__(self, options: EngineOptions | None = None) -> None:
        opts = options or EngineOptions()
        self._buffer = TextBuffer()
        self._kill_buffer = KillBuffer()
        self._history = History(opts.history_size)

    # -- queries ------------------------------------------------------------

    @property
    def content(self) -> str:
        return self._buffer.content

    @property
    def cursor(self) -> int:
        return self._buffer.cursor

    @property
    def length(self) -> int:
        return self._buffer.length

    @property
    def is_empty(self) -> bool:
        return self._buffer.is_empty

    @property
    def has_history(self) -> bool:
        return self._history.has_history

    @property
    def history(self) -> list[str]:
        return self._history.entries

    @property
    def history_cursor(self) -> int:
        return self._history.cursor

    @property
    def kill_buffer(self) -> str:
        return self._kill_buffer.peek()

    def suffix(self, pos: int) -> str:
        return self._buffer.suffix(pos)

    def display_column(self) -> int:
        """Terminal column of the cursor relative to the start of the line."""
        return self._buffer.display_width()

    # -- interpreter --------------------------------------------------------

    def run_edit_commands(self, commands: Iterable[EditCommand]) -> None:
        """Apply *commands* in order, each one completing before the next."""
        for command in commands:
            logger.debug("apply %r at cursor %d", command, self._buffer.cursor)
            self._apply(command)

    def _apply(self, command: EditCommand) -> None:
        buf = self._buffer
        match command:
            case MoveToStart():
                buf.move_to_start()
            case MoveToEnd():
                buf.move_to_end()
            case MoveLeft():
                buf.step_left()
            case MoveRight():
                buf.step_right()
            case MoveWordLeft():
                buf.word_left()
            case MoveWordRight():
                buf.word_right()
            case InsertChar(char=char):
                buf.insert_char(buf.cursor, char)
            case Backspace():
                self._backspace()
            case Delete():
                self._delete()
            case AppendToHistory():
                self._append_to_history()
            case PreviousHistory():
                self._previous_history()
            case NextHistory():
                self._next_history()
            case Clear():
                buf.clear()
                buf.move_to_start()
            case CutToEnd():
                self._cut_to_end()
            case InsertCutBuffer():
                self._insert_cut_buffer()
            case _:
                raise TypeError(f"unknown edit command: {command!r}")

    # -- command implementations -------------------------------------------

    def _backspace(self) -> None:
        buf = self._buffer
        cursor = buf.cursor
        if cursor == buf.length and not buf.is_empty:
            # Pop the whole trailing cluster; pop_last leaves the cursor at the end.
            for _ in buf.grapheme_before(cursor) or buf.content[-1]:
                buf.pop_last()
        elif 0 < cursor < buf.length:
            buf.step_left()
            buf.remove_grapheme(buf.cursor)

    def _delete(self) -> None:
        buf = self._buffer
        if buf.cursor < buf.length:
            buf.remove_grapheme(buf.cursor)

    def _append_to_history(self) -> None:
        if self._history.add(self._buffer.content):
            logger.debug("history: recorded entry, %d stored", len(self._history))

    def _previous_history(self) -> None:
        entry = self._history.previous(self._buffer.content)
        if entry is None:
            return
        logger.debug("history: showing entry %d", self._history.cursor)
        self._buffer.set_buffer(entry)

    def _next_history(self) -> None:
        entry = self._history.next()
        if entry is None:
            return
        logger.debug("history: showing entry %d", self._history.cursor)
        self._buffer.set_buffer(entry)

    def _cut_to_end(self) -> None:
        buf = self._buffer
        tail = buf.suffix(buf.cursor)
        if tail:
            self._kill_buffer.push(tail)
            buf.truncate_at(buf.cursor)

    def _insert_cut_buffer(self) -> None:
        buf = self._buffer
        text = self._kill_buffer.peek()
        buf.insert_text(buf.cursor, text)
        buf.set_cursor(buf.cursor + byte_length(text))
