"""Single line of text plus an insertion point addressed in UTF-8 bytes."""

from __future__ import annotations

import re

from pi.line.utils import (
    ENCODING,
    byte_length,
    char_index,
    display_width,
    grapheme_boundaries,
    grapheme_indices,
)

_WORD_SEPARATOR_RE = re.compile(rb"[ \t]")


class TextBuffer:
    """Line content and cursor.

    The cursor is a byte offset into the UTF-8 encoding of the content and
    sits on a grapheme cluster boundary after every cursor motion. The raw
    mutation primitives (``insert_*``, ``remove_*``, ``truncate_at``, ``clear``)
    never move the cursor; callers reposition it themselves.
    """

    def __init__(self) -> None:
        self._buffer: str = ""
        self._cursor: int = 0

    # -- queries ------------------------------------------------------------

    @property
    def content(self) -> str:
        return self._buffer

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def length(self) -> int:
        """Length of the content in UTF-8 bytes."""
        return byte_length(self._buffer)

    @property
    def is_empty(self) -> bool:
        return not self._buffer

    def suffix(self, pos: int) -> str:
        """Return the content from byte offset *pos* to the end."""
        return self._buffer[char_index(self._buffer, pos) :]

    def grapheme_at(self, pos: int) -> str:
        """Return the grapheme cluster starting at *pos*, or ``""`` at the end."""
        for offset, cluster in grapheme_indices(self._buffer):
            if offset == pos:
                return cluster
        return ""

    def grapheme_before(self, pos: int) -> str:
        """Return the grapheme cluster ending at *pos*, or ``""`` at the start."""
        for offset, cluster in grapheme_indices(self._buffer):
            if offset + byte_length(cluster) == pos:
                return cluster
        return ""

    def display_width(self, pos: int | None = None) -> int:
        """Terminal columns occupied by the content before *pos* (default: cursor)."""
        end = self._cursor if pos is None else pos
        return display_width(self._buffer[: char_index(self._buffer, end)])

    # -- cursor motion ------------------------------------------------------

    def set_cursor(self, pos: int) -> None:
        """Place the cursor at *pos* without validating it."""
        self._cursor = pos

    def move_to_start(self) -> None:
        self._cursor = 0

    def move_to_end(self) -> None:
        self._cursor = self.length

    def step_right(self) -> None:
        """Advance to the next grapheme boundary, stopping at the end."""
        boundaries = grapheme_boundaries(self._buffer)
        self._cursor = next((b for b in boundaries if b > self._cursor), boundaries[-1])

    def step_left(self) -> None:
        """Retreat to the previous grapheme boundary, stopping at the start."""
        boundaries = grapheme_boundaries(self._buffer)
        self._cursor = max((b for b in boundaries if b < self._cursor), default=0)

    def word_left(self) -> None:
        """Move to the start of the word before the cursor.

        The target is one past the closest space or tab lying strictly before
        ``cursor - 1``; with no such separator the cursor goes to 0.
        """
        if self._cursor == 0:
            return
        raw = self._buffer.encode(ENCODING)
        target = 0
        for match in reversed(list(_WORD_SEPARATOR_RE.finditer(raw))):
            if match.start() < self._cursor - 1:
                target = match.start() + 1
                break
        self._cursor = self._snap_to_boundary(target)

    def word_right(self) -> None:
        """Move to one past the first space or tab strictly after the cursor."""
        raw = self._buffer.encode(ENCODING)
        target = len(raw)
        for match in _WORD_SEPARATOR_RE.finditer(raw):
            if match.start() > self._cursor:
                target = match.start() + 1
                break
        self._cursor = self._snap_to_boundary(target)

    def _snap_to_boundary(self, pos: int) -> int:
        # A separator can start a combined cluster (space + combining mark).
        return max(b for b in grapheme_boundaries(self._buffer) if b <= pos)

    # -- mutation -----------------------------------------------------------

    def insert_char(self, pos: int, ch: str) -> None:
        """Insert the single scalar value *ch* at byte offset *pos*."""
        if len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        self.insert_text(pos, ch)

    def insert_text(self, pos: int, text: str) -> None:
        """Insert *text* at byte offset *pos*."""
        idx = char_index(self._buffer, pos)
        self._buffer = self._buffer[:idx] + text + self._buffer[idx:]

    def remove_char(self, pos: int) -> str:
        """Remove and return the scalar value starting at byte offset *pos*."""
        idx = char_index(self._buffer, pos)
        if idx >= len(self._buffer):
            raise IndexError(f"no character at byte offset {pos}")
        removed = self._buffer[idx]
        self._buffer = self._buffer[:idx] + self._buffer[idx + 1 :]
        return removed

    def remove_grapheme(self, pos: int) -> str:
        """Remove and return the grapheme cluster starting at byte offset *pos*."""
        idx = char_index(self._buffer, pos)
        if idx >= len(self._buffer):
            raise IndexError(f"no grapheme at byte offset {pos}")
        cluster = self.grapheme_at(pos) or self._buffer[idx]
        self._buffer = self._buffer[:idx] + self._buffer[idx + len(cluster) :]
        return cluster

    def pop_last(self) -> str | None:
        """Remove the last scalar value and move the cursor to the new end."""
        removed: str | None = None
        if self._buffer:
            removed = self._buffer[-1]
            self._buffer = self._buffer[:-1]
        self._cursor = self.length
        return removed

    def truncate_at(self, pos: int) -> None:
        """Discard everything from byte offset *pos* to the end."""
        self._buffer = self._buffer[: char_index(self._buffer, pos)]

    def clear(self) -> None:
        """Empty the content. The cursor is left where it was."""
        self._buffer = ""

    def set_buffer(self, text: str) -> None:
        """Replace the content and move the cursor to its end."""
        self._buffer = text
        self._cursor = self.length
