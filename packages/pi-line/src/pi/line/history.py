"""Bounded command history with up/down browsing."""

from __future__ import annotations

from collections import deque

HISTORY_SIZE = 100


class History:
    """Previously committed lines, most recent first.

    ``cursor`` is ``-1`` while the live line is shown; otherwise it is the
    index of the entry being displayed. The live line is saved when browsing
    starts and handed back when browsing steps past the newest entry.
    """

    def __init__(self, capacity: int = HISTORY_SIZE) -> None:
        if capacity < 1:
            raise ValueError(f"history capacity must be positive, got {capacity}")
        self._entries: deque[str] = deque(maxlen=capacity)
        self._cursor = -1
        self._saved_input = ""
        self.has_history = False

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 0

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, line: str) -> bool:
        """Record *line* as the newest entry. Empty lines are skipped."""
        if not line:
            return False
        # deque(maxlen=...) drops the oldest entry from the right end
        self._entries.appendleft(line)
        self.has_history = True
        self.reset()
        return True

    def reset(self) -> None:
        """Stop browsing."""
        self._cursor = -1
        self._saved_input = ""

    def previous(self, current_input: str) -> str | None:
        """Step to an older entry. Returns its text, or ``None`` at the oldest."""
        if not self.has_history or self._cursor >= len(self._entries) - 1:
            return None
        if self._cursor == -1:
            self._saved_input = current_input
        self._cursor += 1
        return self._entries[self._cursor]

    def next(self) -> str | None:
        """Step to a newer entry, or back to the saved live line.

        Returns ``None`` when not browsing.
        """
        if self._cursor < 0:
            return None
        self._cursor -= 1
        if self._cursor >= 0:
            return self._entries[self._cursor]
        result = self._saved_input
        self.reset()
        return result
