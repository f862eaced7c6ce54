"""Single-slot register for Emacs-style kill/yank operations."""

from __future__ import annotations

from pi.line.utils import byte_length


class KillBuffer:
    """Holds the most recently killed text.

    Each kill replaces the previous contents; nothing accumulates.
    The text survives history browsing and any number of yanks.
    """

    def __init__(self) -> None:
        self._text: str = ""

    def push(self, text: str) -> None:
        """Overwrite the slot with *text*. Empty kills are ignored."""
        if not text:
            return
        self._text = text

    def peek(self) -> str:
        """Return the killed text without clearing it."""
        return self._text

    @property
    def length(self) -> int:
        """Length of the killed text in UTF-8 bytes, like ``TextBuffer.length``."""
        return byte_length(self._text)
