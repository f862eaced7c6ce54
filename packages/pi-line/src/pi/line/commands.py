"""Edit commands understood by :class:`pi.line.engine.EditEngine`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


# --- Cursor motion ---


@dataclass(frozen=True)
class MoveToStart:
    pass


@dataclass(frozen=True)
class MoveToEnd:
    pass


@dataclass(frozen=True)
class MoveLeft:
    pass


@dataclass(frozen=True)
class MoveRight:
    pass


@dataclass(frozen=True)
class MoveWordLeft:
    pass


@dataclass(frozen=True)
class MoveWordRight:
    pass


# --- Editing ---


@dataclass(frozen=True)
class InsertChar:
    """Insert one character at the cursor. The cursor does not advance."""

    char: str

    def __post_init__(self) -> None:
        if len(self.char) != 1:
            raise ValueError(f"InsertChar takes a single character, got {self.char!r}")


@dataclass(frozen=True)
class Backspace:
    pass


@dataclass(frozen=True)
class Delete:
    pass


@dataclass(frozen=True)
class Clear:
    pass


# --- History ---


@dataclass(frozen=True)
class AppendToHistory:
    pass


@dataclass(frozen=True)
class PreviousHistory:
    pass


@dataclass(frozen=True)
class NextHistory:
    pass


# --- Kill buffer ---


@dataclass(frozen=True)
class CutToEnd:
    pass


@dataclass(frozen=True)
class InsertCutBuffer:
    pass


EditCommand = Union[
    MoveToStart,
    MoveToEnd,
    MoveLeft,
    MoveRight,
    MoveWordLeft,
    MoveWordRight,
    InsertChar,
    Backspace,
    Delete,
    AppendToHistory,
    PreviousHistory,
    NextHistory,
    Clear,
    CutToEnd,
    InsertCutBuffer,
]


def insert_text(text: str) -> list[EditCommand]:
    """Commands that type *text* at the cursor, advancing past each character."""
    batch: list[EditCommand] = []
    for ch in text:
        batch.append(InsertChar(ch))
        batch.append(MoveRight())
    return batch
