"""Fixed translation of raw terminal input into edit command batches."""

from __future__ import annotations

import re
from typing import Literal

from pi.line.commands import (
    Backspace,
    Clear,
    CutToEnd,
    Delete,
    EditCommand,
    InsertCutBuffer,
    MoveLeft,
    MoveRight,
    MoveToEnd,
    MoveToStart,
    MoveWordLeft,
    MoveWordRight,
    NextHistory,
    PreviousHistory,
    insert_text,
)
from pi.line.utils import is_control_char

ESC = "\x1b"

# CSI: ESC [ <params> <final>, SS3: ESC O <final>
_ESCAPE_SEQUENCE_RE = re.compile(r"\x1b(?:\[[0-9;?]*[~A-Za-z]|O[A-Za-z])")
# A sequence cut off by the end of a read: ESC, ESC [ <params>, or ESC O
_INCOMPLETE_ESCAPE_RE = re.compile(r"\x1b(?:\[[0-9;?]*|O)?\Z")

EditorAction = Literal[
    "cursorLeft",
    "cursorRight",
    "cursorWordLeft",
    "cursorWordRight",
    "cursorLineStart",
    "cursorLineEnd",
    "historyPrevious",
    "historyNext",
    "deleteCharBackward",
    "deleteCharForward",
    "deleteToLineStart",
    "deleteToLineEnd",
    "yank",
    "clear",
]

SessionAction = Literal["submit", "interrupt", "eof"]

KEY_SEQUENCES: dict[str, EditorAction] = {
    # Cursor movement
    "\x1b[D": "cursorLeft",
    "\x1bOD": "cursorLeft",
    "\x02": "cursorLeft",  # ctrl+b
    "\x1b[C": "cursorRight",
    "\x1bOC": "cursorRight",
    "\x06": "cursorRight",  # ctrl+f
    "\x1b[1;5D": "cursorWordLeft",  # ctrl+left
    "\x1b[1;3D": "cursorWordLeft",  # alt+left
    "\x1bb": "cursorWordLeft",  # alt+b
    "\x1b[1;5C": "cursorWordRight",
    "\x1b[1;3C": "cursorWordRight",
    "\x1bf": "cursorWordRight",
    "\x1b[H": "cursorLineStart",
    "\x1bOH": "cursorLineStart",
    "\x1b[1~": "cursorLineStart",
    "\x1b[7~": "cursorLineStart",
    "\x01": "cursorLineStart",  # ctrl+a
    "\x1b[F": "cursorLineEnd",
    "\x1bOF": "cursorLineEnd",
    "\x1b[4~": "cursorLineEnd",
    "\x1b[8~": "cursorLineEnd",
    "\x05": "cursorLineEnd",  # ctrl+e
    # History
    "\x1b[A": "historyPrevious",
    "\x1bOA": "historyPrevious",
    "\x10": "historyPrevious",  # ctrl+p
    "\x1b[B": "historyNext",
    "\x1bOB": "historyNext",
    "\x0e": "historyNext",  # ctrl+n
    # Deletion
    "\x7f": "deleteCharBackward",
    "\x08": "deleteCharBackward",
    "\x1b[3~": "deleteCharForward",
    "\x04": "deleteCharForward",  # ctrl+d
    "\x15": "deleteToLineStart",  # ctrl+u
    "\x0b": "deleteToLineEnd",  # ctrl+k
    # Kill buffer
    "\x19": "yank",  # ctrl+y
    "\x0c": "clear",  # ctrl+l
}

ACTION_COMMANDS: dict[EditorAction, tuple[EditCommand, ...]] = {
    "cursorLeft": (MoveLeft(),),
    "cursorRight": (MoveRight(),),
    "cursorWordLeft": (MoveWordLeft(),),
    "cursorWordRight": (MoveWordRight(),),
    "cursorLineStart": (MoveToStart(),),
    "cursorLineEnd": (MoveToEnd(),),
    "historyPrevious": (PreviousHistory(),),
    "historyNext": (NextHistory(),),
    "deleteCharBackward": (Backspace(),),
    "deleteCharForward": (Delete(),),
    # Cuts the whole line: the kill buffer gets everything, not just the prefix
    "deleteToLineStart": (MoveToStart(), CutToEnd()),
    "deleteToLineEnd": (CutToEnd(),),
    "yank": (InsertCutBuffer(),),
    "clear": (Clear(),),
}


def split_keys(data: str) -> list[str]:
    """Split a chunk of raw input into individual keys.

    Escape sequences and control characters become one key each; runs of
    printable text (a paste, or fast typing) stay together.
    """
    keys: list[str] = []
    text = ""
    i = 0
    while i < len(data):
        ch = data[i]
        if ch == "\t" or not is_control_char(ch):
            text += ch
            i += 1
            continue

        if text:
            keys.append(text)
            text = ""

        if ch == ESC:
            match = _ESCAPE_SEQUENCE_RE.match(data, i)
            if match:
                keys.append(match.group())
                i = match.end()
                continue
            # Meta key: ESC followed by a single printable character
            if i + 1 < len(data) and not is_control_char(data[i + 1]):
                keys.append(data[i : i + 2])
                i += 2
                continue

        keys.append(ch)
        i += 1

    if text:
        keys.append(text)
    return keys


def extract_keys(buffer: str) -> tuple[list[str], str]:
    """Split accumulated input into complete keys.

    Returns (keys, remainder). The remainder is an escape sequence cut off at
    the end of *buffer*; prepend it to the next read.
    """
    match = _INCOMPLETE_ESCAPE_RE.search(buffer)
    if match is None:
        return split_keys(buffer), ""
    return split_keys(buffer[: match.start()]), buffer[match.start() :]


def session_action(key: str, *, line_empty: bool) -> SessionAction | None:
    """Return the session-level action for *key*, if it has one."""
    if key in ("\r", "\n"):
        return "submit"
    if key == "\x03":
        return "interrupt"
    if key == "\x04" and line_empty:
        return "eof"
    return None


def commands_for_key(key: str) -> list[EditCommand]:
    """Translate one key into the edit commands it stands for.

    Unbound escape sequences and control characters translate to nothing.
    """
    action = KEY_SEQUENCES.get(key)
    if action is not None:
        return list(ACTION_COMMANDS[action])
    if key.startswith(ESC) or any(is_control_char(ch) for ch in key if ch != "\t"):
        return []
    return insert_text(key)
