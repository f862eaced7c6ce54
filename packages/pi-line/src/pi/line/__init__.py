"""pi-line: grapheme-aware single-line editing core with history and a kill buffer."""

# Edit commands
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
    insert_text,
)

# Engine
from pi.line.engine import EditEngine, EngineOptions

# History and kill buffer
from pi.line.history import HISTORY_SIZE, History
from pi.line.kill_ring import KillBuffer

# Key translation
from pi.line.keymap import commands_for_key, extract_keys, session_action, split_keys

# Interactive loop
from pi.line.repl import LineEditor, LineIO, ProcessTerminal, StreamIO

# Line buffer
from pi.line.text_buffer import TextBuffer

# Utilities
from pi.line.utils import byte_length, display_width, grapheme_boundaries, grapheme_indices

__all__ = [
    # Commands
    "AppendToHistory",
    "Backspace",
    "Clear",
    "CutToEnd",
    "Delete",
    "EditCommand",
    "InsertChar",
    "InsertCutBuffer",
    "MoveLeft",
    "MoveRight",
    "MoveToEnd",
    "MoveToStart",
    "MoveWordLeft",
    "MoveWordRight",
    "NextHistory",
    "PreviousHistory",
    "insert_text",
    # Engine
    "EditEngine",
    "EngineOptions",
    # History and kill buffer
    "HISTORY_SIZE",
    "History",
    "KillBuffer",
    # Keymap
    "commands_for_key",
    "extract_keys",
    "session_action",
    "split_keys",
    # Interactive loop
    "LineEditor",
    "LineIO",
    "ProcessTerminal",
    "StreamIO",
    # Line buffer
    "TextBuffer",
    # Utilities
    "byte_length",
    "display_width",
    "grapheme_boundaries",
    "grapheme_indices",
]
