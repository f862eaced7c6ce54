"""Text utilities for the line editor: grapheme segmentation, UTF-8 offsets, width.

Cursor positions throughout ``pi.line`` are byte offsets into the UTF-8
encoding of the line. The helpers here translate between those offsets and
Python's code-point indexed strings, and measure how wide a piece of text is
when drawn in a terminal.
"""

from __future__ import annotations

import unicodedata

import grapheme
import wcwidth as _wcwidth

ENCODING = "utf-8"

# Only space and tab separate words; punctuation does not.
WORD_SEPARATORS = (" ", "\t")


# ---------------------------------------------------------------------------
# Grapheme segmenter wrapper (mirrors Intl.Segmenter API)
# ---------------------------------------------------------------------------


class _GraphemeSegmenter:
    """Thin wrapper around ``grapheme.graphemes`` matching the Intl.Segmenter API."""

    @staticmethod
    def segment(text: str) -> list[str]:
        return list(grapheme.graphemes(text))


def get_segmenter() -> _GraphemeSegmenter:
    """Return a grapheme segmenter instance."""
    return _GraphemeSegmenter()


_segmenter = get_segmenter()


# ---------------------------------------------------------------------------
# UTF-8 offsets
# ---------------------------------------------------------------------------


def byte_length(text: str) -> int:
    """Return the length of *text* in UTF-8 bytes."""
    return len(text.encode(ENCODING))


def grapheme_indices(text: str) -> list[tuple[int, str]]:
    """Return ``(byte_offset, cluster)`` for every grapheme cluster in *text*."""
    indices: list[tuple[int, str]] = []
    offset = 0
    for cluster in _segmenter.segment(text):
        indices.append((offset, cluster))
        offset += byte_length(cluster)
    return indices


def grapheme_boundaries(text: str) -> list[int]:
    """Return every cluster boundary of *text*, including 0 and the byte length."""
    boundaries = [offset for offset, _ in grapheme_indices(text)]
    boundaries.append(byte_length(text))
    return boundaries


def is_char_boundary(raw: bytes, pos: int) -> bool:
    """Return ``True`` if *pos* does not fall inside a multi-byte scalar value."""
    if pos == 0 or pos == len(raw):
        return True
    if pos < 0 or pos > len(raw):
        return False
    # UTF-8 continuation bytes look like 0b10xxxxxx
    return (raw[pos] & 0xC0) != 0x80


def char_index(text: str, pos: int) -> int:
    """Translate byte offset *pos* into a code point index of *text*.

    Raises:
        IndexError: *pos* lies outside ``[0, byte_length(text)]``.
        ValueError: *pos* splits a multi-byte scalar value.
    """
    raw = text.encode(ENCODING)
    if pos < 0 or pos > len(raw):
        raise IndexError(f"byte offset {pos} out of range for length {len(raw)}")
    if not is_char_boundary(raw, pos):
        raise ValueError(f"byte offset {pos} is not a char boundary")
    return len(raw[:pos].decode(ENCODING))


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------


def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Rules:
    1. Zero-width characters (control, combining marks, etc.) -> 0
    2. Emoji (multi-codepoint, contains VS16 U+FE0F, ZWJ sequences, etc.) -> 2
    3. Otherwise delegate to wcwidth for the first meaningful codepoint.
    """
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):  # VS16, ZWJ
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF:  # Skin tone modifiers
            return 2
        if 0x1F1E6 <= cp <= 0x1F1FF:  # Regional indicators
            return 2

    first_cp = ord(g[0])
    if first_cp >= 0x1F000:
        return 2

    cat = unicodedata.category(g[0])
    if cat.startswith("M") or cat == "Cf":
        return 0

    return max(_wcwidth.wcwidth(g[0]), 0)


def display_width(text: str) -> int:
    """Calculate the terminal width of *text*, counting tabs as 3 columns."""
    if not text:
        return 0
    text = text.replace("\t", "   ")
    if text.isascii() and text.isprintable():
        return len(text)
    return sum(_grapheme_width(g) for g in _segmenter.segment(text))


# ---------------------------------------------------------------------------
# Character classification
# ---------------------------------------------------------------------------


def is_word_separator(char: str) -> bool:
    """Return ``True`` if *char* separates words (space or tab)."""
    return char in WORD_SEPARATORS


def is_control_char(char: str) -> bool:
    """Return ``True`` for C0/C1 control characters and DEL."""
    cp = ord(char)
    return cp < 0x20 or cp == 0x7F or 0x80 <= cp <= 0x9F
