"""Locate managed blocks inside a file's raw text.

Matching is a plain lexical scan, not a pattern engine: find an opening
marker, pair it with the nearest following closing marker, resume after the
pair. Adjacent blocks therefore match individually, never as one span from
the first open to the last close.
"""

from __future__ import annotations

from dataclasses import dataclass

from module_zero.blocks import SENTINEL
from module_zero.blocks.styles import Delimiters


@dataclass(frozen=True)
class Span:
    """One matched block.

    ``start:end`` is the region reconciliation replaces. ``body_start:body_end``
    is the block content between the marker lines (and after the warning
    header, when present).
    """

    start: int
    end: int
    body_start: int
    body_end: int
    managed: bool = False

    def body(self, text: str) -> str:
        return text[self.body_start:self.body_end]


def _eol_at(text: str, pos: int) -> int:
    """Length of the line ending starting at ``pos`` (0 if there is none)."""
    if text.startswith("\r\n", pos):
        return 2
    if text.startswith("\n", pos):
        return 1
    return 0


def _eol_before(text: str, pos: int, floor: int) -> int:
    """Length of the line ending ending at ``pos``, not reaching below ``floor``."""
    if pos - 2 >= floor and text[pos - 2:pos] == "\r\n":
        return 2
    if pos - 1 >= floor and text[pos - 1] == "\n":
        return 1
    return 0


def find_blocks(text: str, delimiters: Delimiters) -> list[Span]:
    """Return every managed block in ``text``, in file order.

    A block runs from an opening marker to the nearest closing marker after
    it. The content may contain anything, newlines included, except the
    reserved sentinel character; an opening marker whose nearest close lies
    beyond a sentinel does not match, and the scan moves to the next opening
    marker.

    Blocks carrying the generated warning header were written by module-zero
    with a trailing line ending, and that line ending belongs to the span.

    Returns:
        Non-overlapping spans, empty when the file has no blocks.
    """
    open_marker, close_marker = delimiters.open, delimiters.close
    spans: list[Span] = []
    pos = 0

    while True:
        start = text.find(open_marker, pos)
        if start == -1:
            break
        after_open = start + len(open_marker)
        close_at = text.find(close_marker, after_open)
        if close_at == -1:
            break
        if SENTINEL in text[after_open:close_at]:
            pos = start + 1
            continue

        body_start = after_open + _eol_at(text, after_open)
        managed = False
        if text.startswith(delimiters.header, body_start):
            header_end = body_start + len(delimiters.header)
            eol = _eol_at(text, header_end)
            if eol and header_end + eol <= close_at:
                managed = True
                body_start = header_end + eol
        body_start = min(body_start, close_at)
        body_end = close_at - _eol_before(text, close_at, body_start)

        end = close_at + len(close_marker)
        if managed:
            end += _eol_at(text, end)

        spans.append(Span(start, end, body_start, body_end, managed))
        pos = end

    return spans


def block_bodies(text: str, delimiters: Delimiters) -> list[str]:
    """Return the content of each block in ``text``, markers and header removed."""
    return [span.body(text) for span in find_blocks(text, delimiters)]
