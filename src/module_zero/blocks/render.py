"""Render block sources into the exact text written between the markers."""

from __future__ import annotations

import os
import re

from module_zero.blocks import NEWLINE_TOKEN
from module_zero.blocks.styles import Delimiters

_LINE_ENDING = re.compile(r"\r?\n")


def detect_newline(text: str) -> str | None:
    """Return the dominant line ending of ``text``, or None if it has none.

    CRLF wins only when it strictly outnumbers bare LF.
    """
    crlf = text.count("\r\n")
    lf = text.count("\n") - crlf
    if crlf == 0 and lf == 0:
        return None
    return "\r\n" if crlf > lf else "\n"


def resolve_newline(host_text: str, source_text: str = "") -> str:
    """Line ending for generated text: the host file's, else the source's, else the platform's."""
    return detect_newline(host_text) or detect_newline(source_text) or os.linesep


def render_block(source: str, delimiters: Delimiters, newline: str) -> str:
    """Render one block.

    Layout, joined by ``newline``: opening marker, warning header, the
    source content, closing marker, and a final line ending. The
    ``{newLine}`` token and every line ending inside the source are written
    as ``newline``.
    """
    body = _LINE_ENDING.sub(newline, source).replace(NEWLINE_TOKEN, newline)
    return newline.join([delimiters.open, delimiters.header, body, delimiters.close, ""])


def render_blocks(sources: list[str], delimiters: Delimiters, newline: str) -> list[str]:
    return [render_block(source, delimiters, newline) for source in sources]


def join_blocks(rendered: list[str], newline: str) -> str:
    """Concatenate rendered blocks, one blank line between each."""
    return newline.join(rendered)
