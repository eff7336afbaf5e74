"""Reconcile one file's managed blocks with its block sources.

Given the blocks already in a file (n) and the freshly rendered ones (k):

* n == k >= 1 — replace span i with block i; structure is kept, content drifts.
* n >= 1, n != k — the first span takes all k blocks, the other spans are
  dropped, so no stale generated text survives.
* n == 0 — all k blocks go at the very top of the file, followed by a blank
  line and the untouched original content.
* k == 0 — removal; every span is deleted.

Running twice with the same sources is a no-op the second time.
"""

from __future__ import annotations

import logging
from pathlib import Path

from module_zero.blocks.extract import Span, find_blocks
from module_zero.blocks.render import join_blocks, render_blocks, resolve_newline
from module_zero.blocks.styles import Delimiters

logger = logging.getLogger(__name__)


def _splice(text: str, replacements: list[tuple[Span, str]]) -> str:
    """Rebuild ``text`` with each span swapped for its replacement."""
    parts = []
    pos = 0
    for span, replacement in replacements:
        parts.append(text[pos:span.start])
        parts.append(replacement)
        pos = span.end
    parts.append(text[pos:])
    return "".join(parts)


def reconcile_text(
    text: str,
    sources: list[str],
    delimiters: Delimiters,
    newline: str | None = None,
    source_text: str = "",
) -> str:
    """Return ``text`` with its managed blocks matching ``sources``.

    Args:
        text: Current file content, line endings untranslated.
        sources: Block contents, in order. Empty means strip every block.
        delimiters: Marker lines for this file type.
        newline: Line ending override; detected from ``text`` by default.
        source_text: Raw source content, consulted for the line ending when
            ``text`` has none. Defaults to the joined ``sources``.
    """
    spans = find_blocks(text, delimiters)

    if not sources:
        return _splice(text, [(span, "") for span in spans])

    nl = newline or resolve_newline(text, source_text or "".join(sources))
    rendered = render_blocks(sources, delimiters, nl)

    if spans and len(spans) == len(rendered):
        return _splice(text, list(zip(spans, rendered)))

    combined = join_blocks(rendered, nl)
    if spans:
        logger.debug("block count changed (%d -> %d), collapsing into first block", len(spans), len(rendered))
        replacements = [(spans[0], combined)] + [(span, "") for span in spans[1:]]
        return _splice(text, replacements)

    if not text:
        return combined
    return combined + nl + text


def read_text(path: Path) -> str:
    """Read a file without translating its line endings."""
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def write_text(path: Path, content: str) -> None:
    """Write a file without translating its line endings."""
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


def reconcile_file(
    path: Path,
    sources: list[str],
    delimiters: Delimiters,
    dry_run: bool = False,
    source_text: str = "",
) -> str:
    """Reconcile the blocks in one file on disk.

    The whole file is read, rewritten in memory, then written back in one
    go. Callers must not run two reconciliations on the same path at once.

    Returns:
        One of "created", "updated", "removed", "unchanged", "missing".
    """
    exists = path.exists()
    if not sources and not exists:
        return "missing"

    content = read_text(path) if exists else ""
    new_content = reconcile_text(content, sources, delimiters, source_text=source_text)
    if exists and new_content == content:
        return "unchanged"

    if not dry_run:
        path.parent.mkdir(parents=True, exist_ok=True)
        write_text(path, new_content)

    if not exists:
        return "created"
    return "updated" if sources else "removed"
