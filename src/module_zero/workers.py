"""Run independent per-path operations concurrently."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_parallel(
    fn: Callable[[str], T],
    paths: Iterable[str],
    max_workers: int | None = None,
) -> tuple[dict[str, T], list[tuple[str, BaseException]]]:
    """Apply ``fn`` to every path, each in its own worker.

    One path failing does not stop the others. Only I/O errors are
    collected; anything else propagates.

    Paths must be distinct; two workers never touch the same file.

    Returns:
        (results, failures), both ordered by path regardless of completion order.
    """
    items = list(paths)
    results: dict[str, T] = {}
    failures: list[tuple[str, BaseException]] = []
    if not items:
        return results, failures

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {executor.submit(fn, p): p for p in items}
        for future in as_completed(futures):
            path = futures[future]
            try:
                results[path] = future.result()
            except (OSError, UnicodeError) as e:
                logger.error("%s: %s", path, e)
                failures.append((path, e))

    ordered = {p: results[p] for p in sorted(results)}
    return ordered, sorted(failures, key=lambda f: f[0])
