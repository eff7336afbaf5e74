"""Enumerate shared files inside the base package."""

from pathlib import Path


def discover_files(root: Path, patterns: list[str]) -> list[str]:
    """Find every file under ``root`` matching any of the glob patterns.

    Dotfiles are included. Directories are not returned.

    Args:
        root: Directory to scan (``<base>/files`` or ``<base>/blocks``).
        patterns: Glob patterns relative to ``root``.

    Returns:
        Sorted, de-duplicated POSIX paths relative to ``root``.
    """
    if not root.is_dir():
        return []

    found: set[str] = set()
    for pattern in patterns:
        for path in root.glob(pattern):
            if path.is_file():
                found.add(path.relative_to(root).as_posix())
    return sorted(found)
