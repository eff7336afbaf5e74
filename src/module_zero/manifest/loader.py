"""Load and save the dependent package's package.json."""

import json
import re
from pathlib import Path

from module_zero.errors import ConfigurationError

DEFAULT_INDENT = 2

_INDENT = re.compile(r"^([ \t]+)\S", re.MULTILINE)


def detect_indent(text: str) -> int | str:
    """Indentation of the first indented line: a tab, a space count, or the default."""
    match = _INDENT.search(text)
    if not match:
        return DEFAULT_INDENT
    indent = match.group(1)
    if indent.startswith("\t"):
        return "\t"
    return len(indent)


def load_manifest(path: Path | str) -> dict:
    """Load package.json from disk.

    Args:
        path: Path to the manifest.

    Returns:
        Parsed manifest dict, keys in file order.

    Raises:
        ConfigurationError: If the file is missing or not a JSON object.
    """
    manifest_path = Path(path)
    try:
        with open(manifest_path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"has no parent module ({manifest_path} not found)") from None
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{manifest_path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{manifest_path} is not a JSON object")
    return data


def save_manifest(data: dict, path: Path | str) -> None:
    """Write package.json back to disk.

    The existing file's indentation is kept; a new file gets two spaces.

    Args:
        data: Manifest dict to write. Key order is preserved.
        path: Path to write to.
    """
    manifest_path = Path(path)
    indent: int | str = DEFAULT_INDENT
    if manifest_path.is_file():
        indent = detect_indent(manifest_path.read_text(encoding="utf-8"))
    with open(manifest_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, ensure_ascii=False)
        f.write("\n")
