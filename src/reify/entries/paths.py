# reify/entries/paths.py

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional


def canonicalize(path: str) -> Optional[Path]:
    """
    Resolve a declared path to its absolute, symlink-free form.

    Returns None when the path does not exist or cannot be resolved
    for any reason (permissions, symlink loop, empty string,
    embedded NUL byte). "~" is not expanded.
    """
    if not path:
        return None
    try:
        return Path(path).resolve(strict=True)
    except (OSError, RuntimeError, ValueError):
        return None


def str_list(value: Any) -> List[str]:
    """
    Read a document value that may be a single string or a list of strings.

    str           -> [value]
    list          -> string elements only, in order
    anything else -> []
    """
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [v for v in value if isinstance(v, str)]
    return []
