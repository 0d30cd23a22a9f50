# reify/entries/load.py

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping, Optional

import yaml

from reify.entries.paths import str_list
from reify.entries.types import Entry
from reify.errors import DocumentError, MissingCmd, MissingName


def _str_or_none(node: Mapping[str, Any], key: str) -> Optional[str]:
    value = node.get(key)
    return value if isinstance(value, str) else None


def entry_from_node(
    node: Mapping[str, Any],
    *,
    index: Optional[int] = None,
    source: Optional[str] = None,
) -> Entry:
    """
    Build an Entry from one parsed document mapping.

    name, cmd  required strings (MissingName / MissingCmd otherwise)
    sha        optional string
    files, required_files
               string or list of strings; anything else reads as []
    """
    name = _str_or_none(node, "name")
    if name is None:
        raise MissingName(index, source)

    cmd = _str_or_none(node, "cmd")
    if cmd is None:
        raise MissingCmd(index, source)

    return Entry(
        name=name,
        cmd=cmd,
        required_files=str_list(node.get("required_files")),
        files=str_list(node.get("files")),
        sha=_str_or_none(node, "sha"),
    )


def parse_entries(text: str, source: Optional[str] = None) -> List[Entry]:
    """
    Parse a YAML document holding a list of entry mappings.

    Read with BaseLoader: every scalar stays a string, so `name: 2024`
    or `sha: 123` keep their text instead of turning into numbers.
    """
    where = f"{source}: " if source else ""
    try:
        doc = yaml.load(text, Loader=yaml.BaseLoader)
    except yaml.YAMLError as e:
        raise DocumentError(f"{where}invalid YAML: {e}") from e

    if doc is None:
        return []
    if not isinstance(doc, list):
        raise DocumentError(f"{where}expected a list of entries, got {type(doc).__name__}")

    entries: List[Entry] = []
    for i, node in enumerate(doc):
        if not isinstance(node, dict):
            raise DocumentError(f"{where}entry {i}: expected a mapping, got {type(node).__name__}")
        entries.append(entry_from_node(node, index=i, source=source))
    return entries


def load_entries(path: Path) -> List[Entry]:
    path = Path(path).expanduser()
    if not path.is_file():
        raise FileNotFoundError(path)
    return parse_entries(path.read_text(encoding="utf-8"), source=str(path))
