# reify/entries/dump.py

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import List, Optional, Sequence

import yaml

from reify.entries.types import Entry

# characters a literal block cannot carry verbatim: the YAML reader either
# treats them as line breaks or rejects them outright
_NOT_BLOCK_SAFE = re.compile(
    "[^\x09\x0A\x20-\x7E\xA0-\u2027\u202A-\uD7FF\uE000-\uFEFE\uFF00-\uFFFD\U00010000-\U0010FFFF]"
)


def _quoted(value: str) -> str:
    text = yaml.safe_dump(value, default_style='"', allow_unicode=True, width=float("inf"))
    return text.removesuffix("...\n").rstrip("\n")


def _scalar(value: str) -> str:
    """
    Plain scalar when YAML reads it back unchanged, double-quoted otherwise.
    """
    if value and "\n" not in value and value == value.strip():
        try:
            if yaml.safe_load(f"k: {value}") == {"k": value}:
                return value
        except yaml.YAMLError:
            pass
    return _quoted(value)


def _block_header(cmd: str) -> str:
    header = "|"
    # content starting with whitespace needs an explicit indentation indicator
    if cmd[:1] in (" ", "\t") or cmd.startswith("\n"):
        header += "2"
    if not cmd.endswith("\n"):
        header += "-"
    elif cmd.endswith("\n\n") or not cmd.strip("\n"):
        header += "+"
    return header


def _cmd_lines(cmd: str) -> List[str]:
    if _NOT_BLOCK_SAFE.search(cmd):
        return [f"  cmd: {_quoted(cmd)}"]

    lines = [f"  cmd: {_block_header(cmd)}"]
    if not cmd:
        return lines

    body = cmd.split("\n")
    if cmd.endswith("\n"):
        body.pop()
    lines.extend(f"    {line}" if line else "" for line in body)
    return lines


def dump_entry(entry: Entry, new_sha: Optional[str] = None) -> str:
    """
    Render one entry as a YAML list item.

    Field order: name, cmd, required_files, files, sha. Empty name and
    lists are omitted; sha is new_sha if given, else the stored one, and
    omitted when neither exists. cmd is a literal block unless it holds
    characters a block cannot represent, in which case it is double-quoted.
    """
    lines = ["-"]

    if entry.name:
        lines.append(f"  name: {_scalar(entry.name)}")

    lines.extend(_cmd_lines(entry.cmd))

    if entry.required_files:
        lines.append("  required_files:")
        lines.extend(f"  - {_scalar(p)}" for p in entry.required_files)

    if entry.files:
        lines.append("  files:")
        lines.extend(f"  - {_scalar(p)}" for p in entry.files)

    sha = new_sha if new_sha is not None else entry.sha
    if sha is not None:
        lines.append(f"  sha: {_scalar(sha)}")

    return "\n".join(lines) + "\n"


def dump_entries(entries: Sequence[Entry], new_shas: Optional[Sequence[Optional[str]]] = None) -> str:
    if new_shas is None:
        new_shas = [None] * len(entries)
    if len(new_shas) != len(entries):
        raise ValueError("new_shas must match entries in length")
    return "".join(dump_entry(e, s) for e, s in zip(entries, new_shas))


def write_entries(path: Path, text: str) -> None:
    """Replace path with text atomically (temp file in the same directory)."""
    path = Path(path)
    tmp = path.with_name(f".{path.name}.tmp")
    try:
        with tmp.open("w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        tmp.replace(path)
    finally:
        if tmp.exists():
            tmp.unlink()
