# reify/entries/hashing.py

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Iterable, List, Optional

from reify.config import Settings
from reify.entries.paths import canonicalize
from reify.entries.types import Entry
from reify.log import get_logger

log = get_logger("hashing")


def hashed_paths(entry: Entry) -> List[Path]:
    """
    Canonical paths that contribute to the fingerprint, sorted.

    files first, then required_files; unresolvable paths are dropped.
    Sorting makes the result independent of declaration order.
    """
    resolved = (canonicalize(p) for p in [*entry.files, *entry.required_files])
    return sorted(p for p in resolved if p is not None)


def _update_from_file(h, path: Path, chunk_size: int) -> None:
    with path.open("rb") as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            h.update(chunk)


def fingerprint(entry: Entry, settings: Optional[Settings] = None) -> str:
    """
    sha256 over the content of every resolvable watched file (sorted by
    canonical path) followed by the command text. Returned as lowercase hex.

    Raises OSError if a resolved file cannot be read.
    """
    settings = settings or Settings.from_env()
    h = hashlib.sha256()
    paths = hashed_paths(entry)
    for path in paths:
        _update_from_file(h, path, settings.chunk_size)
    h.update(entry.cmd.encode("utf-8"))
    digest = h.hexdigest()
    log.debug("%s: fingerprint %s over %d file(s)", entry.display_name, digest, len(paths))
    return digest


def unresolved(paths: Iterable[str]) -> List[str]:
    """Declared paths that do not canonicalize, in declaration order."""
    return [p for p in paths if canonicalize(p) is None]
