from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Entry:
    """
    A single task entry: a shell command plus the files whose content
    decides whether it has to run again.

    Invariants:
    - cmd is the script body handed to the shell
    - required_files must all exist before cmd is run
    - files are hashed when present, ignored when missing
    - sha is the fingerprint persisted by the previous run (None on first run)
    """

    name: str
    cmd: str
    required_files: List[str] = field(default_factory=list)
    files: List[str] = field(default_factory=list)
    sha: Optional[str] = None

    @property
    def display_name(self) -> str:
        """name, or the first command line for unnamed entries."""
        if self.name:
            return self.name
        lines = self.cmd.strip().splitlines()
        return lines[0] if lines else "<unnamed>"


class Staleness(Enum):
    NO_HISTORY = "no_history"
    UNCHANGED = "unchanged"
    CHANGED = "changed"

    @property
    def should_execute(self) -> bool:
        return self is not Staleness.UNCHANGED


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Outcome:
    """Well-formed result of evaluating an entry. Returned, never raised."""

    ok = True

    @property
    def new_sha(self) -> Optional[str]:
        return None

    @property
    def label(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class ExecSuccess(Outcome):
    sha: str

    @property
    def new_sha(self) -> Optional[str]:
        return self.sha

    @property
    def label(self) -> str:
        return "ok"


@dataclass(frozen=True)
class Noop(Outcome):
    @property
    def label(self) -> str:
        return "noop"


@dataclass(frozen=True)
class ExecFail(Outcome):
    code: int
    ok = False

    @property
    def label(self) -> str:
        return f"exit {self.code}"


@dataclass(frozen=True)
class MissingRequiredFiles(Outcome):
    missing: Tuple[str, ...] = ()
    ok = False

    @property
    def label(self) -> str:
        return "missing required files"


@dataclass(frozen=True)
class DryFail(Outcome):
    ok = False

    @property
    def label(self) -> str:
        return "dry run, things have changed"
