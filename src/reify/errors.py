# reify/errors.py

from __future__ import annotations

from typing import Optional


class ReifyError(Exception):
    """Base class for infrastructural failures (never an entry outcome)."""


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

class EntryParseError(ReifyError, ValueError):
    field = ""

    def __init__(self, index: Optional[int] = None, source: Optional[str] = None):
        self.index = index
        self.source = source
        where = ""
        if source is not None:
            where += f"{source}: "
        if index is not None:
            where += f"entry {index}: "
        super().__init__(f"{where}missing '{self.field}'")


class MissingName(EntryParseError):
    field = "name"


class MissingCmd(EntryParseError):
    field = "cmd"


class DocumentError(ReifyError, ValueError):
    """The entries document is not a YAML list of mappings."""


class ConfigError(ReifyError, ValueError):
    """A REIFY_* environment variable holds an unusable value."""


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------

class ExecError(ReifyError):
    """The command interpreter could not be spawned or waited on."""


class AbnormalExit(ExecError):
    def __init__(self, signal: int):
        self.signal = signal
        super().__init__(f"command terminated by signal {signal} (no exit code)")


# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------

class RunAborted(ReifyError):
    """
    An infrastructural error stopped a run part-way.

    results holds one EntryResult per entry: outcomes for the entries
    evaluated before the failure, None for the failing entry and the rest.
    """

    def __init__(self, name: str, cause: Exception, results):
        self.name = name
        self.cause = cause
        self.results = results
        super().__init__(f"{name}: {cause}")
