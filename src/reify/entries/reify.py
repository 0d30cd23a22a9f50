# reify/entries/reify.py

from __future__ import annotations

from typing import Callable, Optional, Tuple

from reify.config import Settings
from reify.entries.execute import run_command
from reify.entries.hashing import fingerprint, unresolved
from reify.entries.types import (
    DryFail,
    Entry,
    ExecFail,
    ExecSuccess,
    MissingRequiredFiles,
    Noop,
    Outcome,
    Staleness,
)
from reify.log import get_logger

log = get_logger("reify")


# ---------------------------------------------------------------------------
# Staleness decision
# ---------------------------------------------------------------------------

def decide(entry: Entry, settings: Optional[Settings] = None) -> Tuple[Staleness, Optional[str]]:
    """
    Compare the stored fingerprint with a freshly computed one.

    Returns (staleness, current_fingerprint). The fingerprint is only
    computed when there is a stored one to compare against, so it is
    None for NO_HISTORY.
    """
    if entry.sha is None:
        log.debug("%s: no stored fingerprint", entry.display_name)
        return Staleness.NO_HISTORY, None

    current = fingerprint(entry, settings)
    if current == entry.sha:
        return Staleness.UNCHANGED, current

    log.debug("%s: fingerprint changed %s -> %s", entry.display_name, entry.sha, current)
    return Staleness.CHANGED, current


def _check_then(entry: Entry, execute: Callable[[], Outcome], settings: Optional[Settings]) -> Outcome:
    staleness, _ = decide(entry, settings)
    if staleness.should_execute:
        return execute()
    log.info("%s: unchanged", entry.display_name)
    return Noop()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def reify(entry: Entry, settings: Optional[Settings] = None) -> Outcome:
    """
    Run the entry if its inputs changed since the stored fingerprint.

    Outcomes:
      MissingRequiredFiles  a required file does not resolve (checked first)
      Noop                  stored fingerprint matches
      ExecSuccess(sha)      command exited 0; sha recomputed after the run
      ExecFail(code)        command exited non-zero

    Raises OSError / ExecError for infrastructural failures.
    """
    settings = settings or Settings.from_env()

    missing = unresolved(entry.required_files)
    if missing:
        log.info("%s: missing required files: %s", entry.display_name, ", ".join(missing))
        return MissingRequiredFiles(tuple(missing))

    def _execute() -> Outcome:
        code = run_command(entry, settings)
        if code != 0:
            return ExecFail(code)
        return ExecSuccess(fingerprint(entry, settings))

    return _check_then(entry, _execute, settings)


def dry_run(entry: Entry, settings: Optional[Settings] = None) -> Outcome:
    """
    Same decision as reify() without running anything.

    Noop when unchanged, DryFail when the entry would run.
    Required files are not checked.
    """
    return _check_then(entry, DryFail, settings)
