# reify/runner.py

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from reify.config import Settings
from reify.entries.reify import dry_run as dry_run_entry
from reify.entries.reify import reify as reify_entry
from reify.entries.types import Entry, ExecFail, MissingRequiredFiles, Outcome
from reify.errors import ReifyError, RunAborted
from reify.log import get_logger
from reify.schemas.models import RunRecord

log = get_logger("runner")


def _timestamp() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime())


@dataclass(frozen=True)
class EntryResult:
    entry: Entry
    outcome: Optional[Outcome] = None   # None: not evaluated (fail-fast)

    @property
    def ok(self) -> bool:
        return self.outcome is not None and self.outcome.ok


def run_entries(
    entries: Sequence[Entry],
    *,
    dry_run: bool = False,
    fail_fast: bool = False,
    settings: Optional[Settings] = None,
) -> List[EntryResult]:
    """
    Evaluate each entry independently, in order.

    With fail_fast, entries after the first failed outcome are returned
    unevaluated. An infrastructural error stops the run with RunAborted,
    which carries the results gathered so far.
    """
    settings = settings or Settings.from_env()
    evaluate = dry_run_entry if dry_run else reify_entry

    results: List[EntryResult] = []
    stopped = False
    for entry in entries:
        if stopped:
            results.append(EntryResult(entry))
            continue

        try:
            outcome = evaluate(entry, settings)
        except (ReifyError, OSError) as e:
            done = len(results)
            results.extend(EntryResult(rest) for rest in entries[done:])
            raise RunAborted(entry.display_name, e, results) from e
        results.append(EntryResult(entry, outcome))

        if not outcome.ok:
            log.info("%s: %s", entry.display_name, outcome.label)
            stopped = fail_fast

    return results


def new_shas(results: Sequence[EntryResult]) -> List[Optional[str]]:
    """Fingerprints to persist; None keeps the stored one."""
    return [r.outcome.new_sha if r.outcome is not None else None for r in results]


def to_record(result: EntryResult, dry_run: bool = False) -> RunRecord:
    outcome = result.outcome
    return RunRecord(
        name=result.entry.name,
        outcome=type(outcome).__name__,
        ok=outcome.ok,
        exit_code=outcome.code if isinstance(outcome, ExecFail) else None,
        sha=outcome.new_sha,
        missing=list(outcome.missing) if isinstance(outcome, MissingRequiredFiles) else [],
        dry_run=dry_run,
        timestamp=_timestamp(),
    )


def append_report(path: Path, results: Sequence[EntryResult], dry_run: bool = False) -> int:
    """Append one JSONL RunRecord per evaluated entry; returns the count."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    n = 0
    with path.open("a", encoding="utf-8") as f:
        for r in results:
            if r.outcome is None:
                continue
            f.write(to_record(r, dry_run=dry_run).model_dump_json() + "\n")
            n += 1
    return n
