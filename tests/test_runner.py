import json
from pathlib import Path

import pytest

from reify.entries.types import DryFail, Entry, ExecFail, ExecSuccess, MissingRequiredFiles, Noop
from reify.errors import AbnormalExit, RunAborted
from reify.runner import EntryResult, append_report, new_shas, run_entries


def test_entries_evaluated_independently(workdir, settings):
    entries = [
        Entry(name="ok", cmd="echo a > a.txt", files=["a.txt"]),
        Entry(name="bad", cmd="exit 2"),
        Entry(name="needs", cmd="true", required_files=["missing.txt"]),
        Entry(name="ok2", cmd="true"),
    ]

    results = run_entries(entries, settings=settings)

    assert [type(r.outcome) for r in results] == [ExecSuccess, ExecFail, MissingRequiredFiles, ExecSuccess]
    assert [r.ok for r in results] == [True, False, False, True]


def test_fail_fast_leaves_rest_unevaluated(workdir, settings):
    entries = [
        Entry(name="bad", cmd="exit 4"),
        Entry(name="never", cmd="touch never.txt"),
    ]

    results = run_entries(entries, fail_fast=True, settings=settings)

    assert results[0].outcome == ExecFail(4)
    assert results[1].outcome is None
    assert not results[1].ok
    assert not (workdir / "never.txt").exists()


def test_dry_run_never_executes(workdir, settings):
    results = run_entries([Entry(name="t", cmd="touch x.txt")], dry_run=True, settings=settings)
    assert results[0].outcome == DryFail()
    assert not (workdir / "x.txt").exists()


def test_new_shas_only_for_exec_success():
    e = Entry(name="e", cmd="true")
    results = [
        EntryResult(e, ExecSuccess("s1")),
        EntryResult(e, Noop()),
        EntryResult(e, ExecFail(1)),
        EntryResult(e),
    ]
    assert new_shas(results) == ["s1", None, None, None]


def test_append_report_jsonl(tmp_path: Path):
    e = Entry(name="e", cmd="true")
    results = [
        EntryResult(e, ExecFail(3)),
        EntryResult(e, MissingRequiredFiles(("m.txt",))),
        EntryResult(e),
    ]
    report = tmp_path / "out" / "report.jsonl"

    assert append_report(report, results) == 2
    assert append_report(report, results[:1], dry_run=True) == 1

    rows = [json.loads(line) for line in report.read_text().splitlines()]
    assert len(rows) == 3
    assert rows[0]["outcome"] == "ExecFail"
    assert rows[0]["exit_code"] == 3
    assert rows[0]["ok"] is False
    assert rows[1]["missing"] == ["m.txt"]
    assert rows[2]["dry_run"] is True
    assert rows[0]["schema_version"] == "0.1.0"


def test_infrastructural_error_carries_partial_results(workdir, settings):
    entries = [
        Entry(name="ok", cmd="true"),
        Entry(name="killed", cmd="kill -9 $$"),
        Entry(name="later", cmd="touch later.txt"),
    ]

    with pytest.raises(RunAborted) as ei:
        run_entries(entries, settings=settings)

    aborted = ei.value
    assert isinstance(aborted.cause, AbnormalExit)
    assert [r.entry.name for r in aborted.results] == ["ok", "killed", "later"]
    assert isinstance(aborted.results[0].outcome, ExecSuccess)
    assert aborted.results[1].outcome is None
    assert aborted.results[2].outcome is None
    assert new_shas(aborted.results)[0] is not None
    assert not (workdir / "later.txt").exists()
