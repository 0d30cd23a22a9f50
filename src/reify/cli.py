from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from reify.config import Settings
from reify.entries.dump import dump_entries, write_entries
from reify.entries.hashing import fingerprint as entry_fingerprint
from reify.entries.load import load_entries
from reify.errors import ReifyError, RunAborted
from reify.log import configure_logging
from reify.runner import append_report, new_shas, run_entries

app = typer.Typer(help="reify: re-run shell entries whose inputs changed")


def _fail(exc: Exception) -> None:
    typer.secho(f"error: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=2)


def _settings(log_level: Optional[str]) -> Settings:
    settings = Settings.from_env()
    configure_logging(log_level or settings.log_level)
    return settings


# -----------------------------
# run
# -----------------------------
@app.command("run")
def run_cmd(
    file: Path = typer.Argument(..., help="YAML list of entries"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Report entries that would run; execute nothing"),
    fail_fast: bool = typer.Option(False, "--fail-fast", help="Stop after the first failed entry"),
    report: Optional[Path] = typer.Option(None, "--report", help="Append a JSONL record per evaluated entry"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Overrides REIFY_LOG_LEVEL"),
):
    """
    Evaluate every entry in FILE and write updated fingerprints back.
    """
    try:
        settings = _settings(log_level)
        entries = load_entries(file)
    except (ReifyError, OSError, ValueError) as e:
        _fail(e)

    aborted: Optional[RunAborted] = None
    try:
        results = run_entries(entries, dry_run=dry_run, fail_fast=fail_fast, settings=settings)
    except RunAborted as e:
        # keep fingerprints of the entries that completed before the failure
        aborted = e
        results = e.results

    for r in results:
        label = r.outcome.label if r.outcome is not None else "skipped"
        typer.echo(f"{r.entry.display_name}: {label}")

    try:
        if not dry_run:
            write_entries(file, dump_entries(entries, new_shas(results)))

        if report is not None:
            n = append_report(report, results, dry_run=dry_run)
            typer.echo(f"wrote {n} record(s) to {report}")
    except OSError as e:
        _fail(e)

    if aborted is not None:
        _fail(aborted)

    if not all(r.ok for r in results):
        raise typer.Exit(code=1)


# -----------------------------
# fingerprint
# -----------------------------
@app.command("fingerprint")
def fingerprint_cmd(
    file: Path = typer.Argument(..., help="YAML list of entries"),
):
    """
    Print the current fingerprint of every entry without running anything.
    """
    try:
        settings = _settings(None)
        for entry in load_entries(file):
            typer.echo(f"{entry.display_name}\t{entry_fingerprint(entry, settings)}")
    except (ReifyError, OSError) as e:
        _fail(e)


if __name__ == "__main__":
    app()
