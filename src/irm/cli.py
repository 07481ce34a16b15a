"""CLI interface for irm."""

from __future__ import annotations

import json
import logging
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from irm.core.engine import RemoveEngine
from irm.core.errors import IrmError, ScanError
from irm.models.outcome import Aborted, DeletionPolicy, Deleted, NotFound, Outcome, ProgressEvent
from irm.models.target import Target, TargetKind
from irm.settings import Settings
from irm.utils import bytes_to_human

if TYPE_CHECKING:
    from click._termui_impl import ProgressBar

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_ABORTED = 3
EXIT_ERROR = 4


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def exit_code_for(outcome: Outcome) -> int:
    """Map an Outcome to the process exit status."""
    if isinstance(outcome, NotFound):
        return EXIT_NOT_FOUND
    if isinstance(outcome, Aborted):
        return EXIT_ABORTED
    return EXIT_OK


@click.command()
@click.argument("file", type=click.Path())
@click.option("-f", "--force", is_flag=True, help="Delete read-only files as well")
@click.option("--dry-run", is_flag=True, help="Show what would be deleted without doing it")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
def main(file: str, force: bool, dry_run: bool, as_json: bool, verbose: int) -> None:
    """Remove a file or folder from the filesystem."""
    _setup_logging(verbose)
    settings = Settings.instance()
    policy = DeletionPolicy(force=force or bool(settings.get("defaults.force", False)))
    engine = RemoveEngine()

    if dry_run:
        _dry_run(engine, file, as_json)
        return

    show_progress = not as_json and bool(settings.get("progress.enabled", True))

    try:
        with ExitStack() as stack:
            reporter = _TerminalReporter(stack, policy, as_json=as_json, show_progress=show_progress)
            outcome = engine.remove(
                file,
                policy,
                on_resolve=reporter.on_resolve,
                on_scan=reporter.on_scan,
                on_progress=reporter.on_progress,
            )
    except IrmError as exc:
        _report_error(exc, as_json)
        sys.exit(EXIT_ERROR)

    path = reporter.target.path if reporter.target else Path(file)
    if as_json:
        click.echo(json.dumps(_outcome_to_dict(outcome, path), indent=2))
    else:
        _report_outcome(outcome, path)

    code = exit_code_for(outcome)
    if code:
        sys.exit(code)


# ── progress ─────────────────────────────────────────────────────────────

class _TerminalReporter:
    """Renders engine callbacks: target line, directory size and progress bar."""

    def __init__(self, stack: ExitStack, policy: DeletionPolicy, *, as_json: bool, show_progress: bool) -> None:
        self.target: Target | None = None
        self._stack = stack
        self._policy = policy
        self._as_json = as_json
        self._show_progress = show_progress
        self._bar: ProgressBar[Path] | None = None
        self._done = 0

    def on_resolve(self, target: Target) -> None:
        self.target = target
        if self._as_json or target.kind is TargetKind.MISSING:
            return
        force = "yes" if self._policy.force else "no"
        click.echo(f"Removing {target.kind.value} {target.path} (force: {force})")

    def on_scan(self, target: Target, total: int) -> None:
        if self._as_json:
            return
        click.echo(
            "The size of the directory is: "
            f"{click.style(bytes_to_human(total), fg='green', bold=True)}"
        )
        if self._show_progress:
            self._bar = self._stack.enter_context(
                click.progressbar(
                    length=total,
                    label="Deleting",
                    show_pos=False,
                    item_show_func=lambda p: str(p) if p is not None else None,
                )
            )

    def on_progress(self, event: ProgressEvent) -> None:
        if self._bar is None:
            return
        self._bar.update(event.bytes_deleted - self._done, event.path)
        self._done = event.bytes_deleted


# ── reporting ────────────────────────────────────────────────────────────

def _report_outcome(outcome: Outcome, path: Path) -> None:
    if isinstance(outcome, Deleted):
        noun = "directory" if outcome.kind is TargetKind.DIRECTORY else "file"
        click.echo(
            click.style(f"The {noun} {path} has been deleted!", fg="green")
            + f" ({bytes_to_human(outcome.bytes)} freed)"
        )
    elif isinstance(outcome, Aborted):
        click.echo(
            click.style(
                f"The file {outcome.path} is read-only, use the force flag -f to delete it",
                fg="red",
            ),
            err=True,
        )
    elif isinstance(outcome, NotFound):
        click.echo(click.style(f"The file {outcome.path} does not exist!", fg="red"), err=True)


def _report_error(exc: IrmError, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps({"status": "error", "path": str(exc.path), "error": str(exc)}, indent=2))
        return
    kind = "scan" if isinstance(exc, ScanError) else "delete"
    click.echo(click.style(f"Failed to {kind} {exc}", fg="red"), err=True)


def _outcome_to_dict(outcome: Outcome, path: Path) -> dict[str, Any]:
    if isinstance(outcome, Deleted):
        return {"status": "deleted", "path": str(path), "kind": outcome.kind.value, "bytes": outcome.bytes}
    if isinstance(outcome, Aborted):
        return {"status": "aborted", "path": str(outcome.path), "reason": outcome.reason.value}
    if isinstance(outcome, NotFound):
        return {"status": "not_found", "path": str(outcome.path)}
    raise TypeError(f"Unknown outcome: {outcome!r}")


# ── dry run ──────────────────────────────────────────────────────────────

def _dry_run(engine: RemoveEngine, file: str, as_json: bool) -> None:
    """Report what a remove would delete, without deleting anything."""
    try:
        target, total = engine.preview(file)
    except IrmError as exc:
        _report_error(exc, as_json)
        sys.exit(EXIT_ERROR)

    if target.kind is TargetKind.MISSING:
        if as_json:
            click.echo(json.dumps({"status": "not_found", "path": str(target.path)}, indent=2))
        else:
            click.echo(click.style(f"The file {file} does not exist!", fg="red"), err=True)
        sys.exit(EXIT_NOT_FOUND)

    if as_json:
        data = {
            "status": "dry_run",
            "path": str(target.path),
            "kind": target.kind.value,
            "total_bytes": total,
        }
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(
        f"Would delete {target.kind.value} {target.path} — "
        f"{click.style(bytes_to_human(total), fg='green', bold=True)}"
    )
    click.echo("(dry run — nothing was deleted)")
