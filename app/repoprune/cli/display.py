"""Shared Rich display functions for cleanup reports.

Provides the result table, JSON rendering and summary printers used by
the ``list`` and ``clean`` commands.
"""

import json

from rich.table import Table

from repoprune.core.executor import CleanupOutcome
from repoprune.retention.models import DeletionResult, ExecutionMode
from repoprune.utils.formatting import print_info, print_success, print_warning


def create_results_table(results: list[DeletionResult], mode: ExecutionMode) -> Table:
    """Create a Rich table displaying deletion results.

    Args:
        results: Results in submission order.
        mode: Execution mode of the run (changes the table title).

    Returns:
        Rich Table with Path, Reason, Status and Details columns.
    """
    title = "Deletion Candidates (list)" if mode is ExecutionMode.LIST else "Deletion Results"

    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", style="bold", overflow="fold")
    table.add_column("Reason", width=16)
    table.add_column("Status", width=10)
    table.add_column("Details", style="dim")

    for r in results:
        if r.dry_run:
            status = "[info]listed[/]"
            detail = "Would delete"
        elif r.deferred:
            status = "[deferred]deferred[/]"
            detail = "Deleted at end of run"
        elif r.success:
            status = "[removed]deleted[/]"
            detail = ""
        else:
            status = "[error]failed[/]"
            detail = r.error or "Unknown error"
        table.add_row(str(r.path), r.reason.value, status, detail)

    return table


def results_to_json(outcome: CleanupOutcome) -> str:
    """Serialize a cleanup outcome as a JSON document."""
    data = {
        "mode": outcome.report.mode.value,
        "results": [_result_to_dict(r) for r in outcome.report.results],
        "flushed": [_result_to_dict(r) for r in outcome.flushed],
    }
    return json.dumps(data)


def _result_to_dict(result: DeletionResult) -> dict[str, object]:
    return {
        "path": str(result.path),
        "reason": result.reason.value,
        "success": result.success,
        "error": result.error,
        "dry_run": result.dry_run,
        "deferred": result.deferred,
    }


def print_outcome_summary(outcome: CleanupOutcome) -> None:
    """Print a one-line summary of a cleanup outcome.

    Failures are reported as a warning only: per-path failures never
    fail a run.

    Args:
        outcome: Outcome of the run.
    """
    report = outcome.report
    total = len(report.results)

    if total == 0:
        print_success("Repository is clean. Nothing to delete.")
        return

    if report.mode is ExecutionMode.LIST:
        print_info(f"List: {total} path(s) would be deleted.")
        return

    if report.deferred:
        print_info(f"{report.deferred} path(s) queued for deletion at the end of the run.")

    failures = outcome.failures
    if failures:
        print_warning(f"{total - len(failures)} succeeded, {len(failures)} failed")
    else:
        print_success(f"All {total} path(s) deleted successfully.")
