"""Clean command implementation.

Runs the full cleanup pipeline in clean mode: every decision is reported
and executed. Deletion failures are reported but do not fail the run.
"""

from typing import Annotated

import typer

from repoprune.cli.display import create_results_table, print_outcome_summary
from repoprune.cli.types import (
    ArtifactIdOption,
    DeleteAllSnapshotsOption,
    DeleteCurrentReleaseOption,
    DeleteCurrentSnapshotOption,
    DeleteEmptyFoldersOption,
    DeleteOnExitOption,
    DeleteWholeRepositoryOption,
    ExecutionRootOption,
    GroupIdOption,
    RegularExpressionOption,
    ReleaseRetentionDelayOption,
    ReleaseVersionsRetentionOption,
    RepositoryOption,
    SnapshotRetentionDelayOption,
    SnapshotVersionsRetentionOption,
    load_effective_settings,
)
from repoprune.core.executor import execute_cleanup
from repoprune.retention.errors import RetentionError
from repoprune.retention.models import ExecutionMode
from repoprune.utils.formatting import console, print_error, print_info

app = typer.Typer(
    help="Delete expired versions, matching files and empty directories.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def clean_repository(
    ctx: typer.Context,
    repository: RepositoryOption = None,
    group_id: GroupIdOption = None,
    artifact_id: ArtifactIdOption = None,
    delete_current_snapshot: DeleteCurrentSnapshotOption = None,
    delete_all_snapshots: DeleteAllSnapshotsOption = None,
    delete_current_release: DeleteCurrentReleaseOption = None,
    snapshot_retention_delay: SnapshotRetentionDelayOption = None,
    snapshot_versions_retention: SnapshotVersionsRetentionOption = None,
    release_retention_delay: ReleaseRetentionDelayOption = None,
    release_versions_retention: ReleaseVersionsRetentionOption = None,
    delete_from_regular_expression: RegularExpressionOption = None,
    delete_empty_folders: DeleteEmptyFoldersOption = None,
    delete_whole_local_repository: DeleteWholeRepositoryOption = None,
    execute_delete_on_exit: DeleteOnExitOption = None,
    execution_root: ExecutionRootOption = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete what the retention policy selects.

    Examples:
        repoprune clean -g org.example -a app --release-versions-retention 3
        repoprune clean --delete-whole-local-repository --yes
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = load_effective_settings(ctx)

    # Purging the whole repository is the only irreversible bulk operation
    if settings.delete_whole_local_repository and not yes:
        confirmed = typer.confirm(
            f"\nPurge the whole local repository {settings.effective_repository_root}?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    try:
        outcome = execute_cleanup(settings, ExecutionMode.CLEAN)
    except RetentionError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if outcome.report.results:
        console.print(create_results_table(outcome.report.results, ExecutionMode.CLEAN))
    if outcome.flushed:
        table = create_results_table(outcome.flushed, ExecutionMode.CLEAN)
        table.title = "Deferred Deletions"
        console.print(table)
    print_outcome_summary(outcome)
