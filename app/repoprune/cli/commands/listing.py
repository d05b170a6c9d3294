"""List command implementation.

Runs the full cleanup pipeline in list mode: every decision is reported,
nothing is deleted.
"""

from typing import Annotated

import typer

from repoprune.cli.display import create_results_table, print_outcome_summary, results_to_json
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
    OutputFormat,
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
from repoprune.utils.formatting import console, print_error

app = typer.Typer(
    help="Show what a cleanup would delete, without deleting anything.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def list_candidates(
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
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List the paths a cleanup would delete.

    Examples:
        repoprune list -g org.example -a app --snapshot-versions-retention 2
        repoprune list -e '.*/old-plugin/.*' --format json
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = load_effective_settings(ctx)

    try:
        outcome = execute_cleanup(settings, ExecutionMode.LIST)
    except RetentionError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        console.print_json(results_to_json(outcome))
        return

    if outcome.report.results:
        console.print(create_results_table(outcome.report.results, ExecutionMode.LIST))
    print_outcome_summary(outcome)
