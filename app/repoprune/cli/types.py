"""Shared types and utilities for CLI commands.

This module provides the retention option declarations shared by the
``list`` and ``clean`` commands, and the helper merging them with the
settings file.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated, Any

import typer

from repoprune.core.config import CleanupSettings, SettingsError, apply_overrides, load_settings
from repoprune.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options for cleanup reports."""

    TABLE = "table"
    JSON = "json"


RepositoryOption = Annotated[
    Path | None,
    typer.Option("--repository", "-r", help="Local repository root."),
]
GroupIdOption = Annotated[
    str | None,
    typer.Option("--group-id", "-g", help="Group id of the current artifact."),
]
ArtifactIdOption = Annotated[
    str | None,
    typer.Option("--artifact-id", "-a", help="Artifact id of the current artifact."),
]
DeleteCurrentSnapshotOption = Annotated[
    bool | None,
    typer.Option(
        "--delete-current-snapshot/--no-delete-current-snapshot",
        help="Apply snapshot rules to the current artifact.",
    ),
]
DeleteAllSnapshotsOption = Annotated[
    bool | None,
    typer.Option(
        "--delete-all-snapshots/--no-delete-all-snapshots",
        help="Apply snapshot rules to every artifact of the repository.",
    ),
]
DeleteCurrentReleaseOption = Annotated[
    bool | None,
    typer.Option(
        "--delete-current-release/--no-delete-current-release",
        help="Apply release rules to the current artifact.",
    ),
]
SnapshotRetentionDelayOption = Annotated[
    int | None,
    typer.Option("--snapshot-retention-delay", help="Snapshot age threshold in days (-1 = off)."),
]
SnapshotVersionsRetentionOption = Annotated[
    int | None,
    typer.Option("--snapshot-versions-retention", help="Snapshot versions to keep (-1 = off)."),
]
ReleaseRetentionDelayOption = Annotated[
    int | None,
    typer.Option("--release-retention-delay", help="Release age threshold in days (-1 = off)."),
]
ReleaseVersionsRetentionOption = Annotated[
    int | None,
    typer.Option("--release-versions-retention", help="Release versions to keep (-1 = off)."),
]
RegularExpressionOption = Annotated[
    str | None,
    typer.Option(
        "--delete-from-regular-expression",
        "-e",
        help="Delete files whose absolute path fully matches this expression.",
    ),
]
DeleteEmptyFoldersOption = Annotated[
    bool | None,
    typer.Option(
        "--delete-empty-folders/--no-delete-empty-folders",
        help="Remove directories left without files.",
    ),
]
DeleteWholeRepositoryOption = Annotated[
    bool | None,
    typer.Option(
        "--delete-whole-local-repository/--no-delete-whole-local-repository",
        help="Purge the whole local repository.",
    ),
]
DeleteOnExitOption = Annotated[
    bool | None,
    typer.Option(
        "--execute-delete-on-exit/--no-execute-delete-on-exit",
        help="Defer deletions until the end of the run.",
    ),
]
ExecutionRootOption = Annotated[
    bool | None,
    typer.Option(
        "--execution-root/--no-execution-root",
        help="Treat this invocation as the build's execution root.",
    ),
]


# Command parameters named differently from their settings field
_PARAMETER_FIELDS = {"repository": "repository_root"}


def settings_overrides(params: dict[str, Any]) -> dict[str, Any]:
    """Map command parameters onto settings fields.

    Parameters without a settings counterpart (``--format``, ``--yes``)
    are dropped.

    Args:
        params: Parsed command parameters, usually ``ctx.params``.

    Returns:
        Option values keyed by settings field, None meaning "not given".
    """
    overrides: dict[str, Any] = {}
    for name, value in params.items():
        field = _PARAMETER_FIELDS.get(name, name)
        if field in CleanupSettings.model_fields:
            overrides[field] = value
    return overrides


def load_effective_settings(ctx: typer.Context) -> CleanupSettings:
    """Load the settings file and apply the command's retention options.

    Exits with code 1 on settings errors.

    Args:
        ctx: Typer context. ``obj["config_path"]`` selects the settings file
            and ``params`` holds the options given on the command line.

    Returns:
        Effective CleanupSettings.
    """
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    config_path: Path | None = obj.get("config_path")

    try:
        settings = load_settings(config_path)
        return apply_overrides(settings, settings_overrides(ctx.params))
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
