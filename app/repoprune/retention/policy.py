"""Validation of cleanup settings into an immutable policy.

The validator checks that the repository root is usable, that every
threshold is either the -1 sentinel or non-negative, and that the
deletion expression compiles. When no rule at all is configured it
synthesizes the default policy, so that a bare invocation still performs
a scoped cleanup of the current artifact.
"""

import logging
import re
from pathlib import Path

from repoprune.core.config import CleanupSettings
from repoprune.retention.errors import ConfigurationError, RepositoryEnvironmentError
from repoprune.retention.gateway import FilesystemGateway
from repoprune.retention.models import (
    DISABLED,
    ArtifactCoordinate,
    CleanupPolicy,
    RetentionRule,
)

logger = logging.getLogger(__name__)

# Default policy applied when nothing is configured
DEFAULT_RETENTION_DELAY = 7
DEFAULT_VERSIONS_RETENTION = 1

_THRESHOLD_OPTIONS: tuple[str, ...] = (
    "snapshot_retention_delay",
    "snapshot_versions_retention",
    "release_retention_delay",
    "release_versions_retention",
)


def build_policy(settings: CleanupSettings, gateway: FilesystemGateway) -> CleanupPolicy:
    """Validate settings and build the cleanup policy.

    Args:
        settings: Raw settings (file and command line merged).
        gateway: Filesystem gateway used for the root checks.

    Returns:
        Immutable CleanupPolicy.

    Raises:
        RepositoryEnvironmentError: If the root is missing or not writable.
        ConfigurationError: If a threshold is below -1, the expression does
            not compile, or the artifact coordinate is incomplete.
    """
    root = settings.effective_repository_root.absolute()
    _check_repository_root(root, gateway)

    for option in _THRESHOLD_OPTIONS:
        value = getattr(settings, option)
        if value < DISABLED:
            msg = f"Unexpected parameter {option}: negative number {value} (use -1 to disable)"
            raise ConfigurationError(msg)

    expression = settings.delete_from_regular_expression or None
    pattern = _compile_pattern(expression) if expression is not None else None

    snapshot = RetentionRule(
        age_threshold_days=settings.snapshot_retention_delay,
        version_count_keep=settings.snapshot_versions_retention,
    )
    release = RetentionRule(
        age_threshold_days=settings.release_retention_delay,
        version_count_keep=settings.release_versions_retention,
    )
    delete_current_snapshot = settings.delete_current_snapshot
    delete_current_release = settings.delete_current_release
    delete_all_snapshots = settings.delete_all_snapshots

    if (
        snapshot.is_inert
        and release.is_inert
        and pattern is None
        and not settings.delete_whole_local_repository
    ):
        logger.debug(
            "No retention rule configured, applying default policy "
            "(delay %d days, keep %d version) to the current artifact",
            DEFAULT_RETENTION_DELAY,
            DEFAULT_VERSIONS_RETENTION,
        )
        snapshot = release = RetentionRule(
            age_threshold_days=DEFAULT_RETENTION_DELAY,
            version_count_keep=DEFAULT_VERSIONS_RETENTION,
        )
        delete_current_snapshot = delete_current_release = True
        # Default rules never reach other artifacts
        delete_all_snapshots = False

    return CleanupPolicy(
        repository_root=root,
        coordinate=_build_coordinate(settings),
        snapshot=snapshot,
        release=release,
        delete_current_snapshot=delete_current_snapshot,
        delete_all_snapshots=delete_all_snapshots,
        delete_current_release=delete_current_release,
        pattern=pattern,
        delete_empty_folders=settings.delete_empty_folders,
        delete_whole_repository=settings.delete_whole_local_repository,
        execute_delete_on_exit=settings.execute_delete_on_exit,
        is_execution_root=settings.execution_root,
    )


def _check_repository_root(root: Path, gateway: FilesystemGateway) -> None:
    """Ensure the repository root exists, is a directory and is writable."""
    if not gateway.exists(root):
        raise RepositoryEnvironmentError(f"Local repository unavailable: {root}")

    try:
        is_directory = gateway.stat(root).is_directory
    except OSError as e:
        raise RepositoryEnvironmentError(f"Cannot inspect local repository {root}: {e}") from e
    if not is_directory:
        raise RepositoryEnvironmentError(f"Local repository is not a directory: {root}")

    if not gateway.is_writable(root):
        raise RepositoryEnvironmentError(f"Local repository permission denied: {root}")


def _compile_pattern(expression: str) -> re.Pattern[str]:
    """Compile the deletion expression case-insensitively."""
    try:
        return re.compile(expression, re.IGNORECASE)
    except re.error as e:
        msg = (
            f"Unexpected parameter delete_from_regular_expression: "
            f"invalid expression {expression!r}: {e}"
        )
        raise ConfigurationError(msg) from e


def _build_coordinate(settings: CleanupSettings) -> ArtifactCoordinate | None:
    """Build the current artifact coordinate, None if neither part is set."""
    if not settings.group_id and not settings.artifact_id:
        return None
    if not settings.group_id or not settings.artifact_id:
        msg = "Both group_id and artifact_id are required to identify the current artifact"
        raise ConfigurationError(msg)
    return ArtifactCoordinate(group_id=settings.group_id, artifact_id=settings.artifact_id)
