"""Retention domain models.

This module defines the immutable data structures shared by every stage
of the cleanup pipeline: execution modes, deletion reasons, scanned
version directories, retention rules and the validated cleanup policy.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

# Suffix marking a mutable (snapshot) version directory
SNAPSHOT_MARKER = "-SNAPSHOT"

# Sentinel disabling a retention threshold
DISABLED = -1


class ExecutionMode(str, Enum):
    """How deletion candidates are handled.

    Attributes:
        LIST: Report candidates only, never touch the filesystem.
        CLEAN: Report candidates and delete them.
    """

    LIST = "list"
    CLEAN = "clean"

    @property
    def is_destructive(self) -> bool:
        """Check if this mode mutates the filesystem."""
        return self is ExecutionMode.CLEAN


class DeletionReason(str, Enum):
    """Why a path was selected for deletion.

    Attributes:
        COUNT_EXPIRED: Version directory beyond the retention count.
        AGE_EXPIRED: Version directory older than the retention delay.
        PATTERN_MATCH: File path matched the deletion expression.
        EMPTY_DIRECTORY: Directory left without any file.
        WHOLE_REPOSITORY: Entire repository root purge.
    """

    COUNT_EXPIRED = "count-expired"
    AGE_EXPIRED = "age-expired"
    PATTERN_MATCH = "pattern-match"
    EMPTY_DIRECTORY = "empty-directory"
    WHOLE_REPOSITORY = "whole-repository"


@dataclass(frozen=True, slots=True)
class ArtifactCoordinate:
    """Group and artifact identifiers of the subject artifact.

    Attributes:
        group_id: Dotted group identifier (e.g., "org.maven.test").
        artifact_id: Artifact identifier (e.g., "test-example").
    """

    group_id: str
    artifact_id: str

    def __post_init__(self) -> None:
        """Validate coordinate components after initialization."""
        if not self.group_id or not self.artifact_id:
            msg = "Group id and artifact id cannot be empty"
            raise ValueError(msg)

    def path_under(self, root: Path) -> Path:
        """Compute the artifact directory below a repository root.

        Args:
            root: Repository root directory.

        Returns:
            root / group segments / artifact id.
        """
        return root.joinpath(*self.group_id.split("."), self.artifact_id)


@dataclass(frozen=True, slots=True)
class VersionDirectory:
    """A version directory captured at scan time.

    The snapshot is never refreshed during a pass, even after the
    directory itself has been deleted.

    Attributes:
        path: Absolute path of the version directory.
        name: Directory name (the version string).
        timestamp: Representative modification time (epoch seconds).
        files: Files directly contained in the directory.
    """

    path: Path
    name: str
    timestamp: float
    files: tuple[Path, ...] = ()

    @property
    def is_snapshot(self) -> bool:
        """Check if this is a snapshot version directory."""
        return self.name.endswith(SNAPSHOT_MARKER)


@dataclass(frozen=True, slots=True)
class DeletionCandidate:
    """A path selected for deletion.

    Attributes:
        path: File or directory to delete.
        reason: Selection reason, used for reporting only.
    """

    path: Path
    reason: DeletionReason


@dataclass(frozen=True, slots=True)
class RetentionRule:
    """Age and count thresholds for one subset of versions.

    Attributes:
        age_threshold_days: Maximum age in days, -1 disables the age rule.
        version_count_keep: Versions kept by the count rule, -1 disables it.
    """

    age_threshold_days: int = DISABLED
    version_count_keep: int = DISABLED

    @property
    def is_inert(self) -> bool:
        """Check if both thresholds are disabled."""
        return self.age_threshold_days == DISABLED and self.version_count_keep == DISABLED


@dataclass(frozen=True, slots=True)
class CleanupPolicy:
    """Validated, immutable cleanup configuration.

    Built once by :func:`repoprune.retention.policy.build_policy` and
    passed to every stage of the pipeline.

    Attributes:
        repository_root: Root of the local repository.
        coordinate: Current artifact, None when not supplied.
        snapshot: Thresholds applied to snapshot versions.
        release: Thresholds applied to release versions.
        delete_current_snapshot: Apply snapshot rule to the current artifact.
        delete_all_snapshots: Apply snapshot rule to every artifact.
        delete_current_release: Apply release rule to the current artifact.
        pattern: Compiled deletion expression, None when not supplied.
        delete_empty_folders: Run the empty directory pass.
        delete_whole_repository: Purge the whole repository and stop.
        execute_delete_on_exit: Defer deletions to the shutdown flush.
        is_execution_root: Invocation is the top-level module of the build.
    """

    repository_root: Path
    coordinate: ArtifactCoordinate | None = None
    snapshot: RetentionRule = field(default_factory=RetentionRule)
    release: RetentionRule = field(default_factory=RetentionRule)
    delete_current_snapshot: bool = False
    delete_all_snapshots: bool = False
    delete_current_release: bool = False
    pattern: re.Pattern[str] | None = None
    delete_empty_folders: bool = True
    delete_whole_repository: bool = False
    execute_delete_on_exit: bool = True
    is_execution_root: bool = True

    @property
    def artifact_path(self) -> Path | None:
        """Directory of the current artifact, None without a coordinate."""
        if self.coordinate is None:
            return None
        return self.coordinate.path_under(self.repository_root)


@dataclass(frozen=True, slots=True)
class DeletionResult:
    """Outcome of a single candidate passing through the execution gate.

    Attributes:
        path: Path that was operated on.
        reason: Why the path was selected.
        success: Whether the operation completed (always True in list mode).
        error: Error message if the deletion failed, None otherwise.
        dry_run: Whether this was a list-mode report (no deletion).
        deferred: Whether the deletion was queued for the shutdown flush.
    """

    path: Path
    reason: DeletionReason
    success: bool
    error: str | None = None
    dry_run: bool = False
    deferred: bool = False

    @property
    def failed(self) -> bool:
        """Check if the deletion failed."""
        return not self.success


@dataclass(slots=True)
class CleanupReport:
    """Ordered results of one pipeline run.

    Attributes:
        mode: Execution mode of the run.
        results: Results in submission order.
    """

    mode: ExecutionMode
    results: list[DeletionResult] = field(default_factory=list)

    @property
    def candidates(self) -> list[DeletionCandidate]:
        """Candidates in submission order, independent of outcome."""
        return [DeletionCandidate(r.path, r.reason) for r in self.results]

    @property
    def deferred(self) -> int:
        """Number of deletions queued until the end of the run."""
        return sum(1 for r in self.results if r.deferred)
