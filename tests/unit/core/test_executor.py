"""Unit tests for cleanup execution."""

from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest
from repoprune.core.config import CleanupSettings
from repoprune.core.executor import CleanupOutcome, execute_cleanup
from repoprune.retention.errors import ConfigurationError, RepositoryEnvironmentError
from repoprune.retention.gateway import LocalFilesystem
from repoprune.retention.models import (
    CleanupReport,
    DeletionReason,
    DeletionResult,
    ExecutionMode,
)
from repoprune.retention.pipeline import CleanupRunner
from sample_repository import RepositoryFixture, create_artifact


class TestExecuteCleanup:
    """Tests for execute_cleanup."""

    def test_list_mode_deletes_nothing(self, repository: RepositoryFixture, now: datetime) -> None:
        settings = repository.settings(
            delete_current_snapshot=True, snapshot_versions_retention=0
        )

        outcome = execute_cleanup(settings, ExecutionMode.LIST, now=now)

        assert len(outcome.report.results) == 3
        assert outcome.flushed == []
        assert all(path.exists() for path in repository.all_artifacts)

    def test_immediate_clean(self, repository: RepositoryFixture, now: datetime) -> None:
        settings = repository.settings(
            delete_current_release=True, release_versions_retention=2
        )

        outcome = execute_cleanup(settings, ExecutionMode.CLEAN, now=now)

        assert outcome.flushed == []
        assert not repository.release3.exists()
        assert repository.release2.exists()

    def test_deferred_clean_flushes_at_end(
        self, repository: RepositoryFixture, now: datetime
    ) -> None:
        settings = repository.settings(
            delete_current_release=True,
            release_versions_retention=2,
            execute_delete_on_exit=True,
        )

        outcome = execute_cleanup(settings, ExecutionMode.CLEAN, now=now)

        (result,) = outcome.report.results
        assert result.deferred is True
        assert [r.path for r in outcome.flushed] == [repository.release3.parent]
        assert not repository.release3.exists()

    def test_deferred_paths_keep_parent_alive(
        self, repository: RepositoryFixture, now: datetime
    ) -> None:
        """Pruning runs before the flush and still sees deferred files on disk."""
        settings = repository.settings(
            delete_from_regular_expression=".*plugin-exemple.*",
            execute_delete_on_exit=True,
        )

        outcome = execute_cleanup(settings, ExecutionMode.CLEAN, now=now)

        assert [r.reason for r in outcome.report.results] == [DeletionReason.PATTERN_MATCH]
        assert not repository.plugin.exists()
        assert repository.plugin.parent.exists()

    def test_exception_skips_flush(self, repository: RepositoryFixture, now: datetime) -> None:
        settings = repository.settings(
            delete_current_release=True,
            release_versions_retention=0,
            execute_delete_on_exit=True,
        )
        original_run = CleanupRunner.run

        def run_then_fail(self: CleanupRunner) -> CleanupReport:
            original_run(self)
            raise RuntimeError("interrupted")

        with (
            patch.object(CleanupRunner, "run", run_then_fail),
            pytest.raises(RuntimeError, match="interrupted"),
        ):
            execute_cleanup(settings, ExecutionMode.CLEAN, now=now)

        assert all(path.exists() for path in repository.test_artifacts)

    def test_validation_error_before_any_deletion(
        self, repository: RepositoryFixture, now: datetime
    ) -> None:
        settings = repository.settings(
            delete_from_regular_expression=".*",
            release_versions_retention=-3,
        )

        with pytest.raises(ConfigurationError):
            execute_cleanup(settings, ExecutionMode.CLEAN, now=now)

        assert all(path.exists() for path in repository.all_artifacts)

    def test_default_policy_leaves_other_artifacts(
        self, repository: RepositoryFixture, now: datetime
    ) -> None:
        other = repository.root / "com" / "other" / "lib"
        create_artifact(other / "1.0-SNAPSHOT" / "lib-1.0-SNAPSHOT.jar", 1, now)
        create_artifact(other / "2.0-SNAPSHOT" / "lib-2.0-SNAPSHOT.jar", 1, now)
        settings = repository.settings(delete_all_snapshots=True)

        outcome = execute_cleanup(settings, ExecutionMode.LIST, now=now)

        paths = [r.path for r in outcome.report.results]
        assert all(not path.is_relative_to(other) for path in paths)
        assert set(paths) == {
            repository.snapshot2.parent,
            repository.snapshot3.parent,
            repository.release2.parent,
            repository.release3.parent,
        }

    def test_missing_repository(self, tmp_path: Path) -> None:
        settings = CleanupSettings(repository_root=tmp_path / "missing")

        with pytest.raises(RepositoryEnvironmentError):
            execute_cleanup(settings, ExecutionMode.LIST)

    def test_custom_gateway(self, repository: RepositoryFixture, now: datetime) -> None:
        gateway = LocalFilesystem()
        settings = repository.settings(
            delete_current_release=True, release_versions_retention=0
        )

        with patch.object(gateway, "delete") as delete:
            execute_cleanup(settings, ExecutionMode.CLEAN, gateway=gateway, now=now)

        assert delete.call_count == 3


class TestCleanupOutcome:
    """Tests for CleanupOutcome.failures."""

    def test_failures_include_flushed(self) -> None:
        report = CleanupReport(
            mode=ExecutionMode.CLEAN,
            results=[
                DeletionResult(Path("/a"), DeletionReason.COUNT_EXPIRED, True, deferred=True),
            ],
        )
        flushed = [
            DeletionResult(Path("/a"), DeletionReason.COUNT_EXPIRED, False, error="busy"),
        ]

        outcome = CleanupOutcome(report=report, flushed=flushed)

        assert [f.path for f in outcome.failures] == [Path("/a")]
