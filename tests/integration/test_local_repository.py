"""Integration tests running complete cleanups against a sample repository.

Every test builds the seven-artifact sample repository and runs
execute_cleanup end to end on the real filesystem.
"""

from datetime import datetime
from pathlib import Path

import pytest
from repoprune.core.executor import execute_cleanup
from repoprune.retention.models import ExecutionMode
from sample_repository import RepositoryFixture, build_repository


def _clean(repository: RepositoryFixture, now: datetime, **settings: object) -> None:
    execute_cleanup(repository.settings(**settings), ExecutionMode.CLEAN, now=now)


def _existing(repository: RepositoryFixture) -> set[Path]:
    return {path for path in repository.all_artifacts if path.exists()}


def _tree(root: Path) -> list[Path]:
    return sorted(root.rglob("*"))


class TestRetentionScenarios:
    """Count, age and expression rules on the sample repository."""

    def test_snapshot_count(self, repository: RepositoryFixture, now: datetime) -> None:
        _clean(repository, now, delete_current_snapshot=True, snapshot_versions_retention=2)

        assert _existing(repository) == set(repository.all_artifacts) - {repository.snapshot3}

    def test_snapshot_age(self, repository: RepositoryFixture, now: datetime) -> None:
        _clean(repository, now, delete_current_snapshot=True, snapshot_retention_delay=1)

        assert _existing(repository) == set(repository.all_artifacts) - {
            repository.snapshot2,
            repository.snapshot3,
        }

    def test_release_age(self, repository: RepositoryFixture, now: datetime) -> None:
        _clean(repository, now, delete_current_release=True, release_retention_delay=2)

        assert _existing(repository) == set(repository.all_artifacts) - {repository.release3}

    def test_release_count_zero(self, repository: RepositoryFixture, now: datetime) -> None:
        _clean(repository, now, delete_current_release=True, release_versions_retention=0)

        assert _existing(repository) == {
            repository.plugin,
            repository.snapshot1,
            repository.snapshot2,
            repository.snapshot3,
        }

    def test_expression(self, repository: RepositoryFixture, now: datetime) -> None:
        _clean(repository, now, delete_from_regular_expression=".*plugin-exemple.*")

        assert _existing(repository) == set(repository.test_artifacts)

    def test_negated_expression(self, repository: RepositoryFixture, now: datetime) -> None:
        _clean(repository, now, delete_from_regular_expression="^((?!.*plugin-exemple.*).)*")

        assert _existing(repository) == {repository.plugin}


class TestEmptyDirectories:
    """Empty directory pruning after other deletions."""

    def test_pruned_when_enabled(self, repository: RepositoryFixture, now: datetime) -> None:
        _clean(repository, now, delete_from_regular_expression=".*plugin-exemple.*")

        assert not (repository.root / "org" / "maven" / "plugins").exists()
        assert (repository.root / "org" / "maven" / "test").exists()
        assert repository.root.exists()

    def test_kept_when_disabled(self, repository: RepositoryFixture, now: datetime) -> None:
        _clean(
            repository,
            now,
            delete_from_regular_expression=".*plugin-exemple.*",
            delete_empty_folders=False,
        )

        assert not repository.plugin.exists()
        assert repository.plugin.parent.exists()

    def test_everything_deleted_leaves_root(
        self, repository: RepositoryFixture, now: datetime
    ) -> None:
        _clean(repository, now, delete_from_regular_expression=".*")

        assert repository.root.exists()
        assert list(repository.root.iterdir()) == []


class TestWholeRepository:
    """Whole-repository purge."""

    @pytest.mark.parametrize("deferred", [True, False])
    def test_purge(self, repository: RepositoryFixture, now: datetime, deferred: bool) -> None:
        _clean(
            repository,
            now,
            delete_whole_local_repository=True,
            execute_delete_on_exit=deferred,
        )

        assert not repository.root.exists()

    def test_purge_list_mode(self, repository: RepositoryFixture, now: datetime) -> None:
        settings = repository.settings(delete_whole_local_repository=True)

        outcome = execute_cleanup(settings, ExecutionMode.LIST, now=now)

        assert [r.path for r in outcome.report.results] == [repository.root]
        assert _existing(repository) == set(repository.all_artifacts)


class TestDefaultPolicy:
    """A bare invocation behaves like the explicit default rules."""

    def test_equivalent_to_explicit_rules(self, tmp_path: Path, now: datetime) -> None:
        bare = build_repository(tmp_path / "bare", now)
        explicit = build_repository(tmp_path / "explicit", now)

        _clean(bare, now)
        _clean(
            explicit,
            now,
            delete_current_snapshot=True,
            delete_current_release=True,
            snapshot_retention_delay=7,
            snapshot_versions_retention=1,
            release_retention_delay=7,
            release_versions_retention=1,
        )

        assert [p.relative_to(bare.root) for p in _tree(bare.root)] == [
            p.relative_to(explicit.root) for p in _tree(explicit.root)
        ]
        assert _existing(bare) == {bare.plugin, bare.release1, bare.snapshot1}


class TestListMode:
    """List mode purity and agreement with clean mode."""

    SETTINGS: dict[str, object] = {
        "delete_current_snapshot": True,
        "delete_current_release": True,
        "snapshot_versions_retention": 1,
        "release_retention_delay": 1,
        "delete_from_regular_expression": ".*plugin-exemple.*",
    }

    def test_list_is_pure_and_idempotent(
        self, repository: RepositoryFixture, now: datetime
    ) -> None:
        before = _tree(repository.root)
        settings = repository.settings(**self.SETTINGS)

        first = execute_cleanup(settings, ExecutionMode.LIST, now=now)
        second = execute_cleanup(settings, ExecutionMode.LIST, now=now)

        assert _tree(repository.root) == before
        assert first.report.results == second.report.results

    def test_deferred_clean_deletes_what_list_reports(
        self, repository: RepositoryFixture, now: datetime
    ) -> None:
        settings = repository.settings(execute_delete_on_exit=True, **self.SETTINGS)

        listed = execute_cleanup(settings, ExecutionMode.LIST, now=now)
        cleaned = execute_cleanup(settings, ExecutionMode.CLEAN, now=now)

        assert [c.path for c in listed.report.candidates] == [
            c.path for c in cleaned.report.candidates
        ]
        assert [r.path for r in cleaned.flushed] == [c.path for c in listed.report.candidates]
        assert _existing(repository) == {repository.release1, repository.snapshot1}


class TestExecutionRoot:
    """Invocations that are not the build's execution root."""

    def test_only_current_artifact_rules_apply(
        self, repository: RepositoryFixture, now: datetime
    ) -> None:
        _clean(
            repository,
            now,
            execution_root=False,
            delete_current_release=True,
            release_versions_retention=0,
            delete_from_regular_expression=".*plugin-exemple.*",
            delete_all_snapshots=True,
            snapshot_versions_retention=0,
        )

        assert _existing(repository) == {
            repository.plugin,
            repository.snapshot1,
            repository.snapshot2,
            repository.snapshot3,
        }
        assert not repository.release1.parent.exists()
