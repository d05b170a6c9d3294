"""Unit tests for count and age retention rules."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from repoprune.retention.evaluator import (
    RetentionEvaluator,
    age_expired,
    count_expired,
    elapsed_days,
)
from repoprune.retention.gate import ExecutionGate
from repoprune.retention.gateway import LocalFilesystem
from repoprune.retention.models import (
    DeletionReason,
    ExecutionMode,
    RetentionRule,
    VersionDirectory,
)


def _versions(now: datetime, *ages: int) -> list[VersionDirectory]:
    """Build versions named v0, v1, ... with the given ages in days."""
    return [
        VersionDirectory(
            path=Path(f"/repo/artifact/v{i}"),
            name=f"v{i}",
            timestamp=(now - timedelta(days=age)).timestamp(),
        )
        for i, age in enumerate(ages)
    ]


class TestElapsedDays:
    """Tests for calendar-day elapsed time."""

    def test_same_day(self) -> None:
        now = datetime(2024, 3, 10, 18, 0)
        assert elapsed_days(datetime(2024, 3, 10, 1, 0).timestamp(), now) == 0

    def test_day_boundary_counts_as_one_day(self) -> None:
        now = datetime(2024, 3, 11, 0, 1)
        assert elapsed_days(datetime(2024, 3, 10, 23, 59).timestamp(), now) == 1

    def test_almost_two_full_days_is_one_boundary(self) -> None:
        now = datetime(2024, 3, 11, 23, 59)
        assert elapsed_days(datetime(2024, 3, 10, 0, 1).timestamp(), now) == 1

    def test_aware_reference_time(self) -> None:
        now = datetime(2024, 3, 11, 0, 30, tzinfo=timezone.utc)
        stamp = datetime(2024, 3, 10, 23, 30, tzinfo=timezone.utc).timestamp()

        assert elapsed_days(stamp, now) == 1

    def test_future_timestamp(self) -> None:
        now = datetime(2024, 3, 10, 12, 0)
        assert elapsed_days(datetime(2024, 3, 12, 12, 0).timestamp(), now) == -2


class TestCountExpired:
    """Tests for the count rule."""

    def test_disabled(self, now: datetime) -> None:
        assert count_expired(_versions(now, 1, 2, 3), -1) == []

    def test_keeps_first_in_order(self, now: datetime) -> None:
        versions = _versions(now, 1, 2, 3)

        assert count_expired(versions, 2) == versions[2:]

    def test_keep_zero_selects_all(self, now: datetime) -> None:
        versions = _versions(now, 1, 2, 3)

        assert count_expired(versions, 0) == versions

    def test_keep_more_than_available(self, now: datetime) -> None:
        assert count_expired(_versions(now, 1, 2), 5) == []


class TestAgeExpired:
    """Tests for the age rule."""

    def test_disabled(self, now: datetime) -> None:
        assert age_expired(_versions(now, 100), -1, now) == []

    def test_strictly_older_than_threshold(self, now: datetime) -> None:
        versions = _versions(now, 1, 2, 3)

        assert age_expired(versions, 1, now) == versions[1:]

    def test_threshold_zero_spares_today(self, now: datetime) -> None:
        versions = _versions(now, 0, 1)

        assert age_expired(versions, 0, now) == [versions[1]]

    def test_keeps_input_order(self, now: datetime) -> None:
        versions = _versions(now, 9, 1, 8)

        assert age_expired(versions, 5, now) == [versions[0], versions[2]]


class TestRetentionEvaluator:
    """Tests for RetentionEvaluator."""

    def test_inert_rule(self, now: datetime) -> None:
        assert RetentionEvaluator(now).evaluate(_versions(now, 1, 50), RetentionRule()) == []

    def test_union_in_order(self, now: datetime) -> None:
        """Count selects v2, age selects v0; result follows listing order."""
        versions = _versions(now, 10, 1, 1)
        rule = RetentionRule(age_threshold_days=5, version_count_keep=2)

        candidates = RetentionEvaluator(now).evaluate(versions, rule)

        assert [(c.path.name, c.reason) for c in candidates] == [
            ("v0", DeletionReason.AGE_EXPIRED),
            ("v2", DeletionReason.COUNT_EXPIRED),
        ]

    def test_flagged_by_both_rules_once(self, now: datetime) -> None:
        versions = _versions(now, 1, 10)
        rule = RetentionRule(age_threshold_days=5, version_count_keep=1)

        candidates = RetentionEvaluator(now).evaluate(versions, rule)

        assert len(candidates) == 1
        assert candidates[0].path.name == "v1"
        assert candidates[0].reason is DeletionReason.COUNT_EXPIRED

    def test_empty_subset(self, now: datetime) -> None:
        rule = RetentionRule(age_threshold_days=0, version_count_keep=0)
        assert RetentionEvaluator(now).evaluate([], rule) == []

    def test_apply_submits_to_gate(self, now: datetime) -> None:
        gate = ExecutionGate(LocalFilesystem(), ExecutionMode.LIST)
        versions = _versions(now, 1, 2, 3)

        RetentionEvaluator(now).apply(versions, RetentionRule(version_count_keep=1), gate)

        assert [r.path.name for r in gate.report.results] == ["v1", "v2"]
        assert all(r.dry_run for r in gate.report.results)

    @pytest.mark.parametrize(("threshold", "expected"), [(0, 3), (1, 2), (2, 1), (3, 0)])
    def test_age_thresholds(self, now: datetime, threshold: int, expected: int) -> None:
        rule = RetentionRule(age_threshold_days=threshold)

        candidates = RetentionEvaluator(now).evaluate(_versions(now, 1, 2, 3), rule)

        assert len(candidates) == expected
