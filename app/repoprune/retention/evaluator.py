"""Count and age retention rules.

Both rules read the same classifier ordering and are independent of
each other; their candidate sets are unioned.
"""

from datetime import datetime

from repoprune.retention.gate import ExecutionGate
from repoprune.retention.models import (
    DISABLED,
    DeletionCandidate,
    DeletionReason,
    RetentionRule,
    VersionDirectory,
)


def elapsed_days(timestamp: float, now: datetime) -> int:
    """Count calendar-day boundaries between a timestamp and now.

    A file written yesterday at 23:59 is one day old at 00:01 today.
    Dates are taken in the time zone of ``now`` (local time if naive).

    Args:
        timestamp: Modification time in epoch seconds.
        now: Reference time.

    Returns:
        Number of whole calendar days elapsed.
    """
    then = datetime.fromtimestamp(timestamp, tz=now.tzinfo)
    return (now.date() - then.date()).days


def count_expired(versions: list[VersionDirectory], keep: int) -> list[VersionDirectory]:
    """Select versions beyond the first ``keep`` in the given order.

    Args:
        versions: Ordered version directories.
        keep: Number of versions to keep, -1 disables the rule.

    Returns:
        Versions at position >= keep.
    """
    if keep == DISABLED:
        return []
    return versions[keep:]


def age_expired(
    versions: list[VersionDirectory],
    threshold: int,
    now: datetime,
) -> list[VersionDirectory]:
    """Select versions older than ``threshold`` days.

    Args:
        versions: Ordered version directories.
        threshold: Maximum age in days, -1 disables the rule.
        now: Reference time.

    Returns:
        Versions whose elapsed days exceed the threshold, in input order.
    """
    if threshold == DISABLED:
        return []
    return [v for v in versions if elapsed_days(v.timestamp, now) > threshold]


class RetentionEvaluator:
    """Applies a retention rule to an ordered subset of versions.

    Args:
        now: Reference time for the age rule. Defaults to the current time.
    """

    def __init__(self, now: datetime | None = None) -> None:
        self._now = now or datetime.now()

    def evaluate(
        self,
        versions: list[VersionDirectory],
        rule: RetentionRule,
    ) -> list[DeletionCandidate]:
        """Union the count and age candidates in classifier order.

        A version flagged by both rules appears once, tagged count-expired.

        Args:
            versions: Ordered version directories of one subset.
            rule: Thresholds for the subset.

        Returns:
            Deletion candidates in input order.
        """
        by_count = {v.path for v in count_expired(versions, rule.version_count_keep)}
        by_age = {v.path for v in age_expired(versions, rule.age_threshold_days, self._now)}

        candidates: list[DeletionCandidate] = []
        for version in versions:
            if version.path in by_count:
                candidates.append(DeletionCandidate(version.path, DeletionReason.COUNT_EXPIRED))
            elif version.path in by_age:
                candidates.append(DeletionCandidate(version.path, DeletionReason.AGE_EXPIRED))
        return candidates

    def apply(
        self,
        versions: list[VersionDirectory],
        rule: RetentionRule,
        gate: ExecutionGate,
    ) -> None:
        """Evaluate a subset and route every candidate through the gate."""
        gate.submit_all(self.evaluate(versions, rule))
