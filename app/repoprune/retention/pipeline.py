"""Cleanup pipeline orchestration.

A run is a single linear pass:

    purge and stop
    | current artifact rules -> pattern -> all snapshots -> empty directories

Repository-wide passes (pattern, all snapshots, empty directories) only
run at the build's execution root.
"""

import logging
from datetime import datetime

from repoprune.retention.classifier import DirectoryClassifier, split_versions
from repoprune.retention.evaluator import RetentionEvaluator
from repoprune.retention.gate import ExecutionGate
from repoprune.retention.gateway import FilesystemGateway
from repoprune.retention.matcher import PatternMatcher
from repoprune.retention.models import CleanupPolicy, CleanupReport
from repoprune.retention.pruner import EmptyDirectoryPruner
from repoprune.retention.purge import purge_repository

logger = logging.getLogger(__name__)


class CleanupRunner:
    """Runs every cleanup pass of a policy through one execution gate.

    Args:
        policy: Validated cleanup policy.
        gateway: Filesystem gateway to read from.
        gate: Execution gate receiving all candidates.
        now: Reference time for the age rule. Defaults to the current time.
    """

    def __init__(
        self,
        policy: CleanupPolicy,
        gateway: FilesystemGateway,
        gate: ExecutionGate,
        *,
        now: datetime | None = None,
    ) -> None:
        self._policy = policy
        self._gate = gate
        self._classifier = DirectoryClassifier(gateway)
        self._evaluator = RetentionEvaluator(now)
        self._matcher = PatternMatcher(gateway)
        self._pruner = EmptyDirectoryPruner(gateway)

    def run(self) -> CleanupReport:
        """Run the pipeline.

        Returns:
            Report of every candidate handled by the gate.
        """
        policy = self._policy

        if policy.delete_whole_repository:
            purge_repository(policy, self._gate)
            return self._gate.report

        self._clean_current_artifact()

        if not policy.is_execution_root:
            logger.debug("Not the execution root, skipping repository-wide passes")
            return self._gate.report

        self._matcher.run(policy.pattern, policy.repository_root, self._gate)

        if policy.delete_all_snapshots:
            self._clean_all_snapshots()

        if policy.delete_empty_folders:
            self._pruner.run(policy.repository_root, self._gate)

        return self._gate.report

    def _clean_current_artifact(self) -> None:
        """Apply snapshot and release rules to the current artifact."""
        policy = self._policy
        if not (policy.delete_current_snapshot or policy.delete_current_release):
            return

        artifact_path = policy.artifact_path
        if artifact_path is None:
            logger.warning("No artifact coordinate given, skipping current artifact cleanup")
            return

        snapshots, releases = split_versions(self._classifier.list_versions(artifact_path))

        if policy.delete_current_snapshot:
            self._evaluator.apply(snapshots, policy.snapshot, self._gate)

        if policy.delete_current_release:
            self._evaluator.apply(releases, policy.release, self._gate)

    def _clean_all_snapshots(self) -> None:
        """Apply the snapshot rule to every artifact of the repository."""
        artifacts = self._classifier.group_snapshot_artifacts(self._policy.repository_root)
        for artifact_path, versions in artifacts.items():
            snapshots, _ = split_versions(versions)
            logger.debug("Evaluating %d snapshot(s) of %s", len(snapshots), artifact_path)
            self._evaluator.apply(snapshots, self._policy.snapshot, self._gate)
