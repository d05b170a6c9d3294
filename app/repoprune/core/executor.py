"""Cleanup execution shared by the list and clean commands.

Validates settings into a policy, wires the execution gate and runs the
pipeline. In clean mode with deferred deletion enabled, the deferred
queue is flushed once the pipeline has returned normally: this is the
graceful-shutdown point of a run. An exception escaping the pipeline
skips the flush and leaves every deferred path on disk.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from repoprune.core.config import CleanupSettings
from repoprune.retention.gate import DeferredDeletionQueue, ExecutionGate
from repoprune.retention.gateway import FilesystemGateway, LocalFilesystem
from repoprune.retention.models import CleanupReport, DeletionResult, ExecutionMode
from repoprune.retention.pipeline import CleanupRunner
from repoprune.retention.policy import build_policy

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CleanupOutcome:
    """Results of a complete cleanup run.

    Attributes:
        report: Results of every candidate handled by the gate.
        flushed: Results of deferred deletions executed at the end of the run.
    """

    report: CleanupReport
    flushed: list[DeletionResult] = field(default_factory=list)

    @property
    def failures(self) -> list[DeletionResult]:
        """Failed deletions, immediate or deferred."""
        return [r for r in (*self.report.results, *self.flushed) if r.failed]


def execute_cleanup(
    settings: CleanupSettings,
    mode: ExecutionMode,
    *,
    gateway: FilesystemGateway | None = None,
    now: datetime | None = None,
) -> CleanupOutcome:
    """Validate settings and run the cleanup pipeline.

    Args:
        settings: Effective settings (file and command line merged).
        mode: LIST to report only, CLEAN to delete.
        gateway: Filesystem gateway. Defaults to the local filesystem.
        now: Reference time for the age rule. Defaults to the current time.

    Returns:
        CleanupOutcome with the gate report and flushed deferred results.

    Raises:
        RepositoryEnvironmentError: If the repository root is unusable.
        ConfigurationError: If the settings are invalid.
    """
    gateway = gateway or LocalFilesystem()
    policy = build_policy(settings, gateway)

    queue: DeferredDeletionQueue | None = None
    if mode.is_destructive and policy.execute_delete_on_exit:
        queue = DeferredDeletionQueue(gateway)

    gate = ExecutionGate(gateway, mode, deferred=queue)
    logger.debug("Running %s on %s", mode.value, policy.repository_root)
    report = CleanupRunner(policy, gateway, gate, now=now).run()

    flushed: list[DeletionResult] = []
    if queue is not None and len(queue):
        logger.info("Executing %d deferred deletion(s)", len(queue))
        flushed = queue.flush()

    return CleanupOutcome(report=report, flushed=flushed)
