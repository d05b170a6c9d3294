"""Purge of the whole local repository."""

import logging

from repoprune.retention.gate import ExecutionGate
from repoprune.retention.models import CleanupPolicy, DeletionCandidate, DeletionReason

logger = logging.getLogger(__name__)


def purge_repository(policy: CleanupPolicy, gate: ExecutionGate) -> None:
    """Submit the repository root itself for deletion.

    Only the execution root of a build purges the repository, so sibling
    modules sharing the same repository do not race each other.

    Args:
        policy: Validated cleanup policy.
        gate: Execution gate receiving the candidate.
    """
    if not policy.is_execution_root:
        logger.info("Not the execution root, skipping repository purge")
        return
    gate.submit(DeletionCandidate(policy.repository_root, DeletionReason.WHOLE_REPOSITORY))
