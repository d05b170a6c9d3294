"""Execution gate for deletion candidates.

Every candidate produced by the pipeline passes through a single
ExecutionGate, which applies list or clean semantics:

- list: log what would be deleted, never touch the filesystem.
- clean: log and delete, isolating failures per path.

In clean mode deletions can be deferred to a DeferredDeletionQueue that
is flushed once, after the pipeline returned normally. Until the flush,
later passes of the same run still see deferred paths on disk: a
deferred version directory keeps its parent from being judged empty.
If the process terminates abnormally the queue is abandoned and nothing
is removed.
"""

import logging
from pathlib import Path

from repoprune.retention.errors import DeletionError
from repoprune.retention.gateway import FilesystemGateway
from repoprune.retention.models import (
    CleanupReport,
    DeletionCandidate,
    DeletionReason,
    DeletionResult,
    ExecutionMode,
)

logger = logging.getLogger(__name__)

# Human-readable kind of entry per deletion reason, used in log lines
_KIND_BY_REASON: dict[DeletionReason, str] = {
    DeletionReason.COUNT_EXPIRED: "version directory",
    DeletionReason.AGE_EXPIRED: "version directory",
    DeletionReason.PATTERN_MATCH: "file",
    DeletionReason.EMPTY_DIRECTORY: "empty directory",
    DeletionReason.WHOLE_REPOSITORY: "whole repository",
}


def describe(mode: ExecutionMode, reason: DeletionReason) -> str:
    """Build the mode-specific verb phrase for a deletion reason.

    Args:
        mode: Execution mode.
        reason: Deletion reason.

    Returns:
        Phrase such as "Would delete file" or "Deleting empty directory".
    """
    kind = _KIND_BY_REASON[reason]
    if reason is DeletionReason.WHOLE_REPOSITORY:
        return f"Would purge {kind}" if mode is ExecutionMode.LIST else f"Purging {kind}"
    return f"Would delete {kind}" if mode is ExecutionMode.LIST else f"Deleting {kind}"


class DeferredDeletionQueue:
    """Deletions registered during a run and executed at shutdown.

    Args:
        gateway: Filesystem gateway performing the deletions.
    """

    def __init__(self, gateway: FilesystemGateway) -> None:
        self._gateway = gateway
        self._pending: list[DeletionCandidate] = []

    def __len__(self) -> int:
        return len(self._pending)

    def register(self, candidate: DeletionCandidate) -> None:
        """Queue a candidate for deletion at flush time."""
        self._pending.append(candidate)

    def flush(self) -> list[DeletionResult]:
        """Delete every queued path in registration order.

        Paths already removed together with an earlier queued ancestor
        are reported as successful. Failures are isolated per path.

        Returns:
            One DeletionResult per queued candidate.
        """
        pending, self._pending = self._pending, []
        results: list[DeletionResult] = []

        for candidate in pending:
            if not self._gateway.exists(candidate.path):
                logger.debug("Already removed: %s", candidate.path)
                results.append(DeletionResult(candidate.path, candidate.reason, success=True))
                continue
            results.append(_delete(self._gateway, candidate))

        return results


class ExecutionGate:
    """Applies list or clean semantics to deletion candidates.

    Args:
        gateway: Filesystem gateway performing the deletions.
        mode: Execution mode of the run.
        deferred: Queue for deferred deletions. If None, clean-mode
            deletions happen immediately.
    """

    def __init__(
        self,
        gateway: FilesystemGateway,
        mode: ExecutionMode,
        *,
        deferred: DeferredDeletionQueue | None = None,
    ) -> None:
        self._gateway = gateway
        self._mode = mode
        self._deferred = deferred
        self._seen: set[Path] = set()
        self._report = CleanupReport(mode=mode)

    @property
    def report(self) -> CleanupReport:
        """Results of every candidate submitted so far."""
        return self._report

    def submit(self, candidate: DeletionCandidate) -> DeletionResult | None:
        """Handle a single deletion candidate.

        A path already submitted in this run is skipped, so a directory
        flagged by several rules is reported and deleted once.

        Args:
            candidate: Path and reason to handle.

        Returns:
            DeletionResult, or None if the path was already handled.
        """
        if candidate.path in self._seen:
            logger.debug("Already handled: %s", candidate.path)
            return None
        self._seen.add(candidate.path)

        logger.info("%s: %s", describe(self._mode, candidate.reason), candidate.path)

        if not self._mode.is_destructive:
            result = DeletionResult(candidate.path, candidate.reason, success=True, dry_run=True)
        elif self._deferred is not None:
            self._deferred.register(candidate)
            result = DeletionResult(candidate.path, candidate.reason, success=True, deferred=True)
        else:
            result = _delete(self._gateway, candidate)

        self._report.results.append(result)
        return result

    def submit_all(self, candidates: list[DeletionCandidate]) -> None:
        """Submit candidates in order."""
        for candidate in candidates:
            self.submit(candidate)


def _delete(gateway: FilesystemGateway, candidate: DeletionCandidate) -> DeletionResult:
    """Delete a candidate, turning a DeletionError into a failed result."""
    try:
        gateway.delete(candidate.path)
    except DeletionError as e:
        logger.warning("Could not delete %s: %s", candidate.path, e)
        return DeletionResult(candidate.path, candidate.reason, success=False, error=str(e))
    return DeletionResult(candidate.path, candidate.reason, success=True)
