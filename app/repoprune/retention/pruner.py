"""Removal of directories left without files.

Runs after every other deletion pass. Directories are visited deepest
first so that a leaf is handled before its parent is judged. A directory
is empty when no file remains anywhere below it; empty subdirectories do
not keep it alive.
"""

import logging
from pathlib import Path

from repoprune.retention.gate import ExecutionGate
from repoprune.retention.gateway import FilesystemGateway, contains_files, iter_directories
from repoprune.retention.models import DeletionCandidate, DeletionReason

logger = logging.getLogger(__name__)


class EmptyDirectoryPruner:
    """Submits every file-less directory below a root, deepest first.

    Args:
        gateway: Filesystem gateway to read from.
    """

    def __init__(self, gateway: FilesystemGateway) -> None:
        self._gateway = gateway

    def run(self, root: Path, gate: ExecutionGate) -> None:
        """Prune empty directories below the root.

        The root itself is never a candidate. Emptiness is checked live,
        so in immediate clean mode a parent becomes empty once its
        children were removed.

        Args:
            root: Repository root.
            gate: Execution gate receiving the candidates.
        """
        directories = list(iter_directories(self._gateway, root))
        directories.reverse()
        logger.debug("Checking %d directories for emptiness", len(directories))

        for directory in directories:
            if not self._gateway.exists(directory):
                continue
            if contains_files(self._gateway, directory):
                continue
            gate.submit(DeletionCandidate(directory, DeletionReason.EMPTY_DIRECTORY))
