"""Deletion of files selected by a regular expression.

The expression must match the whole absolute path of a file, ignoring
case. Directories are never matched; they are left to the empty
directory pass.
"""

import re
from collections.abc import Iterable
from pathlib import Path

from repoprune.retention.gate import ExecutionGate
from repoprune.retention.gateway import FilesystemGateway, iter_files
from repoprune.retention.models import DeletionCandidate, DeletionReason


def match_files(pattern: re.Pattern[str], files: Iterable[Path]) -> list[DeletionCandidate]:
    """Select files whose absolute path matches the pattern.

    Args:
        pattern: Compiled expression (compiled with re.IGNORECASE).
        files: File paths, in walk order.

    Returns:
        pattern-match candidates in input order.
    """
    return [
        DeletionCandidate(path, DeletionReason.PATTERN_MATCH)
        for path in files
        if pattern.fullmatch(str(path.absolute())) is not None
    ]


class PatternMatcher:
    """Walks the repository and submits every matching file.

    Args:
        gateway: Filesystem gateway to read from.
    """

    def __init__(self, gateway: FilesystemGateway) -> None:
        self._gateway = gateway

    def run(self, pattern: re.Pattern[str] | None, root: Path, gate: ExecutionGate) -> None:
        """Match every file below the root and submit the matches.

        Without a pattern the repository is not walked at all.

        Args:
            pattern: Compiled expression, or None to skip.
            root: Repository root.
            gate: Execution gate receiving the candidates.
        """
        if pattern is None:
            return
        files = list(iter_files(self._gateway, root))
        gate.submit_all(match_files(pattern, files))
