"""Version directory discovery and classification.

Lists the version directories of an artifact in a stable, purely lexical
name order and splits them into snapshot and release subsets. The order
is deliberately not version-aware: "10.0" sorts before "9.0". Downstream
stages consume this order as-is.
"""

import logging
from pathlib import Path

from repoprune.retention.gateway import FilesystemGateway, iter_directories
from repoprune.retention.models import SNAPSHOT_MARKER, VersionDirectory

logger = logging.getLogger(__name__)


class DirectoryClassifier:
    """Scans artifact directories for version directories.

    Args:
        gateway: Filesystem gateway to read from.
    """

    def __init__(self, gateway: FilesystemGateway) -> None:
        self._gateway = gateway

    def list_versions(self, artifact_path: Path) -> list[VersionDirectory]:
        """List the version directories of an artifact, ordered by name.

        Args:
            artifact_path: Artifact directory (root / group / artifact id).

        Returns:
            VersionDirectory snapshots sorted lexically by name. Empty if
            the artifact directory does not exist or cannot be read.
        """
        if not self._gateway.exists(artifact_path):
            logger.debug("No artifact directory at %s", artifact_path)
            return []

        try:
            children = self._gateway.list_children(artifact_path)
        except OSError as e:
            logger.warning("Cannot list artifact directory %s: %s", artifact_path, e)
            return []

        versions: list[VersionDirectory] = []
        for child in children:
            try:
                if not self._gateway.stat(child).is_directory:
                    continue
            except OSError:
                logger.warning("Cannot determine type of: %s", child)
                continue
            versions.append(self._snapshot(child))

        versions.sort(key=lambda v: v.name)
        return versions

    def group_snapshot_artifacts(self, root: Path) -> dict[Path, list[VersionDirectory]]:
        """Find every artifact holding snapshot versions below a root.

        An artifact directory is any directory with at least one child
        directory whose name carries the snapshot marker.

        Args:
            root: Repository root.

        Returns:
            Mapping of artifact directory to its full ordered version
            listing, keyed in lexical path order.
        """
        artifacts = sorted(
            {
                directory.parent
                for directory in iter_directories(self._gateway, root)
                if directory.name.endswith(SNAPSHOT_MARKER)
            },
            key=str,
        )
        return {artifact: self.list_versions(artifact) for artifact in artifacts}

    def _snapshot(self, directory: Path) -> VersionDirectory:
        """Capture a version directory with its representative timestamp.

        The timestamp is the modification time of the first contained
        file in name order, or of the directory itself if it holds none.
        """
        files: list[Path] = []
        try:
            for child in sorted(self._gateway.list_children(directory), key=lambda p: p.name):
                try:
                    if not self._gateway.stat(child).is_directory:
                        files.append(child)
                except OSError:
                    logger.warning("Cannot determine type of: %s", child)
        except OSError as e:
            logger.warning("Cannot list version directory %s: %s", directory, e)

        source = files[0] if files else directory
        try:
            timestamp = self._gateway.stat(source).last_modified
        except OSError:
            logger.warning("Cannot read modification time of: %s", source)
            timestamp = 0.0

        return VersionDirectory(
            path=directory,
            name=directory.name,
            timestamp=timestamp,
            files=tuple(files),
        )


def split_versions(
    versions: list[VersionDirectory],
) -> tuple[list[VersionDirectory], list[VersionDirectory]]:
    """Split versions into snapshot and release subsets.

    Both subsets keep the input order.

    Args:
        versions: Ordered version directories.

    Returns:
        Tuple of (snapshots, releases).
    """
    snapshots = [v for v in versions if v.is_snapshot]
    releases = [v for v in versions if not v.is_snapshot]
    return snapshots, releases
