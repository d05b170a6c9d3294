"""Exception hierarchy for the retention engine.

Validation failures are fatal and raised before any scan or deletion.
Deletion failures are reported per path and never abort a run.
"""


class RetentionError(Exception):
    """Base exception for retention engine errors."""


class RepositoryEnvironmentError(RetentionError):
    """Raised when the repository root is missing or not writable."""


class ConfigurationError(RetentionError):
    """Raised when retention settings are out of range or malformed."""


class DeletionError(RetentionError):
    """Raised by a filesystem gateway when a single path cannot be deleted.

    Attributes:
        path: Path that could not be deleted.
    """

    def __init__(self, path: str, message: str) -> None:
        super().__init__(message)
        self.path = path
