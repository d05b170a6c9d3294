"""Cleanup settings and their TOML persistence.

This module provides the raw settings model read from the settings file
and overridden by command-line options. Range checks and the default
policy are handled later by the retention policy validator, so that
out-of-range values are reported as configuration errors rather than
schema errors.

Settings are stored in ~/.config/repoprune/config.toml
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from repoprune.core.paths import get_config_path, get_default_repository_root


class CleanupSettings(BaseModel):
    """Raw cleanup settings.

    Integer thresholds use -1 to disable a rule.

    Attributes:
        repository_root: Local repository root (None = ~/.m2/repository).
        group_id: Group id of the current artifact.
        artifact_id: Artifact id of the current artifact.
        delete_current_snapshot: Apply snapshot rules to the current artifact.
        delete_all_snapshots: Apply snapshot rules to every artifact.
        delete_current_release: Apply release rules to the current artifact.
        snapshot_retention_delay: Snapshot age threshold in days.
        snapshot_versions_retention: Number of snapshot versions to keep.
        release_retention_delay: Release age threshold in days.
        release_versions_retention: Number of release versions to keep.
        delete_from_regular_expression: Expression selecting files to delete.
        delete_empty_folders: Remove directories left without files.
        delete_whole_local_repository: Purge the whole repository.
        execute_delete_on_exit: Defer deletions until the end of the run.
        execution_root: Invocation is the top-level module of the build.
    """

    model_config = ConfigDict(extra="forbid")

    repository_root: Annotated[
        Path | None,
        Field(description="Local repository root"),
    ] = None
    group_id: Annotated[str | None, Field(description="Current artifact group id")] = None
    artifact_id: Annotated[str | None, Field(description="Current artifact id")] = None
    delete_current_snapshot: Annotated[
        bool,
        Field(description="Apply snapshot rules to the current artifact"),
    ] = False
    delete_all_snapshots: Annotated[
        bool,
        Field(description="Apply snapshot rules to every artifact"),
    ] = False
    delete_current_release: Annotated[
        bool,
        Field(description="Apply release rules to the current artifact"),
    ] = False
    snapshot_retention_delay: Annotated[
        int,
        Field(description="Snapshot age threshold in days (-1 = disabled)"),
    ] = -1
    snapshot_versions_retention: Annotated[
        int,
        Field(description="Snapshot versions to keep (-1 = disabled)"),
    ] = -1
    release_retention_delay: Annotated[
        int,
        Field(description="Release age threshold in days (-1 = disabled)"),
    ] = -1
    release_versions_retention: Annotated[
        int,
        Field(description="Release versions to keep (-1 = disabled)"),
    ] = -1
    delete_from_regular_expression: Annotated[
        str | None,
        Field(description="Delete files whose path matches this expression"),
    ] = None
    delete_empty_folders: Annotated[
        bool,
        Field(description="Remove directories left without files"),
    ] = True
    delete_whole_local_repository: Annotated[
        bool,
        Field(description="Purge the whole local repository"),
    ] = False
    execute_delete_on_exit: Annotated[
        bool,
        Field(description="Defer deletions until the end of the run"),
    ] = True
    execution_root: Annotated[
        bool,
        Field(description="Invocation is the build's execution root"),
    ] = True

    @property
    def effective_repository_root(self) -> Path:
        """Get the configured repository root, or the conventional one.

        Returns:
            Expanded repository root path.
        """
        if self.repository_root is not None:
            return self.repository_root.expanduser()
        return get_default_repository_root()


class SettingsError(Exception):
    """Base exception for settings file errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> CleanupSettings:
    """Load cleanup settings from a TOML file.

    A missing file is not an error: defaults are returned.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated CleanupSettings object.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the file cannot be read or doesn't match the schema.
    """
    settings_path = path or get_config_path()

    if not settings_path.exists():
        return CleanupSettings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return CleanupSettings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {settings_path}: {e}") from e


def apply_overrides(settings: CleanupSettings, overrides: dict[str, Any]) -> CleanupSettings:
    """Return a copy of settings with non-None overrides applied.

    Args:
        settings: Base settings (usually loaded from file).
        overrides: Field values from the command line, None meaning "not given".

    Returns:
        Validated CleanupSettings with overrides applied.

    Raises:
        SettingsError: If an override does not match the schema.
    """
    given = {key: value for key, value in overrides.items() if value is not None}
    if not given:
        return settings

    try:
        return CleanupSettings.model_validate({**settings.model_dump(), **given})
    except ValidationError as e:
        raise SettingsError(f"Invalid option value: {e}") from e


def save_settings(settings: CleanupSettings, path: Path | None = None) -> Path:
    """Save cleanup settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The CleanupSettings object to save.
        path: Path to save the settings. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(settings_to_dict(settings), f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path


def settings_to_dict(settings: CleanupSettings) -> dict[str, object]:
    """Convert CleanupSettings to a dictionary for TOML serialization.

    TOML has no null value, so unset optional fields are omitted and
    paths are written as strings.

    Args:
        settings: The CleanupSettings to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, object] = {}
    for key, value in settings.model_dump().items():
        if value is None:
            continue
        result[key] = str(value) if isinstance(value, Path) else value
    return result
