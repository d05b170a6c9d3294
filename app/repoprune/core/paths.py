"""XDG-compliant path management for repoprune.

This module provides standardized paths following the XDG Base Directory
Specification for configuration, plus the conventional location of the
local artifact repository.

XDG defaults:
- Config: ~/.config/repoprune/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "repoprune"

# Local repository location used when none is configured
DEFAULT_REPOSITORY_SUBDIR = ".m2/repository"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/repoprune/ (or XDG_CONFIG_HOME/repoprune/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the default settings file path.

    Returns:
        Path to ~/.config/repoprune/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/repoprune/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_default_repository_root() -> Path:
    """Get the conventional local repository root.

    Returns:
        Path to ~/.m2/repository.
    """
    return Path.home() / DEFAULT_REPOSITORY_SUBDIR
