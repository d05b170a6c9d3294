"""CLI commands for repoprune.

This package contains all subcommand implementations.
"""

from repoprune.cli.commands import clean, config, listing

__all__ = ["clean", "config", "listing"]
