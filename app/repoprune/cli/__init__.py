"""CLI package for repoprune.

This package contains the Typer application and all subcommands.
"""

from repoprune.cli.main import app

__all__ = ["app"]
