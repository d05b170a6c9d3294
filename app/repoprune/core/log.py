"""Logging setup for the repoprune CLI.

Engine modules log through ``logging.getLogger(__name__)``; the CLI
routes those records to the shared stderr console via Rich.
"""

import logging

from rich.logging import RichHandler

from repoprune.utils.formatting import err_console


def resolve_level(verbose: bool = False, quiet: bool = False) -> int:
    """Map CLI verbosity flags to a logging level.

    Args:
        verbose: Enable debug output.
        quiet: Only show warnings and errors. Ignored when verbose is set.

    Returns:
        Logging level constant.
    """
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure root logging with a Rich handler on stderr.

    Existing root handlers are replaced, so repeated calls (e.g. in
    tests) do not duplicate output.

    Args:
        verbose: Enable debug output.
        quiet: Only show warnings and errors.
    """
    logging.basicConfig(
        level=resolve_level(verbose, quiet),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=err_console,
                markup=False,
                show_time=False,
                show_level=True,
                show_path=False,
            )
        ],
        force=True,
    )
