"""Logging setup for the CLI."""

import logging

from rich.logging import RichHandler

from zosops.cli.common.output import console


def configure_logging(verbose: bool = False) -> None:
    """Route log records through Rich; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    if not verbose:
        return
    # urllib3 connection chatter drowns the request log of the adapters.
    logging.getLogger("urllib3").setLevel(logging.INFO)
