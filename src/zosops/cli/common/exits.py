"""Exit handling utilities for the CLI."""

from typing import NoReturn

import typer

from zosops.cli.common.output import out
from zosops.core.errors import ErrorKind, ZosError

# Exit code used for caller mistakes (bad spool key, bad mode, ...).
USAGE_EXIT_CODE = 2


def ok_exit(msg: str | None = None) -> NoReturn:
    """Exit 0, optionally printing a message first."""
    if msg:
        out.info(msg)
    raise typer.Exit(0)


def die(msg: str, code: int = 1) -> NoReturn:
    """Exit with an error message and optional exit code."""
    out.error(msg)
    raise typer.Exit(code)


def warn_exit(msg: str, code: int = 0) -> NoReturn:
    """Print a warning and exit, 0 unless told otherwise."""
    out.warn(msg)
    raise typer.Exit(code)


def exit_from_exc(exc: Exception, *, message: str, code: int = 1) -> NoReturn:
    """Print an error and exit, keeping the original exception as the cause."""
    out.error(message)
    raise typer.Exit(code) from exc


def exit_from_zos_error(exc: ZosError) -> NoReturn:
    """Exit with a message derived from the error kind."""
    if exc.kind == ErrorKind.USAGE:
        exit_from_exc(exc, message=str(exc), code=USAGE_EXIT_CODE)
    if exc.kind == ErrorKind.NOT_FOUND:
        exit_from_exc(exc, message=f"Not found. {exc}", code=1)
    status = f" (HTTP {exc.status_code})" if exc.status_code else ""
    exit_from_exc(exc, message=f"z/OSMF request failed{status}: {exc}", code=1)
