"""Error types for z/OS operations.

Every failure coming out of the Zowe SDK or the underlying HTTP transport is
re-raised as a single ``ZosError`` family, tagged with an ``ErrorKind`` so
callers can tell transport problems, not-found results, and caller misuse
apart without catching SDK-specific exception classes.
"""

from __future__ import annotations

import re
from contextlib import contextmanager
from enum import Enum
from typing import Iterator

import requests
from zowe.core_for_zowe_sdk.exceptions import RequestFailed, UnexpectedStatus

# Exceptions raised by the collaborators that are wrapped into ZosConnectionError.
SDK_ERRORS: tuple[type[BaseException], ...] = (
    RequestFailed,
    UnexpectedStatus,
    requests.RequestException,
)

_STATUS_RE = re.compile(r"status code(?: from z/OSMF was)?:? (\d{3})")


class ErrorKind(str, Enum):
    """
    Classification of failures surfaced by the adapters.

    Values:
        CONNECTION: Transport or protocol failure reported by z/OSMF or the SDK.
        NOT_FOUND: The remote resource does not exist (HTTP 404).
        MALFORMED: The response contained data that could not be interpreted.
                   Only used for logging; such data is degraded to a default.
        USAGE: The caller asked for something that cannot be done with the
               given input (for example a job without a name).
    """

    CONNECTION = "CONNECTION"
    NOT_FOUND = "NOT_FOUND"
    MALFORMED = "MALFORMED"
    USAGE = "USAGE"


class ZosError(RuntimeError):
    """Base class for all errors raised by the z/OS adapters."""

    kind: ErrorKind = ErrorKind.CONNECTION

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ZosConnectionError(ZosError):
    """Raised when a request to z/OSMF fails."""

    kind = ErrorKind.CONNECTION


class ZosNotFoundError(ZosConnectionError):
    """Raised when z/OSMF reports that a resource does not exist."""

    kind = ErrorKind.NOT_FOUND


class ZosUsageError(ZosError):
    """Raised when an operation is missing a required precondition."""

    kind = ErrorKind.USAGE


def status_code_of(exc: BaseException) -> int | None:
    """Return the HTTP status code carried by an SDK or transport exception."""
    response = getattr(exc, "response", None)
    code = getattr(response, "status_code", None)
    if isinstance(code, int):
        return code

    code = getattr(exc, "status_code", None)
    if isinstance(code, int):
        return code

    match = _STATUS_RE.search(str(exc))
    return int(match.group(1)) if match else None


def wrap_sdk_error(exc: BaseException, action: str) -> ZosConnectionError:
    """
    Translate a collaborator exception into the adapter error family.

    Args:
        exc: Exception raised by the Zowe SDK or by requests.
        action: Short description of what was attempted, used in the message.

    Returns:
        A ZosNotFoundError for HTTP 404, otherwise a ZosConnectionError.
        The caller is expected to ``raise ... from exc``.
    """
    status = status_code_of(exc)
    message = f"{action} failed: {exc}"
    if status == 404:
        return ZosNotFoundError(message, status_code=status)
    return ZosConnectionError(message, status_code=status)


@contextmanager
def translate_errors(action: str) -> Iterator[None]:
    """Re-raise collaborator exceptions raised inside the block as ZosError."""
    try:
        yield
    except SDK_ERRORS as exc:
        raise wrap_sdk_error(exc, action) from exc
