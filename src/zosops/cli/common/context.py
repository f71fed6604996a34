"""Application context management for the CLI."""

import os
from dataclasses import dataclass

from zosops.cli.common.exits import die
from zosops.core.adapters.zowejobs import ZoweJobsAdapter
from zosops.core.adapters.zoweuss import ZoweUssAdapter
from zosops.core.auth import (
    AuthError,
    ZosConnection,
    get_connection,
    get_files_client,
    get_jobs_client,
    get_requests,
)

_POLL_INTERVAL_ENV = "ZOSOPS_POLL_INTERVAL"
_DEFAULT_POLL_INTERVAL_SECONDS = 5.0


def poll_interval_seconds() -> float:
    """Return the job polling interval, honoring env override."""
    raw = os.getenv(_POLL_INTERVAL_ENV)
    if raw is None:
        return _DEFAULT_POLL_INTERVAL_SECONDS
    try:
        value = float(raw)
    except ValueError:
        return _DEFAULT_POLL_INTERVAL_SECONDS
    return value if value > 0 else _DEFAULT_POLL_INTERVAL_SECONDS


@dataclass
class JobsAppContext:
    """Application context holding the z/OSMF connection and jobs adapter."""

    profile: str | None
    connection: ZosConnection
    adapter: ZoweJobsAdapter


@dataclass
class UssAppContext:
    """Application context holding the z/OSMF connection and USS adapter."""

    profile: str | None
    connection: ZosConnection
    adapter: ZoweUssAdapter


def _connect(profile: str | None) -> ZosConnection:
    try:
        return get_connection(profile)
    except AuthError as exc:
        die(str(exc), code=1)


def build_jobs_context(profile: str | None) -> JobsAppContext:
    """Build and return the application context for job commands.

    Args:
        profile: Optional Zowe profile name to use for the connection.

    Returns:
        JobsAppContext: Application context with configured connection and adapter.
    """
    connection = _connect(profile)
    adapter = ZoweJobsAdapter(get_jobs_client(connection), get_requests(connection))
    return JobsAppContext(profile=profile, connection=connection, adapter=adapter)


def build_uss_context(profile: str | None) -> UssAppContext:
    """Build and return the application context for USS commands."""
    connection = _connect(profile)
    adapter = ZoweUssAdapter(get_files_client(connection), get_requests(connection))
    return UssAppContext(profile=profile, connection=connection, adapter=adapter)
