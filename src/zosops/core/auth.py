"""Connection configuration for z/OSMF.

This module centralizes how connection settings are resolved (Zowe team
configuration profiles, overridden by ``ZOWE_OPT_*`` environment variables)
and how the Zowe SDK clients are created from them. It applies small but
important normalization rules (such as sanitizing the host name) to avoid
malformed API URLs.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Any, Mapping

from zowe.core_for_zowe_sdk import ProfileManager
from zowe.zos_files_for_zowe_sdk import Files
from zowe.zos_jobs_for_zowe_sdk import Jobs

from zosops.core.zosmf import ZosmfRequests

DEFAULT_PORT = 443

_ENV_PREFIX = "ZOWE_OPT_"
_TRUE_VALUES = {"1", "true", "yes", "on"}


class AuthError(RuntimeError):
    """Raised when the z/OSMF connection settings cannot be resolved."""


@dataclass(frozen=True)
class ZosConnection:
    """
    Resolved z/OSMF connection settings.

    Attributes:
        host: Host name of the z/OSMF server, without scheme or path.
        port: HTTPS port.
        user: User id.
        password: Password or passphrase.
        reject_unauthorized: Verify the server certificate.
        base_path: Optional API mediation layer base path.
    """

    host: str
    port: int = DEFAULT_PORT
    user: str | None = None
    password: str | None = None
    reject_unauthorized: bool = True
    base_path: str | None = None

    @property
    def base_url(self) -> str:
        """Root URL that z/OSMF REST paths are appended to."""
        url = f"https://{self.host}:{self.port}"
        if self.base_path:
            url = f"{url}/{self.base_path.strip('/')}"
        return url

    def to_profile(self) -> dict[str, Any]:
        """Return the profile mapping the Zowe SDK clients are built from."""
        profile: dict[str, Any] = {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "rejectUnauthorized": self.reject_unauthorized,
        }
        if self.base_path:
            profile["basePath"] = self.base_path
        return profile


def _sanitize_host(host: str | None) -> str | None:
    """
    Normalize a z/OSMF host.

    - Removes a scheme (e.g. 'https://')
    - Removes query strings and paths
    - Removes trailing slashes
    """
    if not host:
        return host
    host = re.sub(r"^[a-zA-Z][a-zA-Z0-9+.-]*://", "", host.strip())
    host = host.split("?", 1)[0]
    host = host.split("/", 1)[0]
    return host.rstrip("/")


def _as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def _env_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    """Return profile values set through ZOWE_OPT_* environment variables."""
    names = {
        "HOST": "host",
        "PORT": "port",
        "USER": "user",
        "PASSWORD": "password",
        "REJECT_UNAUTHORIZED": "rejectUnauthorized",
        "BASE_PATH": "basePath",
    }
    return {
        key: env[f"{_ENV_PREFIX}{suffix}"]
        for suffix, key in names.items()
        if env.get(f"{_ENV_PREFIX}{suffix}")
    }


def _load_profile(profile: str | None) -> dict[str, Any]:
    """Load a zosmf profile from the Zowe team configuration."""
    manager = ProfileManager()
    if profile:
        return dict(manager.load(profile_name=profile))
    return dict(manager.load(profile_type="zosmf"))


def connection_from_mapping(values: Mapping[str, Any]) -> ZosConnection:
    """
    Build connection settings from a Zowe-style profile mapping.

    Raises:
        AuthError: If the host is missing or the port is not numeric.
    """
    host = _sanitize_host(values.get("host"))
    if not host:
        raise AuthError("No z/OSMF host configured (profile 'host' or ZOWE_OPT_HOST).")
    try:
        port = int(values.get("port") or DEFAULT_PORT)
    except (TypeError, ValueError) as exc:
        raise AuthError(f"Invalid z/OSMF port: {values.get('port')!r}") from exc
    return ZosConnection(
        host=host,
        port=port,
        user=values.get("user"),
        password=values.get("password"),
        reject_unauthorized=_as_bool(values.get("rejectUnauthorized"), True),
        base_path=values.get("basePath") or None,
    )


def get_connection(
    profile: str | None = None, env: Mapping[str, str] | None = None
) -> ZosConnection:
    """
    Resolve z/OSMF connection settings.

    If a profile is provided it is loaded from the Zowe team configuration
    (``zowe.config.json`` plus the secure credential store); otherwise the
    default zosmf profile is used. When the environment supplies a host, a
    missing team configuration is not an error. ``ZOWE_OPT_*`` variables
    always take precedence over profile values.
    """
    env = os.environ if env is None else env
    overrides = _env_overrides(env)

    try:
        values = _load_profile(profile)
    except Exception as exc:  # noqa: BLE001 - the SDK raises many unrelated types
        if profile or "host" not in overrides:
            raise AuthError(f"Could not load Zowe profile: {exc}") from exc
        values = {}

    values.update(overrides)
    return connection_from_mapping(values)


def get_jobs_client(connection: ZosConnection) -> Jobs:
    """Create a Zowe jobs SDK client."""
    return Jobs(connection.to_profile())


def get_files_client(connection: ZosConnection) -> Files:
    """Create a Zowe files SDK client."""
    return Files(connection.to_profile())


def get_requests(connection: ZosConnection) -> ZosmfRequests:
    """Create the raw request helper for calls the SDK does not expose."""
    return ZosmfRequests.from_connection(connection)
