"""Raw z/OSMF REST requests.

The Zowe SDK covers most job and file operations, but a few calls are only
reachable through the REST API itself: looking a job up by id alone,
downloading spool records from the locator URL z/OSMF hands out, binary
content transfer and chmod. ``ZosmfRequests`` issues those calls on a
``requests.Session`` configured from the same connection settings.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping
from urllib.parse import quote, urljoin

import requests

if TYPE_CHECKING:
    from zosops.core.auth import ZosConnection

LOGGER = logging.getLogger(__name__)

JOBS_PATH = "/zosmf/restjobs/jobs"
FS_PATH = "/zosmf/restfiles/fs"

BINARY_HEADERS = {"X-IBM-Data-Type": "binary"}


class ZosmfRequests:
    """Thin request helper bound to one z/OSMF server."""

    def __init__(self, base_url: str, session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/") + "/"
        self.session = session or requests.Session()
        self.session.headers.setdefault("X-CSRF-ZOSMF-HEADER", "")

    @classmethod
    def from_connection(cls, connection: ZosConnection) -> ZosmfRequests:
        """Create a helper with the connection's credentials and TLS policy."""
        session = requests.Session()
        if connection.user:
            session.auth = (connection.user, connection.password or "")
        session.verify = connection.reject_unauthorized
        return cls(connection.base_url, session)

    def url(self, path_or_url: str) -> str:
        """Resolve a REST path against the base URL; absolute URLs pass through."""
        return urljoin(self.base_url, path_or_url.lstrip("/"))

    @staticmethod
    def fs_path(uss_path: str) -> str:
        """REST path addressing a USS file or directory."""
        return FS_PATH + quote(uss_path)

    def _send(
        self,
        method: str,
        path_or_url: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        data: bytes | None = None,
        json: Any = None,
    ) -> requests.Response:
        url = self.url(path_or_url)
        LOGGER.debug("%s %s params=%s", method, url, params)
        response = self.session.request(
            method, url, params=params, headers=headers, data=data, json=json
        )
        LOGGER.debug("%s %s -> %s", method, url, response.status_code)
        response.raise_for_status()
        return response

    def get_json(self, path_or_url: str, params: Mapping[str, Any] | None = None) -> Any:
        return self._send("GET", path_or_url, params=params).json()

    def get_text(self, path_or_url: str, params: Mapping[str, Any] | None = None) -> str:
        return self._send("GET", path_or_url, params=params).text

    def get_bytes(self, path_or_url: str) -> bytes:
        return self._send("GET", path_or_url, headers=BINARY_HEADERS).content

    def put_bytes(self, path_or_url: str, data: bytes) -> None:
        headers = {**BINARY_HEADERS, "Content-Type": "application/octet-stream"}
        self._send("PUT", path_or_url, headers=headers, data=data)

    def put_json(self, path_or_url: str, payload: Mapping[str, Any]) -> None:
        self._send("PUT", path_or_url, json=dict(payload))
