"""Core domain models and path rules for z/OS UNIX System Services (USS).

z/OSMF is picky about the paths it accepts: a trailing slash (other than on
the root) yields "incorrect path", and doubled separators are rejected. This
module centralizes the normalization of USS paths, the interpretation of
listing rows (mode strings, modification times) and the rule used to decide
whether a symbolic link points at a directory.
"""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Protocol

LOGGER = logging.getLogger(__name__)

MTIME_FORMAT = "%Y-%m-%dT%H:%M:%S"
EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)
DEFAULT_MODE = "-rw-r-----"


class FileType(str, Enum):
    """Transfer mode for USS file contents."""

    TEXT = "TEXT"
    BINARY = "BINARY"


@dataclass(frozen=True)
class UnixEntry:
    """
    One row of a USS directory listing.

    Attributes:
        name: Entry name relative to the listed directory (never trimmed).
        parent_path: Directory the entry was listed from, as given by the caller.
        size: Size in bytes.
        user: Owning user.
        group: Owning group.
        mode: Ten character mode string, e.g. ``drwxr-xr-x``.
        mtime: Last modification time.
        target: Symbolic link target, None for other entries.
        is_directory: True for directories and for links that resolve to one.
    """

    name: str
    parent_path: str
    size: int
    user: str
    group: str
    mode: str
    mtime: datetime
    target: str | None = None
    is_directory: bool = False

    @property
    def is_symlink(self) -> bool:
        return self.mode.startswith("l")

    @property
    def permissions(self) -> str:
        """Mode string without the leading type character."""
        return self.mode[1:]

    @property
    def path(self) -> str:
        """Normalized absolute path of the entry."""
        return join_path(self.parent_path, self.name)


def normalize_path(path: str) -> str:
    """
    Canonicalize a USS path for z/OSMF.

    - Collapses doubled separators
    - Removes the trailing slash, except for the root
    - Ensures a single leading slash

    The function is total and idempotent.
    """
    while "//" in path:
        path = path.replace("//", "/")
    if len(path) > 1 and path.endswith("/"):
        path = path[:-1]
    if not path.startswith("/"):
        path = "/" + path
    return path


def join_path(parent: str, name: str) -> str:
    """Join a directory and a child name and normalize the result."""
    return normalize_path(f"{parent}/{name}")


def parent_of(path: str) -> str:
    """Return the normalized parent directory of a USS path."""
    return normalize_path(posixpath.dirname(normalize_path(path)))


def parse_mtime(raw: str | None) -> datetime:
    """
    Parse a listing timestamp such as ``2024-04-12T10:00:00``.

    The value carries no offset and is interpreted in the local time zone of
    the running process. Absent values yield the epoch; malformed values yield
    the epoch and log a warning so a single bad row never aborts a listing.
    """
    if not raw:
        return EPOCH
    try:
        return datetime.strptime(raw, MTIME_FORMAT).astimezone()
    except ValueError:
        LOGGER.warning("Cannot convert mtime %s", raw)
        return EPOCH


def resolve_is_directory(
    mode: str,
    target: str | None,
    entry_path: str,
    exists: Callable[[str], bool],
) -> bool:
    """
    Decide whether a listing row denotes a directory.

    The mode string tells directories apart from regular files, but a symbolic
    link always shows ``l``. For a link with a target the entry path is looked up:
    if it can be read as a file the link points at a file, if z/OSMF reports it
    as not found the link points at a directory.

    Args:
        mode: Mode string of the row.
        target: Symbolic link target, if any.
        entry_path: Normalized path of the row.
        exists: Existence check; must return False only for not-found and raise
                for any other failure.
    """
    if mode.startswith("d"):
        return True
    if target:
        return not exists(entry_path)
    return False


class UssAdapter(Protocol):
    """Interface for the USS operations used by the core domain."""

    def list_children(self, path: str, include_hidden: bool = False) -> list[UnixEntry]:
        """Return the entries of a directory."""
        ...

    def exists(self, path: str) -> bool:
        """Return True if the path can be read."""
        ...
