"""Attribute-bag responses handed back to the host.

Hosts of the z/OS connection layer consume results as ordered key/value
bags whose keys come from a fixed vocabulary rather than typed objects.
The adapters work with typed models (Job, SpoolFile, UnixEntry); this module
is the only place where those models are flattened into bags.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator

from zosops.core.jobs import Job, SpoolFile
from zosops.core.uss import UnixEntry


class Attr(str, Enum):
    """Keys understood by the host."""

    NAME = "NAME"
    JOB_NAME = "JOB_NAME"
    JOB_ID = "JOB_ID"
    JOB_USER = "JOB_USER"
    JOB_STATUS = "JOB_STATUS"
    JOB_CLASS = "JOB_CLASS"
    JOB_COMPLETION = "JOB_COMPLETION"
    JOB_ERROR_CODE = "JOB_ERROR_CODE"
    JOB_SPOOL_FILES_AVAILABLE = "JOB_SPOOL_FILES_AVAILABLE"
    JOB_HAS_SPOOL_FILES = "JOB_HAS_SPOOL_FILES"
    JOB_STEPNAME = "JOB_STEPNAME"
    JOB_DDNAME = "JOB_DDNAME"
    JOB_DSNAME = "JOB_DSNAME"
    HFS_PARENT_PATH = "HFS_PARENT_PATH"
    HFS_SIZE = "HFS_SIZE"
    HFS_DIRECTORY = "HFS_DIRECTORY"
    HFS_USER = "HFS_USER"
    HFS_GROUP = "HFS_GROUP"
    HFS_PERMISSIONS = "HFS_PERMISSIONS"
    HFS_LAST_USED_DATE = "HFS_LAST_USED_DATE"
    HFS_SYMLINK = "HFS_SYMLINK"
    HFS_LINKPATH = "HFS_LINKPATH"


class ConnectionResponse:
    """Ordered bag of (Attr, value) pairs."""

    def __init__(self) -> None:
        self._items: list[tuple[Attr, Any]] = []

    def add_attribute(self, key: Attr, value: Any) -> None:
        """Append an attribute; string values are trimmed."""
        if isinstance(value, str):
            value = value.strip()
        self._items.append((key, value))

    def add_attribute_untrimmed(self, key: Attr, value: Any) -> None:
        """Append an attribute without trimming it."""
        self._items.append((key, value))

    def get(self, key: Attr, default: Any = None) -> Any:
        """Return the first value stored under ``key``."""
        for k, v in self._items:
            if k == key:
                return v
        return default

    def keys(self) -> list[Attr]:
        return [k for k, _ in self._items]

    def items(self) -> Iterator[tuple[Attr, Any]]:
        return iter(self._items)

    def as_dict(self) -> dict[str, Any]:
        """Plain mapping with string keys, e.g. for JSON output."""
        return {k.value: v for k, v in self._items}

    def __contains__(self, key: object) -> bool:
        return any(k == key for k, _ in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        inner = ", ".join(f"{k.value}={v!r}" for k, v in self._items)
        return f"{self.__class__.__name__}({inner})"


def job_response(job: Job) -> ConnectionResponse:
    """Flatten a job snapshot, including its classified completion."""
    completion = job.completion

    cr = ConnectionResponse()
    cr.add_attribute(Attr.NAME, job.name)
    cr.add_attribute(Attr.JOB_ID, job.job_id)
    cr.add_attribute(Attr.JOB_USER, job.owner)
    cr.add_attribute(Attr.JOB_STATUS, job.status)
    cr.add_attribute(Attr.JOB_CLASS, job.job_class)
    cr.add_attribute(Attr.JOB_SPOOL_FILES_AVAILABLE, True)
    cr.add_attribute(Attr.JOB_HAS_SPOOL_FILES, True)
    cr.add_attribute(Attr.JOB_ERROR_CODE, completion.error_code)
    cr.add_attribute(Attr.JOB_COMPLETION, completion.outcome)
    return cr


def submit_response(job: Job) -> ConnectionResponse:
    """Flatten the job handle returned by a submit."""
    cr = ConnectionResponse()
    cr.add_attribute(Attr.JOB_NAME, job.name)
    cr.add_attribute(Attr.JOB_ID, job.job_id)
    cr.add_attribute(Attr.JOB_USER, job.owner)
    return cr


def spool_response(spool: SpoolFile) -> ConnectionResponse:
    """Flatten a spool file descriptor (a "job step" for the host)."""
    cr = ConnectionResponse()
    cr.add_attribute(Attr.JOB_STEPNAME, spool.step_label)
    cr.add_attribute(Attr.JOB_ID, spool.job_id)
    cr.add_attribute(Attr.JOB_DDNAME, spool.ddname)
    cr.add_attribute(Attr.JOB_DSNAME, spool.key)
    cr.add_attribute(Attr.JOB_SPOOL_FILES_AVAILABLE, True)
    return cr


def hfs_response(entry: UnixEntry) -> ConnectionResponse:
    """Flatten a USS listing row."""
    cr = ConnectionResponse()
    cr.add_attribute(Attr.HFS_PARENT_PATH, entry.parent_path)
    cr.add_attribute_untrimmed(Attr.NAME, entry.name)
    cr.add_attribute(Attr.HFS_SIZE, entry.size)
    cr.add_attribute(Attr.HFS_DIRECTORY, entry.is_directory)
    cr.add_attribute(Attr.HFS_USER, entry.user)
    cr.add_attribute(Attr.HFS_GROUP, entry.group)
    cr.add_attribute(Attr.HFS_PERMISSIONS, entry.permissions)
    cr.add_attribute(Attr.HFS_LAST_USED_DATE, entry.mtime)
    cr.add_attribute(Attr.HFS_SYMLINK, entry.is_symlink)
    if entry.is_symlink:
        cr.add_attribute(Attr.HFS_LINKPATH, entry.target)
    return cr
