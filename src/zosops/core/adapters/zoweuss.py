from __future__ import annotations

import logging
import re
from typing import Any, BinaryIO

from zowe.zos_files_for_zowe_sdk import Files

from zosops.core.errors import (
    SDK_ERRORS,
    ZosUsageError,
    status_code_of,
    translate_errors,
    wrap_sdk_error,
)
from zosops.core.fields import field_or_default, field_or_unknown, int_field, sdk_field
from zosops.core.uss import (
    DEFAULT_MODE,
    FileType,
    UnixEntry,
    join_path,
    normalize_path,
    parse_mtime,
    resolve_is_directory,
)
from zosops.core.zosmf import FS_PATH, ZosmfRequests

LOGGER = logging.getLogger(__name__)

FOLDER_MODE = "rwxr-xr-x"

_OCTAL_RE = re.compile(r"[0-7]{3,4}")


class ZoweUssAdapter:
    """Adapter around the Zowe SDK USS file APIs."""

    def __init__(self, client: Files, requests: ZosmfRequests):
        """Create a USS adapter from an SDK client and a raw request helper."""
        self.client = client
        self.requests = requests
        # Only kept for debug logging.
        self.last_response: Any = None

    def _entry_from_sdk(self, item: Any, parent_path: str, listed: str) -> UnixEntry:
        """Translate one listing row; symlinks are looked up to resolve directories."""
        name = str(sdk_field(item, "name"))
        mode = str(field_or_default(item, DEFAULT_MODE, "mode"))
        target = sdk_field(item, "target")

        is_directory = resolve_is_directory(
            mode, target, join_path(listed, name), self.exists
        )
        if mode.startswith("l"):
            shown_target = field_or_unknown(item, "target")
        else:
            shown_target = None

        return UnixEntry(
            name=name,
            parent_path=parent_path,
            size=int_field(item, 0, "size"),
            user=field_or_unknown(item, "user"),
            group=field_or_unknown(item, "group"),
            mode=mode,
            mtime=parse_mtime(sdk_field(item, "mtime")),
            target=shown_target,
            is_directory=is_directory,
        )

    def list_children(self, path: str, include_hidden: bool = False) -> list[UnixEntry]:
        """
        List the entries of a USS directory.

        The self and parent entries (``.`` and ``..``) are never returned, and
        rows without a name are skipped. Dot-files are returned only when
        ``include_hidden`` is set.
        """
        LOGGER.debug("getHFSChildren %s, %s", path, include_hidden)
        listed = normalize_path(path)

        # Files.list_files rows have no symlink "target"; the raw listing does.
        with translate_errors(f"List {listed}"):
            listing = self.requests.get_json(FS_PATH, params={"path": listed})
        self.last_response = listing

        if isinstance(listing, list):
            items = listing
        else:
            items = sdk_field(listing, "items") or []

        entries: list[UnixEntry] = []
        for item in items:
            name = sdk_field(item, "name")
            if name is None or name in (".", ".."):
                continue
            if not include_hidden and str(name).startswith("."):
                continue
            entries.append(self._entry_from_sdk(item, path, listed))
        return entries

    def exists(self, path: str) -> bool:
        """Return True if the path can be read; False if z/OSMF reports 404."""
        LOGGER.debug("existsHFS %s", path)
        target = normalize_path(path)
        try:
            self.last_response = self.requests.get_text(
                ZosmfRequests.fs_path(target),
                params={"search": target, "insensitive": "false"},
            )
        except SDK_ERRORS as exc:
            if status_code_of(exc) == 404:
                return False
            raise wrap_sdk_error(exc, f"Check {target}") from exc
        return True

    def exists_file(self, path: str, name: str) -> bool:
        """Return True if ``name`` exists inside the directory ``path``."""
        LOGGER.debug("existsHFSFile %s %s", path, name)
        return self.exists(join_path(path, name))

    def create_folder(self, path: str) -> None:
        """Create a directory with mode rwxr-xr-x."""
        LOGGER.debug("createFolderHFS %s", path)
        target = normalize_path(path)
        with translate_errors(f"Create {target}"):
            self.last_response = self.client.create_uss(target, "dir", FOLDER_MODE)
        LOGGER.debug("ussCreate %s", self.last_response)

    def delete(self, path: str) -> None:
        """Delete a file, or a directory and everything below it."""
        LOGGER.debug("deletePathHFS %s", path)
        target = normalize_path(path)
        with translate_errors(f"Delete {target}"):
            self.last_response = self.client.delete_uss(target, recursive=True)
        LOGGER.debug("ussDelete %s", self.last_response)

    def save_file(
        self,
        path: str,
        contents: bytes | BinaryIO,
        file_type: FileType = FileType.BINARY,
    ) -> None:
        """Write contents to a USS file unchanged (binary transfer)."""
        LOGGER.debug("saveFileHFS %s %s", path, file_type)
        data = contents if isinstance(contents, bytes) else contents.read()
        target = normalize_path(path)
        with translate_errors(f"Write {target}"):
            self.requests.put_bytes(ZosmfRequests.fs_path(target), data)

    def save_text_file(self, path: str, text: str, charset: str = "utf-8") -> None:
        """Write text to a USS file, encoded in ``charset``."""
        LOGGER.debug("saveFileHFS %s %s", path, charset)
        try:
            data = text.encode(charset)
        except LookupError as exc:
            raise ZosUsageError(f"Unknown charset '{charset}'.") from exc
        self.save_file(path, data, FileType.BINARY)

    def get_file(self, path: str, file_type: FileType = FileType.BINARY) -> bytes:
        """
        Read a USS file.

        BINARY returns the bytes as stored; TEXT lets z/OSMF convert the
        contents and returns them UTF-8 encoded.
        """
        LOGGER.debug("getFileHFS %s, %s", path, file_type)
        target = normalize_path(path)
        with translate_errors(f"Read {target}"):
            if file_type == FileType.TEXT:
                return self.requests.get_text(ZosmfRequests.fs_path(target)).encode(
                    "utf-8"
                )
            return self.requests.get_bytes(ZosmfRequests.fs_path(target))

    def change_permissions(self, path: str, octal: str) -> None:
        """Change the mode of a USS path, e.g. ``change_permissions(p, "755")``."""
        LOGGER.debug("changePermissions %s %s", path, octal)
        if not _OCTAL_RE.fullmatch(octal):
            raise ZosUsageError(f"Mode must be 3 or 4 octal digits, got '{octal}'.")
        target = normalize_path(path)
        with translate_errors(f"Change mode of {target}"):
            self.requests.put_json(
                ZosmfRequests.fs_path(target), {"request": "chmod", "mode": octal}
            )
