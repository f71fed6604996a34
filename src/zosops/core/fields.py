"""Field access for Zowe SDK response records.

The Zowe SDK returns records either as plain JSON dictionaries (keys such as
``"records-url"`` or ``"class"``) or as response objects exposing the same
data as attributes (``records_url``, ``job_class``). All reads of optional
SDK fields go through this module so the defaulting rule lives in one place.
"""

from __future__ import annotations

from typing import Any, Mapping

UNKNOWN = "UNKNOWN"


def _lookup(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def sdk_field(record: Any, *names: str) -> Any:
    """
    Return the first non-empty value found under any of the given names.

    Each name is tried as given and with dashes replaced by underscores,
    so ``sdk_field(rec, "records-url")`` works for both record shapes.
    Empty strings count as absent.
    """
    for name in names:
        for candidate in dict.fromkeys((name, name.replace("-", "_"))):
            value = _lookup(record, candidate)
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            return value
    return None


def field_or_unknown(record: Any, *names: str) -> str:
    """Return a string field, or the UNKNOWN sentinel when it is absent."""
    value = sdk_field(record, *names)
    return UNKNOWN if value is None else str(value)


def field_or_default(record: Any, default: Any, *names: str) -> Any:
    """Return a field, or ``default`` when it is absent."""
    value = sdk_field(record, *names)
    return default if value is None else value


def int_field(record: Any, default: int, *names: str) -> int:
    """Return an integer field; absent or non-numeric values yield ``default``."""
    value = sdk_field(record, *names)
    try:
        return int(value) if value is not None else default
    except (TypeError, ValueError):
        return default
