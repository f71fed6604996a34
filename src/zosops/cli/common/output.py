"""Output formatting utilities for the CLI."""

from __future__ import annotations

import json
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Iterable

import questionary
from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from zosops.cli.tui import QUESTIONARY_STYLE_CONFIRM
from zosops.core.jobs import JobCompletion

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
        "dir": "bold blue",
        "link": "cyan",
    }
)

console = Console(theme=_THEME)

_COMPLETION_STYLE = {
    JobCompletion.NORMAL: "ok",
    JobCompletion.ACTIVE: "warn",
    JobCompletion.NA: "meta",
}


def _json_default(value: Any) -> Any:
    """Serialize enums and datetimes found in attribute bags."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def info(self, msg: str) -> None:
        """Print a progress or informational line."""
        console.print(f"[title]›[/] {msg}")

    @contextmanager
    def status(self, msg: str):
        """Spinner shown while a z/OSMF request is in flight."""
        with console.status(msg, spinner="dots"):
            yield

    def success(self, msg: str) -> None:
        console.print(f"[ok]✓[/] {msg}")

    def warn(self, msg: str) -> None:
        console.print(f"[warn]⚠[/] {msg}")

    def error(self, msg: str) -> None:
        console.print(f"[err]✗[/] {msg}")

    def raw(self, text: str) -> None:
        """Print text without markup or highlighting (spool output, file contents)."""
        console.print(text, markup=False, highlight=False, soft_wrap=True)

    def json(self, payload: Any) -> None:
        """Print a JSON document (attribute bags or lists of them)."""
        console.print_json(json.dumps(payload, default=_json_default))

    def confirm(self, message: str, *, default: bool = False) -> bool:
        """
        Ask a yes/no question before a destructive z/OS action.

        Returns:
            True only on an explicit yes; Ctrl-C counts as no.
        """
        console.print("[meta]Answer y or n, then press Enter[/]")
        prompt = questionary.confirm(
            f"[ZOSOPS] {message}",
            default=default,
            style=QUESTIONARY_STYLE_CONFIRM,
            qmark="✦",
            auto_enter=False,
        )
        return bool(prompt.ask())

    def jobs_table(self, jobs: Iterable[Any], title: str = "Jobs") -> None:
        """
        Expects objects with .job_id .name .owner .status .job_class .completion
        (like zosops.core.jobs.Job)
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Job ID", style="ok", no_wrap=True)
        t.add_column("Name")
        t.add_column("Owner", style="meta")
        t.add_column("Status")
        t.add_column("Class", style="meta")
        t.add_column("Completion")

        for j in jobs:
            completion = j.completion
            style = _COMPLETION_STYLE.get(completion.outcome, "err")
            label = completion.outcome.value
            if completion.error_code:
                label = f"{label} {completion.error_code}"
            t.add_row(
                j.job_id,
                j.name,
                j.owner,
                j.status.value,
                j.job_class,
                f"[{style}]{label}[/{style}]",
            )

        console.print(t)

    def spool_table(self, spool_files: Iterable[Any], title: str = "Spool files") -> None:
        """
        Expects objects with .key .ddname .stepname
        (like zosops.core.jobs.SpoolFile)
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Key", style="ok", no_wrap=True)
        t.add_column("DD name")
        t.add_column("Step", style="meta")

        for s in spool_files:
            t.add_row(s.key, s.ddname, s.stepname or "")

        console.print(t)

    def entries_table(self, entries: Iterable[Any], title: str = "Entries") -> None:
        """
        Render a USS directory listing.

        Expects objects with .name .mode .size .user .group .mtime .target
        .is_directory (like zosops.core.uss.UnixEntry).
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Mode", style="meta", no_wrap=True)
        t.add_column("User")
        t.add_column("Group")
        t.add_column("Size", justify="right")
        t.add_column("Modified", style="meta")
        t.add_column("Name")

        for e in entries:
            if e.is_symlink:
                name = f"[link]{e.name}[/] -> {e.target}"
                if e.is_directory:
                    name += "/"
            elif e.is_directory:
                name = f"[dir]{e.name}/[/]"
            else:
                name = e.name
            t.add_row(
                e.mode,
                e.user,
                e.group,
                str(e.size),
                e.mtime.strftime("%Y-%m-%d %H:%M"),
                name,
            )

        console.print(t)


out = Out()
