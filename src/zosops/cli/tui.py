"""Terminal UI utilities for z/OS operations tooling.

Questionary uses prompt_toolkit under the hood; the styles below are shared by
every interactive prompt so checkbox and confirm dialogs look consistent.
"""

from __future__ import annotations

import questionary
from prompt_toolkit.styles import Style

from zosops.core.jobs import Job

# z/OS job names are at most eight characters.
_MAX_JOB_NAME_WIDTH = 8

QUESTIONARY_STYLE_SELECT = Style.from_dict(
    {
        "question": "bold ansicyan",
        "answer": "bold ansigreen",
        "pointer": "bold ansigreen",
        "highlighted": "bold ansigreen",
        "selected": "bold ansigreen",
        "checkbox": "ansibrightblack",
        "checkbox-selected": "bold ansigreen",
        "instruction": "ansibrightblack",
        "disabled": "ansibrightblack",
    }
)

QUESTIONARY_STYLE_CONFIRM = Style.from_dict(
    {
        "question": "bold ansired",
        "answer": "bold ansired",
        "instruction": "ansibrightblack",
    }
)


def _job_choice_title(job: Job, *, name_width: int) -> str:
    """Format one job choice as `<name>  <job_id>  <status>` with aligned columns."""
    return f"{job.name.ljust(name_width)}  {job.job_id.ljust(8)}  {job.status.value}"


def select_jobs(jobs: list[Job], message: str = "Select jobs:") -> list[Job]:
    """Display a checkbox prompt to select jobs from a list.

    Args:
        jobs: A list of Job objects to choose from.
        message: Prompt shown above the list.

    Returns:
        A list of selected Job objects, or an empty list if none selected.
    """
    name_width = min(
        max((len(job.name) for job in jobs), default=0), _MAX_JOB_NAME_WIDTH
    )

    choices = [
        questionary.Choice(
            title=_job_choice_title(job, name_width=name_width),
            value=job,
        )
        for job in jobs
    ]

    return (
        questionary.checkbox(
            message,
            choices=choices,
            style=QUESTIONARY_STYLE_SELECT,
        ).ask()
        or []
    )
