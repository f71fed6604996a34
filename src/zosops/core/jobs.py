"""Core job domain models plus completion classification and lookup logic.

This module defines the core job data structures (Job, SpoolFile, JobStatus,
JobCompletion) and the domain-level operations on them: classifying a job's
raw return-code string, addressing spool files by key, and filtering job
listings. It is intentionally free of SDK and CLI concerns so that the same
logic can be reused by different frontends (CLI, automation, tests).
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

LOGGER = logging.getLogger(__name__)

_RETCODE_SPLIT = re.compile(r"\s+")


class JobStatus(str, Enum):
    """
    Enumeration of z/OS job states as reported by z/OSMF.

    Values:
        ALL: Wildcard used when filtering job listings.
        INPUT: The job is queued for execution.
        ACTIVE: The job is executing.
        OUTPUT: The job finished and its output is on the spool.
        UNKNOWN: The state was absent or not recognized.
    """

    ALL = "ALL"
    INPUT = "INPUT"
    ACTIVE = "ACTIVE"
    OUTPUT = "OUTPUT"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, raw: str | None) -> JobStatus:
        """Return the member named ``raw``, or UNKNOWN."""
        if not raw:
            return cls.UNKNOWN
        try:
            return cls[raw.strip().upper()]
        except KeyError:
            LOGGER.warning("Unrecognized job status %r", raw)
            return cls.UNKNOWN


class JobCompletion(str, Enum):
    """
    How a job finished, derived from its return-code string.

    Values:
        NORMAL: Completed with condition code 0000.
        BADRETURNCODE: Completed with any other condition code.
        JCLERROR: The JCL could not be processed.
        ABEND: The job ended abnormally.
        ACTIVE: No return code yet, the job is still running.
        NA: A return code is present but not recognized.
    """

    NORMAL = "NORMAL"
    BADRETURNCODE = "BADRETURNCODE"
    JCLERROR = "JCLERROR"
    ABEND = "ABEND"
    ACTIVE = "ACTIVE"
    NA = "NOT-AVAILABLE"


@dataclass(frozen=True)
class CompletionResult:
    """Classified completion plus the detail text following the leading token."""

    outcome: JobCompletion
    error_code: str = ""


def classify_completion(retcode: str | None) -> CompletionResult:
    """
    Classify a z/OSMF return-code string such as ``"CC 0004"``.

    The string is split on its first whitespace run into a leading token and
    an optional remainder. ``JCL`` maps to JCLERROR, ``ABEND`` to ABEND and
    ``CC`` to NORMAL for ``0000`` or BADRETURNCODE otherwise. Other tokens are
    matched against the JobCompletion names and fall back to NA.

    Args:
        retcode: Raw return code, or None while the job has not finished.

    Returns:
        The classification. This function never raises.
    """
    if retcode is None:
        return CompletionResult(JobCompletion.ACTIVE)

    parts = _RETCODE_SPLIT.split(retcode, maxsplit=1)
    token = parts[0]
    remainder = parts[1] if len(parts) == 2 else ""

    if token == "JCL":
        outcome = JobCompletion.JCLERROR
    elif token == "CC":
        outcome = (
            JobCompletion.NORMAL if remainder == "0000" else JobCompletion.BADRETURNCODE
        )
    elif token == "ABEND":
        outcome = JobCompletion.ABEND
    else:
        try:
            outcome = JobCompletion[token]
        except KeyError:
            outcome = JobCompletion.NA

    return CompletionResult(outcome, remainder)


@dataclass(frozen=True)
class SpoolFile:
    """
    One spool data set of a job.

    Attributes:
        job_id: Identifier of the owning job.
        ddname: DD name of the output, e.g. ``JESMSGLG``.
        id: Sequence number of the spool file within the job.
        records_url: Locator used to download the records, if reported.
        stepname: Step that produced the output, if reported.
    """

    job_id: str
    ddname: str
    id: int
    records_url: str | None = None
    stepname: str | None = None

    @property
    def key(self) -> str:
        """Composite key ``<jobId>.<sequenceId>``."""
        return f"{self.job_id}.{self.id}"

    @property
    def step_label(self) -> str:
        """Display label ``<jobId>.<ddname>``."""
        return f"{self.job_id}.{self.ddname}"


@dataclass(frozen=True)
class Job:
    """
    Snapshot of a z/OS batch job.

    Attributes:
        name: Job name.
        job_id: Job identifier, e.g. ``JOB01234``.
        owner: User that owns the job.
        status: Execution state.
        job_class: Job class.
        retcode: Raw return-code string, None while the job is running.
        spool_files: Spool files, when they were requested.
    """

    name: str
    job_id: str
    owner: str
    status: JobStatus = JobStatus.UNKNOWN
    job_class: str = ""
    retcode: str | None = None
    spool_files: tuple[SpoolFile, ...] = field(default_factory=tuple)

    @property
    def completion(self) -> CompletionResult:
        """Classified completion of this snapshot."""
        return classify_completion(self.retcode)


def parse_spool_key(key: str) -> tuple[str, int]:
    """
    Split a spool key ``<jobId>.<sequenceId>`` into its parts.

    Raises:
        ValueError: If the key is not of that form.
    """
    job_id, sep, seq = key.strip().rpartition(".")
    if not sep or not job_id:
        raise ValueError(f"Spool key must look like JOBID.SEQ, got '{key}'.")
    try:
        return job_id, int(seq)
    except ValueError as exc:
        raise ValueError(f"Spool sequence must be numeric, got '{seq}'.") from exc


class JobsAdapter(Protocol):
    """Interface for the job operations used by the core domain."""

    def get_job(self, job_id: str) -> Job:
        """Return a snapshot of a single job."""
        ...

    def get_jobs(self, name: str, status: JobStatus, owner: str) -> list[Job]:
        """Return jobs matching a name prefix, status and owner."""
        ...


def filter_by_status(jobs: list[Job], status: JobStatus) -> list[Job]:
    """Keep the jobs in ``status``; ALL keeps everything."""
    if status == JobStatus.ALL:
        return list(jobs)
    return [job for job in jobs if job.status == status]


def wait_for_completion(
    adapter: JobsAdapter,
    job_id: str,
    poll_interval: float = 5,
    timeout: float | None = None,
) -> Job:
    """
    Block until a job has a return code.

    Args:
        adapter: Jobs adapter used to query the job.
        job_id: Identifier of the job to monitor.
        poll_interval: Seconds to wait between status checks.
        timeout: Give up after this many seconds; None waits forever.

    Returns:
        The first snapshot whose completion is no longer ACTIVE.

    Raises:
        TimeoutError: If the timeout expires first.
    """
    start = time.monotonic()
    while True:
        job = adapter.get_job(job_id)
        if job.completion.outcome != JobCompletion.ACTIVE:
            return job
        if timeout is not None and time.monotonic() - start >= timeout:
            raise TimeoutError(f"Job {job_id} did not complete within {timeout}s")
        time.sleep(poll_interval)
