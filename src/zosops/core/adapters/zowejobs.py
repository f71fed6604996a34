from __future__ import annotations

import logging
from typing import Any

from zowe.zos_jobs_for_zowe_sdk import Jobs

from zosops.core.errors import ZosNotFoundError, ZosUsageError, translate_errors
from zosops.core.fields import field_or_unknown, int_field, sdk_field
from zosops.core.jobs import (
    Job,
    JobStatus,
    SpoolFile,
    filter_by_status,
    parse_spool_key,
)
from zosops.core.zosmf import JOBS_PATH, ZosmfRequests

LOGGER = logging.getLogger(__name__)


def job_from_sdk(raw: Any) -> Job:
    """Translate one z/OSMF job record into a Job, defaulting absent fields."""
    retcode = sdk_field(raw, "retcode")
    return Job(
        name=field_or_unknown(raw, "jobname"),
        job_id=field_or_unknown(raw, "jobid"),
        owner=field_or_unknown(raw, "owner"),
        status=JobStatus.parse(sdk_field(raw, "status")),
        job_class=field_or_unknown(raw, "job_class", "class"),
        retcode=None if retcode is None else str(retcode),
    )


def spool_from_sdk(raw: Any) -> SpoolFile:
    """Translate one z/OSMF spool file record into a SpoolFile."""
    return SpoolFile(
        job_id=field_or_unknown(raw, "jobid"),
        ddname=field_or_unknown(raw, "ddname"),
        id=int_field(raw, 0, "id"),
        records_url=sdk_field(raw, "records-url"),
        stepname=sdk_field(raw, "stepname"),
    )


class ZoweJobsAdapter:
    """Adapter around the Zowe SDK jobs APIs."""

    def __init__(self, client: Jobs, requests: ZosmfRequests):
        """Create a jobs adapter from an SDK client and a raw request helper."""
        self.client = client
        self.requests = requests
        # Only kept for debug logging.
        self.last_response: Any = None

    def _get_raw(self, job_id: str) -> Any:
        """Return the z/OSMF record of a job, looked up by id alone."""
        with translate_errors(f"Get job {job_id}"):
            rows = self.requests.get_json(
                JOBS_PATH, params={"owner": "*", "jobid": job_id}
            )
        if not rows:
            raise ZosNotFoundError(f"Job {job_id} not found.", status_code=404)
        return rows[0]

    @staticmethod
    def _identity(raw: Any, job_id: str, action: str) -> tuple[str, str]:
        """Return (jobname, jobid); both are required to address a job."""
        name = sdk_field(raw, "jobname")
        jid = sdk_field(raw, "jobid")
        if not name or not jid:
            raise ZosUsageError(
                f"Cannot {action} job {job_id}: job name or id is missing."
            )
        return str(name), str(jid)

    def get_job(self, job_id: str) -> Job:
        """Return a snapshot of a job."""
        LOGGER.debug("getJob %s", job_id)
        return job_from_sdk(self._get_raw(job_id))

    def get_jobs(
        self,
        name: str = "*",
        status: JobStatus = JobStatus.ALL,
        owner: str = "*",
    ) -> list[Job]:
        """Return jobs matching a name prefix and owner, filtered by status."""
        LOGGER.debug("getJobs %s %s %s", name, status, owner)
        with translate_errors(f"List jobs {name}"):
            rows = self.client.list_jobs(owner=owner, prefix=name)

        jobs: list[Job] = []
        for raw in rows or []:
            if not sdk_field(raw, "jobname"):
                continue
            jobs.append(job_from_sdk(raw))
        return filter_by_status(jobs, status)

    def submit_jcl(self, jcl: str) -> Job:
        """Submit JCL text and return the job handle."""
        LOGGER.debug("submitJob (%d characters)", len(jcl))
        with translate_errors("Submit JCL"):
            raw = self.client.submit_plaintext(jcl)
        LOGGER.debug("jobSubmit %s", raw)
        return job_from_sdk(raw)

    def submit_member(self, dataset: str, member: str) -> Job:
        """Submit the JCL stored in a data set member."""
        LOGGER.debug("submitDataSetMember %s %s", dataset, member)
        target = f"{dataset}({member})"
        with translate_errors(f"Submit {target}"):
            raw = self.client.submit_from_mainframe(target)
        LOGGER.debug("jobSubmit %s", raw)
        return job_from_sdk(raw)

    def list_spool_files(self, job_id: str) -> list[SpoolFile]:
        """Return the spool files of a job."""
        LOGGER.debug("getJobSteps %s", job_id)
        name, jid = self._identity(self._get_raw(job_id), job_id, "list spool files of")
        with translate_errors(f"List spool files of {job_id}"):
            rows = self.client.get_spool_files(f"{name}/{jid}")
        return [spool_from_sdk(raw) for raw in rows or []]

    def download(self, spool: SpoolFile) -> str:
        """Return the records of a spool file."""
        if not spool.records_url:
            raise ZosUsageError(f"Spool file {spool.key} has no records URL.")
        with translate_errors(f"Download spool file {spool.key}"):
            self.last_response = self.requests.get_text(spool.records_url)
        return self.last_response

    def get_spool_file(self, key: str) -> str:
        """
        Return the records of one spool file.

        Args:
            key: Spool key ``<jobId>.<sequenceId>``.

        Returns:
            The records, or an empty string when the job has no spool file
            with that sequence id.
        """
        LOGGER.debug("getJobStepSpool %s", key)
        try:
            job_id, seq = parse_spool_key(key)
        except ValueError as exc:
            raise ZosUsageError(str(exc)) from exc

        for spool in self.list_spool_files(job_id):
            if spool.id == seq:
                return self.download(spool)

        LOGGER.warning("Job %s has no spool file %d", job_id, seq)
        return ""

    def get_job_spool(self, job_id: str) -> str:
        """Return the records of all spool files of a job, concatenated."""
        LOGGER.debug("getJobSpool %s", job_id)
        return "".join(self.download(s) for s in self.list_spool_files(job_id))

    def cancel_job(self, job_id: str) -> None:
        """Cancel a job."""
        LOGGER.debug("cancelJob %s", job_id)
        name, jid = self._identity(self._get_raw(job_id), job_id, "cancel")
        with translate_errors(f"Cancel job {job_id}"):
            self.last_response = self.client.cancel_job(name, jid)
        LOGGER.debug("jobCancel %s", self.last_response)

    def delete_job(self, job_id: str) -> None:
        """Purge a job and its output."""
        LOGGER.debug("deleteJob %s", job_id)
        name, jid = self._identity(self._get_raw(job_id), job_id, "delete")
        with translate_errors(f"Delete job {job_id}"):
            self.last_response = self.client.delete_job(name, jid, modify_version="2.0")
        LOGGER.debug("jobDelete %s", self.last_response)
