import pytest
from zowe.zos_jobs_for_zowe_sdk.response import JobResponse

from zosops.core.adapters.zowejobs import ZoweJobsAdapter
from zosops.core.errors import (
    ErrorKind,
    ZosConnectionError,
    ZosNotFoundError,
    ZosUsageError,
)
from zosops.core.fields import UNKNOWN
from zosops.core.jobs import Job, JobCompletion, JobStatus, wait_for_completion
from zosops.core.zosmf import JOBS_PATH

MYJOB = {
    "jobname": "MYJOB",
    "jobid": "JOB00001",
    "owner": "ME",
    "status": "OUTPUT",
    "class": "A",
    "retcode": "CC 0000",
}


class _Requests:
    def __init__(self, jobs=None, texts=None, error=None):
        self.jobs = jobs if jobs is not None else [MYJOB]
        self.texts = texts or {}
        self.error = error
        self.calls: list[tuple] = []

    def get_json(self, path, params=None):
        self.calls.append(("get_json", path, params))
        if self.error:
            raise self.error
        return [j for j in self.jobs if j.get("jobid") == params["jobid"]]

    def get_text(self, url, params=None):
        self.calls.append(("get_text", url))
        return self.texts[url]


class _Client:
    def __init__(self, jobs=None, spool=None):
        self.jobs = jobs or []
        self.spool = spool or []
        self.calls: list[tuple] = []

    def list_jobs(self, owner=None, prefix="*"):
        self.calls.append(("list_jobs", owner, prefix))
        return self.jobs

    def submit_plaintext(self, jcl):
        self.calls.append(("submit_plaintext", jcl))
        return {"jobname": "MYJOB", "jobid": "JOB00002", "owner": "ME", "status": "INPUT"}

    def submit_from_mainframe(self, jcl_path):
        self.calls.append(("submit_from_mainframe", jcl_path))
        return {"jobname": "MEMBER", "jobid": "JOB00003", "owner": "ME"}

    def get_spool_files(self, correlator):
        self.calls.append(("get_spool_files", correlator))
        return self.spool

    def cancel_job(self, jobname, jobid):
        self.calls.append(("cancel_job", jobname, jobid))
        return {"status": 0}

    def delete_job(self, jobname, jobid, modify_version="2.0"):
        self.calls.append(("delete_job", jobname, jobid, modify_version))
        return {"status": 0}


def _spool(seq: int, ddname: str) -> dict:
    return {
        "jobid": "JOB00001",
        "jobname": "MYJOB",
        "ddname": ddname,
        "stepname": "JES2",
        "id": seq,
        "records-url": f"https://zosmf/jobs/MYJOB/JOB00001/files/{seq}/records",
    }


SPOOL = [_spool(2, "JESMSGLG"), _spool(3, "JESJCL")]
SPOOL_TEXTS = {s["records-url"]: f"<{s['ddname']}>" for s in SPOOL}


def test_get_job_translates_record():
    requests = _Requests()
    adapter = ZoweJobsAdapter(_Client(), requests)

    job = adapter.get_job("JOB00001")

    assert job == Job(
        name="MYJOB",
        job_id="JOB00001",
        owner="ME",
        status=JobStatus.OUTPUT,
        job_class="A",
        retcode="CC 0000",
    )
    assert job.completion.outcome is JobCompletion.NORMAL
    assert requests.calls == [
        ("get_json", JOBS_PATH, {"owner": "*", "jobid": "JOB00001"})
    ]


def test_get_job_defaults_absent_fields_to_unknown():
    adapter = ZoweJobsAdapter(_Client(), _Requests(jobs=[{"jobid": "JOB00009"}]))

    job = adapter.get_job("JOB00009")

    assert job.name == UNKNOWN
    assert job.owner == UNKNOWN
    assert job.job_class == UNKNOWN
    assert job.status is JobStatus.UNKNOWN
    assert job.completion.outcome is JobCompletion.ACTIVE


def test_get_job_not_found():
    adapter = ZoweJobsAdapter(_Client(), _Requests(jobs=[]))

    with pytest.raises(ZosNotFoundError) as info:
        adapter.get_job("JOB00404")

    assert info.value.kind is ErrorKind.NOT_FOUND


def test_get_job_wraps_transport_errors(http_error):
    error = http_error(500)
    adapter = ZoweJobsAdapter(_Client(), _Requests(error=error))

    with pytest.raises(ZosConnectionError) as info:
        adapter.get_job("JOB00001")

    assert info.value.status_code == 500
    assert info.value.kind is ErrorKind.CONNECTION
    assert info.value.__cause__ is error


def test_get_jobs_skips_nameless_rows_and_filters_status():
    client = _Client(
        jobs=[
            MYJOB,
            {"jobid": "JOB00005", "status": "OUTPUT"},
            {"jobname": "", "jobid": "JOB00006", "status": "OUTPUT"},
            {"jobname": "RUNNING", "jobid": "JOB00007", "status": "ACTIVE"},
        ]
    )
    adapter = ZoweJobsAdapter(client, _Requests())

    all_jobs = adapter.get_jobs(name="MY*", status=JobStatus.ALL, owner="ME")
    output = adapter.get_jobs(name="MY*", status=JobStatus.OUTPUT, owner="ME")

    assert [j.job_id for j in all_jobs] == ["JOB00001", "JOB00007"]
    assert [j.job_id for j in output] == ["JOB00001"]
    assert client.calls[0] == ("list_jobs", "ME", "MY*")


def test_get_jobs_accepts_sdk_job_responses():
    record = JobResponse(
        {
            "jobname": "ATTRJOB",
            "jobid": "JOB00010",
            "owner": "ME",
            "status": "ACTIVE",
            "class": "B",
            "retcode": None,
        }
    )
    adapter = ZoweJobsAdapter(_Client(jobs=[record]), _Requests())

    (job,) = adapter.get_jobs()

    assert job.name == "ATTRJOB"
    assert job.job_class == "B"
    assert job.status is JobStatus.ACTIVE
    assert job.completion.outcome is JobCompletion.ACTIVE


def test_submit_jcl_returns_job_handle():
    client = _Client()
    adapter = ZoweJobsAdapter(client, _Requests())

    job = adapter.submit_jcl("//MYJOB JOB\n")

    assert (job.name, job.job_id, job.owner) == ("MYJOB", "JOB00002", "ME")
    assert client.calls == [("submit_plaintext", "//MYJOB JOB\n")]


def test_submit_member_formats_dataset_member():
    client = _Client()
    adapter = ZoweJobsAdapter(client, _Requests())

    job = adapter.submit_member("ME.JCL", "MEMBER")

    assert job.job_id == "JOB00003"
    assert client.calls == [("submit_from_mainframe", "ME.JCL(MEMBER)")]


def test_cancel_job_uses_name_and_id():
    client = _Client()
    adapter = ZoweJobsAdapter(client, _Requests())

    adapter.cancel_job("JOB00001")

    assert client.calls == [("cancel_job", "MYJOB", "JOB00001")]
    assert adapter.last_response == {"status": 0}


def test_delete_job_uses_modify_version_2():
    client = _Client()
    adapter = ZoweJobsAdapter(client, _Requests())

    adapter.delete_job("JOB00001")

    assert client.calls == [("delete_job", "MYJOB", "JOB00001", "2.0")]


@pytest.mark.parametrize("action", ["cancel_job", "delete_job", "list_spool_files"])
def test_job_without_name_is_a_usage_error(action: str):
    client = _Client()
    adapter = ZoweJobsAdapter(client, _Requests(jobs=[{"jobid": "JOB00009"}]))

    with pytest.raises(ZosUsageError, match="JOB00009"):
        getattr(adapter, action)("JOB00009")

    assert client.calls == []


def test_list_spool_files_translates_records():
    client = _Client(spool=SPOOL)
    adapter = ZoweJobsAdapter(client, _Requests())

    spool_files = adapter.list_spool_files("JOB00001")

    assert client.calls == [("get_spool_files", "MYJOB/JOB00001")]
    assert [s.key for s in spool_files] == ["JOB00001.2", "JOB00001.3"]
    assert [s.step_label for s in spool_files] == ["JOB00001.JESMSGLG", "JOB00001.JESJCL"]
    assert spool_files[0].records_url == SPOOL[0]["records-url"]


def test_get_spool_file_downloads_matching_sequence():
    requests = _Requests(texts=SPOOL_TEXTS)
    adapter = ZoweJobsAdapter(_Client(spool=SPOOL), requests)

    assert adapter.get_spool_file("JOB00001.3") == "<JESJCL>"
    assert requests.calls[-1] == ("get_text", SPOOL[1]["records-url"])


def test_get_spool_file_unknown_sequence_returns_empty_text():
    adapter = ZoweJobsAdapter(_Client(spool=SPOOL), _Requests(texts=SPOOL_TEXTS))

    assert adapter.get_spool_file("JOB00001.99") == ""


def test_get_spool_file_rejects_malformed_key():
    adapter = ZoweJobsAdapter(_Client(spool=SPOOL), _Requests())

    with pytest.raises(ZosUsageError):
        adapter.get_spool_file("JOB00001")


def test_download_without_locator_is_a_usage_error():
    spool = [{"jobid": "JOB00001", "ddname": "SYSOUT", "id": 102}]
    adapter = ZoweJobsAdapter(_Client(spool=spool), _Requests())

    with pytest.raises(ZosUsageError, match="JOB00001.102"):
        adapter.get_spool_file("JOB00001.102")


def test_get_job_spool_concatenates_all_files():
    adapter = ZoweJobsAdapter(_Client(spool=SPOOL), _Requests(texts=SPOOL_TEXTS))

    assert adapter.get_job_spool("JOB00001") == "<JESMSGLG><JESJCL>"


def test_wait_for_completion_polls_until_retcode():
    class _Adapter:
        def __init__(self):
            self.retcodes = [None, None, "CC 0004"]

        def get_job(self, job_id: str) -> Job:
            return Job(name="MYJOB", job_id=job_id, owner="ME", retcode=self.retcodes.pop(0))

    job = wait_for_completion(_Adapter(), "JOB00001", poll_interval=0)

    assert job.completion.outcome is JobCompletion.BADRETURNCODE


def test_wait_for_completion_times_out():
    class _Adapter:
        def get_job(self, job_id: str) -> Job:
            return Job(name="MYJOB", job_id=job_id, owner="ME")

    with pytest.raises(TimeoutError):
        wait_for_completion(_Adapter(), "JOB00001", poll_interval=0, timeout=0)
