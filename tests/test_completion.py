import pytest

from zosops.core.jobs import (
    Job,
    JobCompletion,
    JobStatus,
    classify_completion,
    filter_by_status,
    parse_spool_key,
)


@pytest.mark.parametrize(
    ("retcode", "outcome", "error_code"),
    [
        ("CC 0000", JobCompletion.NORMAL, "0000"),
        ("CC 0004", JobCompletion.BADRETURNCODE, "0004"),
        ("CC 0012", JobCompletion.BADRETURNCODE, "0012"),
        ("CC XYZ", JobCompletion.BADRETURNCODE, "XYZ"),
        ("JCL ERROR", JobCompletion.JCLERROR, "ERROR"),
        ("ABEND S0C4", JobCompletion.ABEND, "S0C4"),
        ("ABEND U0100", JobCompletion.ABEND, "U0100"),
        ("XYZ", JobCompletion.NA, ""),
        ("SEC ERROR", JobCompletion.NA, "ERROR"),
        ("NORMAL", JobCompletion.NORMAL, ""),
    ],
)
def test_classify_completion(retcode: str, outcome: JobCompletion, error_code: str):
    result = classify_completion(retcode)

    assert result.outcome is outcome
    assert result.error_code == error_code


def test_classify_completion_absent_retcode_is_active():
    result = classify_completion(None)

    assert result.outcome is JobCompletion.ACTIVE
    assert result.error_code == ""


def test_classify_completion_cc_without_remainder_is_bad_return_code():
    assert classify_completion("CC").outcome is JobCompletion.BADRETURNCODE


def test_classify_completion_splits_on_first_whitespace_run():
    result = classify_completion("CC   0000")

    assert result.outcome is JobCompletion.NORMAL
    assert result.error_code == "0000"


def test_classify_completion_is_case_sensitive():
    assert classify_completion("cc 0000").outcome is JobCompletion.NA


def test_classify_completion_never_raises_on_empty_string():
    assert classify_completion("").outcome is JobCompletion.NA


def test_job_completion_property_uses_retcode():
    job = Job(name="MYJOB", job_id="JOB00001", owner="ME", retcode="ABEND S222")

    assert job.completion.outcome is JobCompletion.ABEND
    assert job.completion.error_code == "S222"


def test_job_status_parse_falls_back_to_unknown():
    assert JobStatus.parse("OUTPUT") is JobStatus.OUTPUT
    assert JobStatus.parse("active") is JobStatus.ACTIVE
    assert JobStatus.parse(None) is JobStatus.UNKNOWN
    assert JobStatus.parse("PRINTING") is JobStatus.UNKNOWN


def test_filter_by_status():
    jobs = [
        Job(name="A", job_id="J1", owner="ME", status=JobStatus.ACTIVE),
        Job(name="B", job_id="J2", owner="ME", status=JobStatus.OUTPUT),
        Job(name="C", job_id="J3", owner="ME", status=JobStatus.UNKNOWN),
    ]

    assert [j.name for j in filter_by_status(jobs, JobStatus.ALL)] == ["A", "B", "C"]
    assert [j.name for j in filter_by_status(jobs, JobStatus.OUTPUT)] == ["B"]


def test_parse_spool_key():
    assert parse_spool_key("JOB00123.2") == ("JOB00123", 2)


@pytest.mark.parametrize("value", ["JOB00123", "JOB00123.", ".2", "JOB00123.JESMSGLG"])
def test_parse_spool_key_rejects_invalid_input(value: str):
    with pytest.raises(ValueError):
        parse_spool_key(value)
