"""Commands for managing z/OS batch jobs."""

import re
from pathlib import Path

import typer

from zosops.cli.common.context import (
    JobsAppContext,
    build_jobs_context,
    poll_interval_seconds,
)
from zosops.cli.common.exits import (
    USAGE_EXIT_CODE,
    die,
    exit_from_zos_error,
    ok_exit,
    warn_exit,
)
from zosops.cli.common.options import (
    ConfirmOpt,
    JsonOpt,
    NameOpt,
    OwnerOpt,
    ProfileOpt,
    StatusOpt,
    WatchOpt,
)
from zosops.cli.common.output import out
from zosops.cli.tui import select_jobs as tui_select_jobs
from zosops.core.errors import ZosError
from zosops.core.jobs import (
    Job,
    JobCompletion,
    JobStatus,
    parse_spool_key,
    wait_for_completion,
)
from zosops.core.responses import job_response, spool_response, submit_response

_MEMBER_RE = re.compile(r"^\s*([^()\s]+)\(([^()\s]+)\)\s*$")

app = typer.Typer(
    help="Work with z/OS batch jobs",
    no_args_is_help=False,
    invoke_without_command=True,
)


@app.callback()
def _init(ctx: typer.Context, profile: str | None = ProfileOpt):
    """Initialize jobs context."""
    ctx.obj = build_jobs_context(profile)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


def _parse_member_or_exit(value: str) -> tuple[str, str]:
    """Split `DATA.SET(MEMBER)` into its parts."""
    match = _MEMBER_RE.match(value)
    if not match:
        die(f"Expected DATA.SET(MEMBER), got '{value}'.", code=USAGE_EXIT_CODE)
    return match.group(1).upper(), match.group(2).upper()


def _pick_jobs(appctx: JobsAppContext, job_ids: list[str], message: str) -> list[str]:
    """Return the given job ids, or let the user pick from their own jobs."""
    if job_ids:
        return job_ids
    owner = appctx.connection.user or "*"
    with out.status("Loading jobs..."):
        jobs = appctx.adapter.get_jobs(name="*", status=JobStatus.ALL, owner=owner)
    if not jobs:
        warn_exit("No jobs found", code=0)
    return [j.job_id for j in tui_select_jobs(jobs, message=message)]


@app.command("list")
def list_jobs(
    ctx: typer.Context,
    name: str = NameOpt,
    owner: str = OwnerOpt,
    status: JobStatus = StatusOpt,
    as_json: bool = JsonOpt,
):
    """
    List jobs by name prefix, owner and status.
    """
    appctx: JobsAppContext = ctx.obj

    try:
        with out.status("Loading jobs..."):
            jobs = appctx.adapter.get_jobs(name=name, status=status, owner=owner)
    except ZosError as exc:
        exit_from_zos_error(exc)

    if as_json:
        out.json([job_response(j).as_dict() for j in jobs])
        return

    if not jobs:
        warn_exit("No jobs found", code=0)

    out.jobs_table(jobs, title="Jobs")


@app.command()
def get(ctx: typer.Context, job_id: str, as_json: bool = JsonOpt):
    """
    Show a single job.
    """
    appctx: JobsAppContext = ctx.obj

    try:
        job = appctx.adapter.get_job(job_id)
    except ZosError as exc:
        exit_from_zos_error(exc)

    if as_json:
        out.json(job_response(job).as_dict())
        return
    out.jobs_table([job], title=job.job_id)


@app.command()
def submit(
    ctx: typer.Context,
    jcl_file: Path | None = typer.Argument(
        None, exists=True, dir_okay=False, help="Local JCL file to submit"
    ),
    member: str | None = typer.Option(
        None, "--member", "-m", help="Submit DATA.SET(MEMBER) instead of a file"
    ),
    watch: bool = WatchOpt,
    as_json: bool = JsonOpt,
):
    """
    Submit JCL from a local file or a data set member.
    """
    appctx: JobsAppContext = ctx.obj

    if (jcl_file is None) == (member is None):
        die("Provide either a JCL file or --member.", code=USAGE_EXIT_CODE)

    try:
        with out.status("Submitting job..."):
            if member is not None:
                dataset, name = _parse_member_or_exit(member)
                job = appctx.adapter.submit_member(dataset, name)
            else:
                job = appctx.adapter.submit_jcl(jcl_file.read_text(encoding="utf-8"))
    except ZosError as exc:
        exit_from_zos_error(exc)

    if as_json:
        out.json(submit_response(job).as_dict())
    else:
        out.success(f"Submitted {job.name} as {job.job_id}")

    if not watch:
        return

    try:
        with out.status(f"Waiting for {job.job_id}..."):
            done: Job = wait_for_completion(
                appctx.adapter, job.job_id, poll_interval=poll_interval_seconds()
            )
    except ZosError as exc:
        exit_from_zos_error(exc)

    out.jobs_table([done], title="Completed")
    if done.completion.outcome != JobCompletion.NORMAL:
        raise typer.Exit(1)


@app.command()
def steps(ctx: typer.Context, job_id: str, as_json: bool = JsonOpt):
    """
    List the spool files of a job.
    """
    appctx: JobsAppContext = ctx.obj

    try:
        with out.status("Loading spool files..."):
            spool_files = appctx.adapter.list_spool_files(job_id)
    except ZosError as exc:
        exit_from_zos_error(exc)

    if as_json:
        out.json([spool_response(s).as_dict() for s in spool_files])
        return

    if not spool_files:
        warn_exit(f"Job {job_id} has no spool files", code=0)

    out.spool_table(spool_files, title=f"Spool files of {job_id}")


@app.command()
def spool(
    ctx: typer.Context,
    target: str = typer.Argument(..., help="JOBID for all output or JOBID.SEQ for one file"),
):
    """
    Print spool output of a job or of one of its spool files.
    """
    appctx: JobsAppContext = ctx.obj

    try:
        parse_spool_key(target)
        single = True
    except ValueError:
        single = False

    try:
        with out.status("Downloading spool..."):
            if single:
                text = appctx.adapter.get_spool_file(target)
            else:
                text = appctx.adapter.get_job_spool(target)
    except ZosError as exc:
        exit_from_zos_error(exc)

    out.raw(text)


@app.command()
def cancel(
    ctx: typer.Context,
    job_ids: list[str] = typer.Argument(None, help="Jobs to cancel"),
    confirm: bool = ConfirmOpt,
):
    """
    Cancel jobs; without job ids, pick from your own jobs.
    """
    appctx: JobsAppContext = ctx.obj

    try:
        selected = _pick_jobs(appctx, job_ids or [], "Select jobs to cancel:")
    except ZosError as exc:
        exit_from_zos_error(exc)

    if not selected:
        warn_exit("No jobs selected", code=0)

    if confirm and not out.confirm(f"Cancel {len(selected)} job(s)?"):
        ok_exit("Cancelled")

    try:
        for job_id in selected:
            with out.status(f"Cancelling {job_id}..."):
                appctx.adapter.cancel_job(job_id)
            out.success(f"Cancelled {job_id}")
    except ZosError as exc:
        exit_from_zos_error(exc)


@app.command()
def delete(
    ctx: typer.Context,
    job_ids: list[str] = typer.Argument(None, help="Jobs to purge"),
    confirm: bool = ConfirmOpt,
):
    """
    Purge jobs and their output; without job ids, pick from your own jobs.
    """
    appctx: JobsAppContext = ctx.obj

    try:
        selected = _pick_jobs(appctx, job_ids or [], "Select jobs to delete:")
    except ZosError as exc:
        exit_from_zos_error(exc)

    if not selected:
        warn_exit("No jobs selected", code=0)

    if confirm and not out.confirm(f"Delete {len(selected)} job(s) and their output?"):
        ok_exit("Cancelled")

    try:
        for job_id in selected:
            with out.status(f"Deleting {job_id}..."):
                appctx.adapter.delete_job(job_id)
            out.success(f"Deleted {job_id}")
    except ZosError as exc:
        exit_from_zos_error(exc)
