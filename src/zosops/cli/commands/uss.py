"""Commands for z/OS UNIX System Services files."""

from pathlib import Path

import typer

from zosops.cli.common.context import UssAppContext, build_uss_context
from zosops.cli.common.exits import exit_from_zos_error, ok_exit, warn_exit
from zosops.cli.common.options import (
    BinaryOpt,
    ConfirmOpt,
    HiddenOpt,
    JsonOpt,
    ProfileOpt,
)
from zosops.cli.common.output import out
from zosops.core.errors import ZosError
from zosops.core.responses import hfs_response
from zosops.core.uss import FileType, normalize_path

uss_app = typer.Typer(
    help="USS file operations.",
    no_args_is_help=False,
    invoke_without_command=True,
)


@uss_app.callback()
def _init(ctx: typer.Context, profile: str | None = ProfileOpt):
    """Initialize USS context."""
    ctx.obj = build_uss_context(profile)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


@uss_app.command("ls")
def ls(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="USS directory"),
    include_hidden: bool = HiddenOpt,
    as_json: bool = JsonOpt,
):
    """List a USS directory."""
    appctx: UssAppContext = ctx.obj

    try:
        with out.status("Loading entries..."):
            entries = appctx.adapter.list_children(path, include_hidden=include_hidden)
    except ZosError as exc:
        exit_from_zos_error(exc)

    if as_json:
        out.json([hfs_response(e).as_dict() for e in entries])
        return

    if not entries:
        warn_exit(f"{normalize_path(path)} is empty", code=0)

    out.entries_table(entries, title=normalize_path(path))


@uss_app.command("cat")
def cat(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="USS file"),
    binary: bool = BinaryOpt,
    output: Path | None = typer.Option(
        None, "--output", "-o", dir_okay=False, help="Write to a local file"
    ),
):
    """Print a USS file, or save it locally with --output."""
    appctx: UssAppContext = ctx.obj
    file_type = FileType.BINARY if binary else FileType.TEXT

    try:
        data = appctx.adapter.get_file(path, file_type)
    except ZosError as exc:
        exit_from_zos_error(exc)

    if output is not None:
        output.write_bytes(data)
        out.success(f"Wrote {len(data)} bytes to {output}")
        return

    out.raw(data.decode("utf-8", errors="replace"))


@uss_app.command("put")
def put(
    ctx: typer.Context,
    local: Path = typer.Argument(..., exists=True, dir_okay=False, help="Local file"),
    remote: str = typer.Argument(..., help="Target USS path"),
    binary: bool = BinaryOpt,
    charset: str = typer.Option(
        "utf-8", "--charset", help="Encoding used to store text files"
    ),
):
    """Upload a local file."""
    appctx: UssAppContext = ctx.obj

    try:
        with out.status(f"Writing {remote}..."):
            if binary:
                with local.open("rb") as handle:
                    appctx.adapter.save_file(remote, handle, FileType.BINARY)
            else:
                text = local.read_text(encoding="utf-8")
                appctx.adapter.save_text_file(remote, text, charset)
    except ZosError as exc:
        exit_from_zos_error(exc)

    out.success(f"Uploaded {local} to {normalize_path(remote)}")


@uss_app.command("mkdir")
def mkdir(ctx: typer.Context, path: str = typer.Argument(..., help="New directory")):
    """Create a directory."""
    appctx: UssAppContext = ctx.obj

    try:
        appctx.adapter.create_folder(path)
    except ZosError as exc:
        exit_from_zos_error(exc)

    out.success(f"Created {normalize_path(path)}")


@uss_app.command("rm")
def rm(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File or directory to delete"),
    confirm: bool = ConfirmOpt,
):
    """Delete a file or a directory tree."""
    appctx: UssAppContext = ctx.obj
    target = normalize_path(path)

    if confirm and not out.confirm(f"Delete {target} and everything below it?"):
        ok_exit("Cancelled")

    try:
        appctx.adapter.delete(target)
    except ZosError as exc:
        exit_from_zos_error(exc)

    out.success(f"Deleted {target}")


@uss_app.command("chmod")
def chmod(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File or directory"),
    mode: str = typer.Argument(..., help="Octal mode, e.g. 755"),
):
    """Change permissions of a path."""
    appctx: UssAppContext = ctx.obj

    try:
        appctx.adapter.change_permissions(path, mode)
    except ZosError as exc:
        exit_from_zos_error(exc)

    out.success(f"Mode of {normalize_path(path)} set to {mode}")


@uss_app.command("exists")
def exists(ctx: typer.Context, path: str = typer.Argument(..., help="USS path")):
    """Exit 0 if the path exists, 1 otherwise."""
    appctx: UssAppContext = ctx.obj

    try:
        found = appctx.adapter.exists(path)
    except ZosError as exc:
        exit_from_zos_error(exc)

    if not found:
        warn_exit(f"{normalize_path(path)} does not exist", code=1)
    out.success(f"{normalize_path(path)} exists")
