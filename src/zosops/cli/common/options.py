"""Common CLI options for the CLI."""

import typer

from zosops.core.jobs import JobStatus

ProfileOpt = typer.Option(
    None,
    "--profile",
    "-p",
    help="Zowe zosmf profile (from zowe.config.json)",
)

VerboseOpt = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Log z/OSMF requests and responses",
)

JsonOpt = typer.Option(
    False,
    "--json",
    help="Print the host attribute bags as JSON",
)

NameOpt = typer.Option(
    "*",
    "--name",
    help="Job name prefix, wildcards allowed",
)

OwnerOpt = typer.Option(
    "*",
    "--owner",
    help="Job owner",
)

StatusOpt = typer.Option(
    JobStatus.ALL,
    "--status",
    help="Only show jobs in this state",
    case_sensitive=False,
)

ConfirmOpt = typer.Option(
    True,
    "--confirm/--no-confirm",
    help="Ask for confirmation before changing anything",
)

WatchOpt = typer.Option(
    False,
    "--watch",
    "-w",
    help="Wait until the submitted job has completed",
)

HiddenOpt = typer.Option(
    False,
    "--all",
    "-a",
    help="Include entries whose names start with a dot",
)

BinaryOpt = typer.Option(
    False,
    "--binary",
    help="Transfer contents without code page conversion",
)
