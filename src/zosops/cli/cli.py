"""CLI application for z/OS operations tooling."""

import typer

from zosops.cli.commands.jobs import app as jobs_app
from zosops.cli.commands.uss import uss_app
from zosops.cli.common.logs import configure_logging
from zosops.cli.common.options import VerboseOpt

app = typer.Typer(
    help="zosops - z/OS jobs and USS tooling over z/OSMF",
    no_args_is_help=True,
)

app.add_typer(jobs_app, name="jobs", help="Submit / list / cancel z/OS jobs and read spool.")
app.add_typer(uss_app, name="uss")


@app.callback()
def _main(verbose: bool = VerboseOpt):
    """Configure logging for every command."""
    configure_logging(verbose)


if __name__ == "__main__":
    app()
