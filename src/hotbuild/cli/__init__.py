"""hotbuild CLI powered by Typer."""

import typer

from hotbuild.cli.config import config
from hotbuild.cli.init import init
from hotbuild.cli.watch import watch

app = typer.Typer(
    name="hotbuild",
    help="Rebuild and relaunch a program whenever its sources change.",
    add_completion=False,
    no_args_is_help=True,
)

app.command()(watch)
app.command()(config)
app.command()(init)
