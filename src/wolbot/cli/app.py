from __future__ import annotations

from typing import Annotated

import typer

from wolbot.utils.logging import setup_logging

from . import config as config_cmd
from .commands.devices import register as register_devices
from .commands.run import register as register_run
from .commands.wake import register as register_wake
from .info import register as register_info

app = typer.Typer(
    help="wolbot - Wake-on-LAN device manager for Telegram", no_args_is_help=True
)

app.add_typer(config_cmd.app, name="config")

register_run(app)
register_devices(app)
register_wake(app)
register_info(app)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit"),
    ] = False,
) -> None:
    """wolbot CLI."""
    setup_logging()

    if version:
        from importlib.metadata import version as get_version

        typer.echo(f"wolbot version {get_version('wolbot')}")
        raise typer.Exit()
