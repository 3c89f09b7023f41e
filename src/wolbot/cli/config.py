from __future__ import annotations

import typer

from wolbot.config import env_file_candidates, render_settings

from .common import load_settings_or_exit

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_config() -> None:
    settings = load_settings_or_exit()
    env_files = [path for path in env_file_candidates() if path.is_file()]

    source = str(env_files[0]) if env_files else "environment"
    typer.echo(f"Config source: {source}")
    typer.echo(render_settings(settings))
