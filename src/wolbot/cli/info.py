from __future__ import annotations

import typer
from rich.console import Console

from wolbot.config import env_file_candidates

from .common import build_registry, load_settings_or_exit


def register(app: typer.Typer) -> None:
    @app.command()
    def info() -> None:
        """Show wolbot configuration sources and registry stats."""
        settings = load_settings_or_exit()
        registry = build_registry(settings)
        env_files = [path for path in env_file_candidates() if path.is_file()]

        console = Console()

        console.print("[bold]wolbot Info[/bold]\n")
        console.print(f"Data directory: {registry.store.path}")
        console.print(f"Device registry: {registry.store.devices_path}")
        console.print(f"Env file: {env_files[0] if env_files else 'none'}")

        console.print("\n[bold]Configuration[/bold]")
        console.print(f"Authorized chat: {settings.chat_id or 'not set'}")
        console.print(f"Broadcast address: {settings.broadcast_ip}:{settings.port}")
        console.print(f"Bot token: {'set' if settings.bot_token else 'not set'}")

        console.print("\n[bold]Statistics[/bold]")
        console.print(f"Devices: {len(registry)}")
