from __future__ import annotations

import typer
from rich.console import Console

from wolbot.cli.common import build_registry, load_settings_or_exit
from wolbot.core import wake
from wolbot.errors import WolBotError


def register(app: typer.Typer) -> None:
    @app.command("wol")
    def wake_device(
        name: str = typer.Argument(..., help="Device name"),
        broadcast_ip: str | None = typer.Option(
            None, "--broadcast-ip", help="Override BROADCAST_IP"
        ),
    ) -> None:
        """Send a Wake-on-LAN packet to a saved device."""
        settings = load_settings_or_exit()
        registry = build_registry(settings)
        address = broadcast_ip or settings.broadcast_ip

        console = Console()
        try:
            record = registry.find(name)
            wake(record.mac, address, settings.port)
        except WolBotError as exc:
            console.print(f"[red]✗[/red] {exc}")
            raise typer.Exit(1) from exc

        console.print(
            f"[green]✓[/green] WoL packet sent to {record.name} via {address}:{settings.port}"
        )
