from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from wolbot.cli.common import build_registry, load_settings_or_exit
from wolbot.errors import WolBotError
from wolbot.models import DeviceRecord


def _fail(console: Console, exc: WolBotError) -> typer.Exit:
    console.print(f"[red]✗[/red] {exc}")
    return typer.Exit(1)


def list_devices() -> None:
    """List saved devices."""
    settings = load_settings_or_exit()
    registry = build_registry(settings)

    console = Console()

    if not len(registry):
        console.print("No devices saved.")
        console.print(
            f"Use 'wolbot add' or the bot to add one; registry: {registry.store.devices_path}"
        )
        return

    table = Table()
    table.add_column("Name", style="cyan")
    table.add_column("MAC Address", style="green")

    for record in registry.list():
        table.add_row(record.name, record.mac)

    console.print(table)


def add_device(
    name: str = typer.Argument(..., help="Device name"),
    mac: str = typer.Argument(..., help="MAC address (XX:XX:XX:XX:XX:XX)"),
) -> None:
    """Add a device."""
    settings = load_settings_or_exit()
    registry = build_registry(settings)

    console = Console()
    try:
        record = DeviceRecord.create(name, mac)
        registry.add(record)
    except WolBotError as exc:
        raise _fail(console, exc) from exc

    console.print(f"[green]✓[/green] Added '{record.name}' → {record.mac}")


def modify_device(
    name: str = typer.Argument(..., help="Current device name"),
    new_name: str | None = typer.Option(None, "--name", help="New device name"),
    new_mac: str | None = typer.Option(None, "--mac", help="New MAC address"),
) -> None:
    """Rename a device or change its MAC address."""
    settings = load_settings_or_exit()
    registry = build_registry(settings)

    console = Console()
    if new_name is None and new_mac is None:
        console.print("[yellow]![/yellow] Nothing to change; pass --name and/or --mac")
        raise typer.Exit(1)

    try:
        updated = registry.update(name, new_name=new_name, new_mac=new_mac)
    except WolBotError as exc:
        raise _fail(console, exc) from exc

    console.print(f"[green]✓[/green] Updated '{name}' → '{updated.name}' ({updated.mac})")


def delete_device(name: str = typer.Argument(..., help="Device name")) -> None:
    """Delete a device."""
    settings = load_settings_or_exit()
    registry = build_registry(settings)

    console = Console()
    try:
        registry.delete(name)
    except WolBotError as exc:
        raise _fail(console, exc) from exc

    console.print(f"[green]✓[/green] Deleted device '{name}'")


def register(app: typer.Typer) -> None:
    app.command("list")(list_devices)
    app.command("add")(add_device)
    app.command("modify")(modify_device)
    app.command("delete")(delete_device)
