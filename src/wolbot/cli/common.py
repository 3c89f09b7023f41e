from __future__ import annotations

from pathlib import Path

import typer

from wolbot.config import Settings, data_dir_from_settings, get_settings
from wolbot.core import DeviceRegistry
from wolbot.storage import RegistryStore


def load_settings_or_exit() -> Settings:
    try:
        return get_settings()
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def build_store(settings: Settings, data_dir: Path | None = None) -> RegistryStore:
    path = data_dir or data_dir_from_settings(settings)
    return RegistryStore(path)


def build_registry(settings: Settings) -> DeviceRegistry:
    return DeviceRegistry.load(build_store(settings))
