from __future__ import annotations

import logging

import typer

from wolbot.bot import run_bot
from wolbot.cli.common import build_registry, load_settings_or_exit
from wolbot.core import ConversationEngine

logger = logging.getLogger(__name__)


def register(app: typer.Typer) -> None:
    @app.command()
    def run() -> None:
        """Start the Telegram bot and poll for updates."""
        settings = load_settings_or_exit()
        registry = build_registry(settings)
        engine = ConversationEngine(
            registry,
            authorized_session=settings.chat_id,
            broadcast_ip=settings.broadcast_ip,
            port=settings.port,
        )

        try:
            run_bot(engine, settings)
        except ValueError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(1) from exc
