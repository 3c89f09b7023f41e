from __future__ import annotations

from .gateway import TelegramGateway, command_from_text, render_markup, run_bot

__all__ = ["TelegramGateway", "command_from_text", "render_markup", "run_bot"]
