from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from wolbot.core.packet import DEFAULT_BROADCAST_IP, WOL_PORT

from .paths import ENV_FILENAME, default_data_dir, default_env_file, expand_path

logger = logging.getLogger(__name__)

ENV_FILE_VAR = "WOLBOT_ENV_FILE"


class Settings(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    bot_token: str = ""
    chat_id: int = 0
    broadcast_ip: str = DEFAULT_BROADCAST_IP
    port: int = Field(default=WOL_PORT, ge=1, le=65535)
    data_dir: str = Field(default_factory=lambda: str(default_data_dir()))


def env_file_candidates() -> list[Path]:
    env_path = os.environ.get(ENV_FILE_VAR)
    if env_path:
        return [expand_path(env_path)]
    return [Path.cwd() / ENV_FILENAME, default_env_file()]


def load_env_file() -> Path | None:
    """Load the first env file found; existing variables are not overridden."""
    for path in env_file_candidates():
        if path.is_file():
            load_dotenv(path, override=False)
            logger.debug("Loaded environment from %s", path)
            return path
    return None


def load_settings() -> Settings:
    load_env_file()

    data: dict[str, str] = {}
    for key in ("BOT_TOKEN", "CHAT_ID", "BROADCAST_IP", "DATA_DIR"):
        value = os.environ.get(key)
        if value:
            data[key.lower()] = value

    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration:\n{exc}") from exc


@lru_cache
def get_settings() -> Settings:
    return load_settings()


def data_dir_from_settings(settings: Settings) -> Path:
    return expand_path(settings.data_dir)


def render_settings(settings: Settings) -> str:
    token = "<set>" if settings.bot_token else "<unset>"
    lines = [
        f"BOT_TOKEN={token}",
        f"CHAT_ID={settings.chat_id}",
        f"BROADCAST_IP={settings.broadcast_ip}",
        f"PORT={settings.port}",
        f"DATA_DIR={settings.data_dir}",
    ]
    return "\n".join(lines)
