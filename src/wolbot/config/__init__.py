from __future__ import annotations

from .paths import (
    APP_NAME,
    ENV_FILENAME,
    default_data_dir,
    default_env_file,
    expand_path,
)
from .settings import (
    ENV_FILE_VAR,
    Settings,
    data_dir_from_settings,
    env_file_candidates,
    get_settings,
    load_env_file,
    load_settings,
    render_settings,
)

__all__ = [
    "APP_NAME",
    "ENV_FILENAME",
    "ENV_FILE_VAR",
    "Settings",
    "data_dir_from_settings",
    "default_data_dir",
    "default_env_file",
    "env_file_candidates",
    "expand_path",
    "get_settings",
    "load_env_file",
    "load_settings",
    "render_settings",
]
