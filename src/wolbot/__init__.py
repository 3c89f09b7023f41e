"""wolbot - wake machines on your LAN from a Telegram chat."""

from __future__ import annotations

from importlib.metadata import version

from .config import Settings, get_settings
from .core import ConversationEngine, DeviceRegistry, encode_magic_packet, wake
from .models import DeviceRecord
from .storage import RegistryStore

__all__ = [
    "ConversationEngine",
    "DeviceRecord",
    "DeviceRegistry",
    "RegistryStore",
    "Settings",
    "__version__",
    "encode_magic_packet",
    "get_settings",
    "wake",
]

__version__ = version("wolbot")
