"""Data models for wolbot."""

from wolbot.models.device import DeviceRecord
from wolbot.models.validation import (
    MAC_FORMAT_HINT,
    MAX_NAME_BYTES,
    clean_name,
    is_valid_mac,
    parse_mac,
)

__all__ = [
    "MAC_FORMAT_HINT",
    "MAX_NAME_BYTES",
    "DeviceRecord",
    "clean_name",
    "is_valid_mac",
    "parse_mac",
]
