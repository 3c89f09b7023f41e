"""MAC address and device name validation shared by every input path."""

from __future__ import annotations

import string

from wolbot.errors import InvalidMacError, InvalidNameError

MAC_FORMAT_HINT = "XX:XX:XX:XX:XX:XX"

# Telegram caps callback data at 64 bytes; "modify_name:" takes 12 of them
MAX_NAME_BYTES = 48


def parse_mac(value: str) -> str:
    """Validate a MAC address and return its canonical form.

    Colons are the only separator accepted. What remains must be exactly
    12 hex digits; the result is upper-case and colon-separated.
    """
    cleaned = value.replace(":", "")
    if len(cleaned) != 12 or not all(ch in string.hexdigits for ch in cleaned):
        raise InvalidMacError(value)
    pairs = [cleaned[i : i + 2] for i in range(0, 12, 2)]
    return ":".join(pair.upper() for pair in pairs)


def is_valid_mac(value: str) -> bool:
    try:
        parse_mac(value)
    except InvalidMacError:
        return False
    return True


def clean_name(value: str) -> str:
    """Strip a device name and check it fits in a button payload."""
    name = value.strip()
    if not name or len(name.encode("utf-8")) > MAX_NAME_BYTES:
        raise InvalidNameError(value)
    return name
