from __future__ import annotations

from .commands import Command, classify_line, parse_callback, parse_command
from .conversation import (
    AddStage,
    AddState,
    ConversationEngine,
    ConversationState,
    ModifyField,
    ModifyState,
)
from .packet import encode_magic_packet, send_packet, wake
from .registry import DeviceRegistry
from .responses import Button, Reply, Response

__all__ = [
    "AddStage",
    "AddState",
    "Button",
    "Command",
    "ConversationEngine",
    "ConversationState",
    "DeviceRegistry",
    "ModifyField",
    "ModifyState",
    "Reply",
    "Response",
    "classify_line",
    "encode_magic_packet",
    "parse_callback",
    "parse_command",
    "send_packet",
    "wake",
]
