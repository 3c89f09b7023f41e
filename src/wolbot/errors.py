"""Exception hierarchy for wolbot."""

from __future__ import annotations


class WolBotError(Exception):
    """Base class for all wolbot errors."""


class InvalidMacError(WolBotError, ValueError):
    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid MAC address: {value!r}")
        self.value = value


class InvalidNameError(WolBotError, ValueError):
    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid device name: {value!r}")
        self.value = value


class DuplicateNameError(WolBotError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Device '{name}' already exists")
        self.name = name


class DeviceNotFoundError(WolBotError, LookupError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Device '{name}' not found")
        self.name = name


class PersistenceError(WolBotError):
    """Registry could not be written; the in-memory state is kept."""


class TransmissionError(WolBotError):
    """Magic packet could not be handed to the network stack."""


class UnauthorizedError(WolBotError):
    def __init__(self, session: int) -> None:
        super().__init__(f"Session {session} is not authorized")
        self.session = session
