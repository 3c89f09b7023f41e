"""Transport-neutral replies produced by the conversation engine."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Button:
    label: str
    data: str


@dataclass(frozen=True)
class Reply:
    """One outgoing message.

    ``buttons`` are inline buttons attached to the message. ``keyboard``
    replaces the chat's persistent reply keyboard.
    """

    text: str
    buttons: tuple[tuple[Button, ...], ...] = ()
    keyboard: tuple[tuple[str, ...], ...] | None = None
    markdown: bool = False

    @property
    def interactive(self) -> bool:
        return bool(self.buttons)


@dataclass
class Response:
    replies: list[Reply] = field(default_factory=list)
    # Previously sent prompts the gateway should delete before replying
    retract: list[int] = field(default_factory=list)

    @property
    def texts(self) -> list[str]:
        return [reply.text for reply in self.replies]
