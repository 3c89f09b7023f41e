"""Commands understood by the conversation engine.

The messaging gateway turns every inbound event into exactly one of these,
so the engine never has to look at raw command strings or button payloads.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

CALLBACK_SEPARATOR = ":"


@dataclass(frozen=True)
class ShowHelp:
    pass


@dataclass(frozen=True)
class ShowList:
    pass


@dataclass(frozen=True)
class ShowWakeMenu:
    pass


@dataclass(frozen=True)
class Wake:
    name: str


@dataclass(frozen=True)
class StartAdd:
    pass


@dataclass(frozen=True)
class ShowModifyMenu:
    pass


@dataclass(frozen=True)
class ShowModifyOptions:
    name: str


@dataclass(frozen=True)
class StartModifyName:
    name: str


@dataclass(frozen=True)
class StartModifyMac:
    name: str


@dataclass(frozen=True)
class ShowDeleteMenu:
    pass


@dataclass(frozen=True)
class Delete:
    name: str


@dataclass(frozen=True)
class Cancel:
    pass


@dataclass(frozen=True)
class TextInput:
    text: str


Command = Union[
    ShowHelp,
    ShowList,
    ShowWakeMenu,
    Wake,
    StartAdd,
    ShowModifyMenu,
    ShowModifyOptions,
    StartModifyName,
    StartModifyMac,
    ShowDeleteMenu,
    Delete,
    Cancel,
    TextInput,
]

# Button payload actions
ACTION_WOL = "wol"
ACTION_ADD = "add"
ACTION_MODIFY = "modify"
ACTION_MODIFY_NAME = "modify_name"
ACTION_MODIFY_MAC = "modify_mac"
ACTION_DELETE = "delete"
ACTION_CANCEL = "cancel"

BOT_COMMANDS: list[tuple[str, str]] = [
    ("wol", "Wake up a device"),
    ("add", "Add a new device"),
    ("modify", "Modify existing device"),
    ("delete", "Delete a device"),
    ("list", "List all devices"),
    ("help", "Show available options"),
]


def callback_data(action: str, name: str | None = None) -> str:
    if name is None:
        return action
    return f"{action}{CALLBACK_SEPARATOR}{name}"


def parse_command(name: str) -> Command | None:
    """Map a slash command (without the slash) to a command."""
    simple: dict[str, Command] = {
        "help": ShowHelp(),
        "start": ShowHelp(),
        "wol": ShowWakeMenu(),
        "add": StartAdd(),
        "modify": ShowModifyMenu(),
        "delete": ShowDeleteMenu(),
        "list": ShowList(),
        "cancel": Cancel(),
    }
    return simple.get(name.lower())


def parse_callback(data: str) -> Command | None:
    """Map an inline button payload (``action[:device]``) to a command."""
    action, _, name = data.partition(CALLBACK_SEPARATOR)

    if action == ACTION_CANCEL:
        return Cancel()
    if action == ACTION_ADD:
        return StartAdd()
    if action == ACTION_WOL:
        return Wake(name) if name else ShowWakeMenu()
    if action == ACTION_MODIFY:
        return ShowModifyOptions(name) if name else ShowModifyMenu()
    if action == ACTION_DELETE:
        return Delete(name) if name else ShowDeleteMenu()
    if action == ACTION_MODIFY_NAME and name:
        return StartModifyName(name)
    if action == ACTION_MODIFY_MAC and name:
        return StartModifyMac(name)
    return None


# Free text received while no flow is pending


@dataclass(frozen=True)
class QuickWakeOrDelete:
    name: str


@dataclass(frozen=True)
class QuickAdd:
    name: str
    mac: str


@dataclass(frozen=True)
class QuickModify:
    old_name: str
    new_name: str
    mac: str


@dataclass(frozen=True)
class Unrecognized:
    text: str


LineCommand = Union[QuickWakeOrDelete, QuickAdd, QuickModify, Unrecognized]


def classify_line(text: str) -> LineCommand:
    """Classify an idle free-text line by its number of comma-separated fields."""
    parts = [part.strip() for part in text.split(",")]
    if len(parts) == 1:
        return QuickWakeOrDelete(parts[0])
    if len(parts) == 2:
        return QuickAdd(parts[0], parts[1])
    if len(parts) == 3:
        return QuickModify(parts[0], parts[1], parts[2])
    return Unrecognized(text)
