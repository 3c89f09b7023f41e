"""Per-session conversation state machine.

The engine receives already-parsed commands (see :mod:`wolbot.core.commands`)
and answers with a :class:`~wolbot.core.responses.Response`. It never talks to
the chat transport directly.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Union, assert_never

from wolbot.core.commands import (
    ACTION_ADD,
    ACTION_CANCEL,
    ACTION_DELETE,
    ACTION_MODIFY,
    ACTION_MODIFY_MAC,
    ACTION_MODIFY_NAME,
    ACTION_WOL,
    Cancel,
    Command,
    Delete,
    QuickAdd,
    QuickModify,
    QuickWakeOrDelete,
    ShowDeleteMenu,
    ShowHelp,
    ShowList,
    ShowModifyMenu,
    ShowModifyOptions,
    ShowWakeMenu,
    StartAdd,
    StartModifyMac,
    StartModifyName,
    TextInput,
    Unrecognized,
    Wake,
    callback_data,
    classify_line,
)
from wolbot.core.packet import WOL_PORT, wake
from wolbot.core.registry import DeviceRegistry
from wolbot.core.responses import Button, Reply, Response
from wolbot.errors import (
    DeviceNotFoundError,
    DuplicateNameError,
    InvalidMacError,
    InvalidNameError,
    PersistenceError,
    TransmissionError,
    UnauthorizedError,
)
from wolbot.models import MAC_FORMAT_HINT, MAX_NAME_BYTES, DeviceRecord, clean_name

logger = logging.getLogger(__name__)

UNAUTHORIZED_TEXT = "Unauthorized user"
NOT_FOUND_TEXT = "Device not found."
INVALID_MAC_TEXT = "Invalid MAC address format."
CANCELLED_TEXT = "Operation cancelled"
KEYBOARD_TEXT = "Keyboard updated with current devices."

HELP_TEXT = f"""📱 *WOL Device Manager* 📱

Available Commands:
/help - Show this help message
/wol - Wake up a device
/add - Add a new device
/modify - Modify existing device
/delete - Delete a device
/list - List all saved devices
/cancel - Cancel the current operation

How to use:
1. Quick Wake Up:
   • Tap a device name on the keyboard below to wake it up

2. Device Management:
   • Add: Use /add and follow the prompts, or send `name,mac`
   • Modify: Use /modify, or send `old name,new name,new mac`
   • Delete: Use /delete to remove devices
   • List: Use /list to see all devices and their MACs

3. Manual Wake Up:
   • Type a device name to wake it up
   • Use /wol command for button interface

MAC Address Format: {MAC_FORMAT_HINT}"""

CANCEL_ROW = (Button("❌ Cancel", ACTION_CANCEL),)

SendFunc = Callable[[str, str, int], None]


class AddStage(str, Enum):
    AWAITING_NAME = "awaiting_name"
    AWAITING_MAC = "awaiting_mac"


class ModifyField(str, Enum):
    NAME = "name"
    MAC = "mac"


@dataclass(frozen=True)
class AddState:
    stage: AddStage = AddStage.AWAITING_NAME
    pending_name: str = ""


@dataclass(frozen=True)
class ModifyState:
    target_name: str
    field: ModifyField


ConversationState = Union[AddState, ModifyState]
Transition = tuple[Union[ConversationState, None], list[Reply]]


def device_keyboard(names: Iterable[str]) -> tuple[tuple[str, ...], ...]:
    """Reply keyboard with two device names per row."""
    names = list(names)
    if not names:
        return (("/add",),)
    return tuple(tuple(names[i : i + 2]) for i in range(0, len(names), 2))


def _prompt(text: str) -> Reply:
    return Reply(text, buttons=(CANCEL_ROW,))


def _device_menu(text: str, action: str, names: Iterable[str]) -> Reply:
    rows = [(Button(name, callback_data(action, name)),) for name in names]
    rows.append(CANCEL_ROW)
    return Reply(text, buttons=tuple(rows))


class ConversationEngine:
    """Routes commands for the single authorized chat.

    Owns the per-session conversation state and the ids of prompts with
    inline buttons still visible in each chat.
    """

    def __init__(
        self,
        registry: DeviceRegistry,
        authorized_session: int,
        broadcast_ip: str,
        port: int = WOL_PORT,
        send: SendFunc = wake,
    ) -> None:
        self._registry = registry
        self._authorized_session = authorized_session
        self._broadcast_ip = broadcast_ip
        self._port = port
        self._send = send
        self._states: dict[int, ConversationState] = {}
        self._prompts: dict[int, list[int]] = {}
        self._locks: dict[int, threading.Lock] = {}

    @property
    def registry(self) -> DeviceRegistry:
        return self._registry

    def state(self, session: int) -> ConversationState | None:
        return self._states.get(session)

    def authorize(self, session: int) -> None:
        if session != self._authorized_session:
            raise UnauthorizedError(session)

    def remember_prompt(self, session: int, message_id: int) -> None:
        with self._lock_for(session):
            self._prompts.setdefault(session, []).append(message_id)

    def _lock_for(self, session: int) -> threading.Lock:
        return self._locks.setdefault(session, threading.Lock())

    def device_keyboard(self) -> tuple[tuple[str, ...], ...]:
        return device_keyboard(self._registry.names())

    def handle(
        self, session: int, command: Command, from_button: bool = False
    ) -> Response:
        try:
            self.authorize(session)
        except UnauthorizedError as exc:
            logger.warning("%s", exc)
            return Response([Reply(UNAUTHORIZED_TEXT)])

        lock = self._lock_for(session)
        with lock:
            logger.debug("Session %s: %r", session, command)
            replies = self._dispatch(session, command)
            retract: list[int] = []
            if from_button or any(reply.interactive for reply in replies):
                retract = self._prompts.pop(session, [])
            return Response(replies, retract)

    def _dispatch(self, session: int, command: Command) -> list[Reply]:
        if isinstance(command, TextInput):
            return self._on_text(session, command.text)
        if isinstance(command, Cancel):
            self._states.pop(session, None)
            return [Reply(CANCELLED_TEXT)]
        if isinstance(command, ShowHelp):
            return [self._help()]
        if isinstance(command, ShowList):
            return [self._device_list()]
        if isinstance(command, ShowWakeMenu):
            return [
                _device_menu(
                    "Select a device to wake up:", ACTION_WOL, self._registry.names()
                )
            ]
        if isinstance(command, ShowModifyMenu):
            return [
                _device_menu(
                    "Select a device to modify:", ACTION_MODIFY, self._registry.names()
                )
            ]
        if isinstance(command, ShowDeleteMenu):
            return [
                _device_menu(
                    "Select a device to delete:", ACTION_DELETE, self._registry.names()
                )
            ]
        if isinstance(command, ShowModifyOptions):
            return [self._modify_options(command.name)]
        if isinstance(command, Wake):
            return [self._wake(command.name)]
        if isinstance(command, Delete):
            return self._delete(command.name)
        if isinstance(command, StartAdd):
            self._states[session] = AddState()
            return [_prompt("Please enter the name for the new device:")]
        if isinstance(command, StartModifyName):
            return self._start_modify(session, command.name, ModifyField.NAME)
        if isinstance(command, StartModifyMac):
            return self._start_modify(session, command.name, ModifyField.MAC)
        assert_never(command)

    def _on_text(self, session: int, text: str) -> list[Reply]:
        state = self._states.get(session)
        if state is None:
            return self._on_idle_text(text)

        if isinstance(state, AddState):
            next_state, replies = self._advance_add(state, text)
        else:
            next_state, replies = self._advance_modify(state, text)

        if next_state is None:
            self._states.pop(session, None)
        else:
            self._states[session] = next_state
        return replies

    # Add flow

    def _advance_add(self, state: AddState, text: str) -> Transition:
        if state.stage is AddStage.AWAITING_NAME:
            try:
                name = clean_name(text)
            except InvalidNameError:
                return state, [
                    _prompt(
                        "Invalid device name. Please enter a non-empty name of "
                        f"at most {MAX_NAME_BYTES} bytes:"
                    )
                ]
            return AddState(AddStage.AWAITING_MAC, name), [
                _prompt(
                    f"Device name set to: {name}\n"
                    f"Please enter the MAC address (format: {MAC_FORMAT_HINT}):"
                )
            ]

        try:
            record = DeviceRecord.create(state.pending_name, text)
        except InvalidMacError:
            # Stay in the same stage and ask again
            return state, [
                _prompt(
                    "Invalid MAC address format. "
                    f"Please try again (format: {MAC_FORMAT_HINT}):"
                )
            ]
        except InvalidNameError:
            return None, [Reply(f"Invalid device name. {CANCELLED_TEXT}.")]

        try:
            self._registry.add(record)
        except DuplicateNameError as exc:
            return None, [Reply(f"Device {exc.name} already exists. {CANCELLED_TEXT}.")]
        except PersistenceError as exc:
            return None, self._added(record, exc)
        return None, self._added(record)

    def _added(
        self, record: DeviceRecord, error: PersistenceError | None = None
    ) -> list[Reply]:
        return self._after_mutation(
            [
                Reply(
                    "Device added successfully!\n"
                    f"Name: {record.name}\nMAC: {record.mac}"
                )
            ],
            error,
        )

    # Modify flow

    def _start_modify(
        self, session: int, name: str, field: ModifyField
    ) -> list[Reply]:
        if name not in self._registry:
            return [Reply(NOT_FOUND_TEXT)]
        self._states[session] = ModifyState(name, field)
        if field is ModifyField.NAME:
            return [_prompt(f"Enter the new name for {name}:")]
        return [
            _prompt(f"Enter the new MAC address for {name} (format: {MAC_FORMAT_HINT}):")
        ]

    def _modify_options(self, name: str) -> Reply:
        if name not in self._registry:
            return Reply(NOT_FOUND_TEXT)
        return Reply(
            f"What would you like to modify for {name}?",
            buttons=(
                (
                    Button("Modify Name", callback_data(ACTION_MODIFY_NAME, name)),
                    Button("Modify MAC", callback_data(ACTION_MODIFY_MAC, name)),
                ),
                CANCEL_ROW,
            ),
        )

    def _advance_modify(self, state: ModifyState, text: str) -> Transition:
        error: PersistenceError | None = None
        try:
            if state.field is ModifyField.NAME:
                try:
                    updated = self._registry.update(state.target_name, new_name=text)
                except PersistenceError as exc:
                    error = exc
                    updated = self._registry.find(clean_name(text))
            else:
                try:
                    updated = self._registry.update(state.target_name, new_mac=text)
                except PersistenceError as exc:
                    error = exc
                    updated = self._registry.find(state.target_name)
        except DeviceNotFoundError:
            return None, [Reply(f"{NOT_FOUND_TEXT} {CANCELLED_TEXT}.")]
        except InvalidMacError:
            # Unlike the add flow, a bad MAC ends the modify flow
            return None, [Reply(f"{INVALID_MAC_TEXT} {CANCELLED_TEXT}.")]
        except InvalidNameError:
            return None, [Reply(f"Invalid device name. {CANCELLED_TEXT}.")]
        except DuplicateNameError as exc:
            return None, [Reply(f"Device {exc.name} already exists. {CANCELLED_TEXT}.")]

        if state.field is ModifyField.NAME:
            reply = Reply(
                f"Device name updated from {state.target_name} to {updated.name}\n"
                "Would you like to modify the MAC address as well?",
                buttons=(
                    (
                        Button(
                            "Modify MAC", callback_data(ACTION_MODIFY_MAC, updated.name)
                        ),
                        Button("❌ Done", ACTION_CANCEL),
                    ),
                ),
            )
        else:
            reply = Reply(
                f"MAC address updated for {updated.name}\n"
                "Would you like to modify the name as well?",
                buttons=(
                    (
                        Button(
                            "Modify Name",
                            callback_data(ACTION_MODIFY_NAME, updated.name),
                        ),
                        Button("❌ Done", ACTION_CANCEL),
                    ),
                ),
            )
        return None, self._after_mutation([reply], error)

    # Idle free text

    def _on_idle_text(self, text: str) -> list[Reply]:
        line = classify_line(text)
        if isinstance(line, QuickWakeOrDelete):
            if line.name in self._registry:
                return [self._wake(line.name)]
            return self._delete(line.name)
        if isinstance(line, QuickAdd):
            return self._quick_add(line)
        if isinstance(line, QuickModify):
            return self._quick_modify(line)
        if isinstance(line, Unrecognized):
            return [Reply("Invalid command format.")]
        assert_never(line)

    def _quick_add(self, line: QuickAdd) -> list[Reply]:
        try:
            record = DeviceRecord.create(line.name, line.mac)
        except InvalidMacError:
            return [Reply(INVALID_MAC_TEXT)]
        except InvalidNameError:
            return [Reply("Invalid device name.")]

        try:
            self._registry.add(record)
        except DuplicateNameError as exc:
            return [Reply(f"Device {exc.name} already exists.")]
        except PersistenceError as exc:
            return self._after_mutation([Reply(f"Device added: {record.name}")], exc)
        return self._after_mutation([Reply(f"Device added: {record.name}")])

    def _quick_modify(self, line: QuickModify) -> list[Reply]:
        error: PersistenceError | None = None
        try:
            self._registry.update(line.old_name, new_name=line.new_name, new_mac=line.mac)
        except DeviceNotFoundError:
            return [Reply(NOT_FOUND_TEXT)]
        except InvalidMacError:
            return [Reply(INVALID_MAC_TEXT)]
        except InvalidNameError:
            return [Reply("Invalid device name.")]
        except DuplicateNameError as exc:
            return [Reply(f"Device {exc.name} already exists.")]
        except PersistenceError as exc:
            error = exc
        return self._after_mutation([Reply(f"Device modified: {line.new_name}")], error)

    # Shared actions

    def _delete(self, name: str) -> list[Reply]:
        try:
            self._registry.delete(name)
        except DeviceNotFoundError:
            return [Reply(NOT_FOUND_TEXT)]
        except PersistenceError as exc:
            return self._after_mutation([Reply(f"Device deleted: {name}")], exc)
        return self._after_mutation([Reply(f"Device deleted: {name}")])

    def _wake(self, name: str) -> Reply:
        try:
            record = self._registry.find(name)
        except DeviceNotFoundError:
            return Reply(NOT_FOUND_TEXT)

        try:
            self._send(record.mac, self._broadcast_ip, self._port)
        except TransmissionError:
            logger.exception("Failed to wake %s", record.name)
            return Reply("Failed to send WoL packet.")
        return Reply(f"WoL packet sent to {record.name}")

    def _after_mutation(
        self, replies: list[Reply], error: PersistenceError | None = None
    ) -> list[Reply]:
        if error is not None:
            logger.error("%s", error)
            replies.append(
                Reply(f"⚠️ Change applied but could not be saved to disk: {error}")
            )
        replies.append(Reply(KEYBOARD_TEXT, keyboard=self.device_keyboard()))
        return replies

    def _device_list(self) -> Reply:
        records = self._registry.list()
        if not records:
            return Reply("No devices found.")
        lines = [f"📱 {record.name}\nMAC: {record.mac}\n" for record in records]
        return Reply("Saved Devices:\n\n" + "\n".join(lines))

    def _help(self) -> Reply:
        return Reply(
            HELP_TEXT,
            markdown=True,
            buttons=(
                (
                    Button("💻 Wake Device", ACTION_WOL),
                    Button("➕ Add Device", ACTION_ADD),
                ),
                (
                    Button("✏️ Modify Device", ACTION_MODIFY),
                    Button("❌ Delete Device", ACTION_DELETE),
                ),
            ),
        )
