"""Tests for the device registry."""

from __future__ import annotations

import pytest

from wolbot.core import DeviceRegistry
from wolbot.errors import (
    DeviceNotFoundError,
    DuplicateNameError,
    InvalidMacError,
    PersistenceError,
)
from wolbot.models import DeviceRecord
from wolbot.storage import RegistryStore

DESK = DeviceRecord.create("desk", "AA:BB:CC:DD:EE:FF")
LAPTOP = DeviceRecord.create("laptop", "11:22:33:44:55:66")


class BrokenStore(RegistryStore):
    def save(self, records: list[DeviceRecord]) -> None:
        raise PersistenceError("disk full")


def test_add_to_empty_registry(registry, store):
    registry.add(DESK)

    assert registry.list() == [DESK]
    assert registry.find("desk") == DESK
    assert store.load() == [DESK]


def test_add_duplicate_keeps_existing(registry):
    registry.add(DESK)

    with pytest.raises(DuplicateNameError):
        registry.add(DeviceRecord.create("desk", "11:22:33:44:55:66"))

    assert registry.list() == [DESK]


def test_find_missing(registry):
    with pytest.raises(DeviceNotFoundError):
        registry.find("desk")


def test_delete_missing_leaves_registry_unchanged(registry, store):
    registry.add(DESK)

    with pytest.raises(DeviceNotFoundError):
        registry.delete("laptop")

    assert registry.list() == [DESK]
    assert store.load() == [DESK]


def test_delete_persists_remainder(registry, store):
    registry.add(DESK)
    registry.add(LAPTOP)

    removed = registry.delete("desk")

    assert removed == DESK
    assert registry.list() == [LAPTOP]
    assert store.load() == [LAPTOP]


def test_update_renames_in_place(registry, store):
    registry.add(DESK)
    registry.add(LAPTOP)

    updated = registry.update("desk", new_name="office")

    assert updated.name == "office"
    assert updated.mac == DESK.mac
    assert registry.names() == ["office", "laptop"]
    assert store.load()[0].name == "office"


def test_update_mac_canonicalizes(registry):
    registry.add(DESK)

    updated = registry.update("desk", new_mac="0a0b0c0d0e0f")

    assert updated.mac == "0A:0B:0C:0D:0E:0F"


def test_update_invalid_mac_changes_nothing(registry):
    registry.add(DESK)

    with pytest.raises(InvalidMacError):
        registry.update("desk", new_name="office", new_mac="bad")

    assert registry.list() == [DESK]


def test_update_onto_existing_name(registry):
    registry.add(DESK)
    registry.add(LAPTOP)

    with pytest.raises(DuplicateNameError):
        registry.update("desk", new_name="laptop")

    assert registry.list() == [DESK, LAPTOP]


def test_update_missing(registry):
    with pytest.raises(DeviceNotFoundError):
        registry.update("desk", new_mac="AA:BB:CC:DD:EE:FF")


def test_persistence_failure_keeps_memory_state(tmp_path):
    registry = DeviceRegistry(BrokenStore(tmp_path))

    with pytest.raises(PersistenceError):
        registry.add(DESK)

    assert registry.list() == [DESK]


def test_load_reads_saved_registry(store):
    DeviceRegistry.load(store).add(DESK)

    reloaded = DeviceRegistry.load(store)

    assert reloaded.list() == [DESK]
    assert "desk" in reloaded
    assert len(reloaded) == 1
