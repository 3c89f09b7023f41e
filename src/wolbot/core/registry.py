"""In-memory device registry with write-through persistence."""

from __future__ import annotations

import logging
import threading

from wolbot.errors import DeviceNotFoundError, DuplicateNameError
from wolbot.models import DeviceRecord, clean_name, parse_mac
from wolbot.storage import RegistryStore

logger = logging.getLogger(__name__)


class DeviceRegistry:
    """Ordered collection of devices, saved after every mutation.

    Every mutating call persists the full registry before returning. When
    the save fails, :class:`~wolbot.errors.PersistenceError` propagates but
    the in-memory change is kept; the next successful save brings the file
    back in line.
    """

    def __init__(self, store: RegistryStore, records: list[DeviceRecord] | None = None) -> None:
        self._store = store
        self._records: list[DeviceRecord] = list(records or [])
        self._lock = threading.RLock()

    @classmethod
    def load(cls, store: RegistryStore) -> DeviceRegistry:
        return cls(store, store.load())

    @property
    def store(self) -> RegistryStore:
        return self._store

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, name: object) -> bool:
        return any(record.name == name for record in self._records)

    def list(self) -> list[DeviceRecord]:
        with self._lock:
            return list(self._records)

    def names(self) -> list[str]:
        with self._lock:
            return [record.name for record in self._records]

    def find(self, name: str) -> DeviceRecord:
        with self._lock:
            return self._records[self._index(name)]

    def add(self, record: DeviceRecord) -> None:
        with self._lock:
            if record.name in self:
                raise DuplicateNameError(record.name)
            self._records.append(record)
            logger.info("Added device %s (%s)", record.name, record.mac)
            self._persist()

    def update(
        self, name: str, new_name: str | None = None, new_mac: str | None = None
    ) -> DeviceRecord:
        """Rename and/or re-address a device in place.

        All validation happens before anything is changed.
        """
        with self._lock:
            index = self._index(name)
            current = self._records[index]

            changes: dict[str, str] = {}
            if new_name is not None:
                cleaned = clean_name(new_name)
                if cleaned != current.name and cleaned in self:
                    raise DuplicateNameError(cleaned)
                changes["name"] = cleaned
            if new_mac is not None:
                changes["mac"] = parse_mac(new_mac)

            updated = current.model_copy(update=changes)
            self._records[index] = updated
            logger.info(
                "Updated device %s -> %s (%s)", current.name, updated.name, updated.mac
            )
            self._persist()
            return updated

    def delete(self, name: str) -> DeviceRecord:
        with self._lock:
            removed = self._records.pop(self._index(name))
            logger.info("Deleted device %s", removed.name)
            self._persist()
            return removed

    def _index(self, name: str) -> int:
        for index, record in enumerate(self._records):
            if record.name == name:
                return index
        raise DeviceNotFoundError(name)

    def _persist(self) -> None:
        self._store.save(self._records)
