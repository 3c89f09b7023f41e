from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from wolbot.errors import PersistenceError
from wolbot.models import DeviceRecord

logger = logging.getLogger(__name__)

DEVICES_FILE = "devices.json"

_records_adapter = TypeAdapter(list[DeviceRecord])


class RegistryStore:
    """Reads and writes the device registry file.

    The file is a pretty-printed JSON array of ``{"name", "mac"}`` objects
    and is overwritten in full on every save.
    """

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir
        self._devices_path = data_dir / DEVICES_FILE

    @property
    def path(self) -> Path:
        return self._data_dir

    @property
    def devices_path(self) -> Path:
        return self._devices_path

    def ensure_dirs(self) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)

    def load(self) -> list[DeviceRecord]:
        """Load saved records; a missing or broken file yields an empty list."""
        if not self._devices_path.exists():
            logger.warning(
                "No registry file at %s, starting with no devices", self._devices_path
            )
            return []

        try:
            with self._devices_path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
            records = _records_adapter.validate_python(data or [])
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            logger.warning(
                "Could not read registry file %s, starting with no devices: %s",
                self._devices_path,
                exc,
            )
            return []

        logger.info("Loaded %d device(s) from %s", len(records), self._devices_path)
        return records

    def save(self, records: list[DeviceRecord]) -> None:
        data = _records_adapter.dump_python(records, mode="json")
        try:
            self.ensure_dirs()
            self._devices_path.write_text(
                json.dumps(data, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise PersistenceError(
                f"Could not write registry file {self._devices_path}: {exc}"
            ) from exc
        logger.debug("Saved %d device(s) to %s", len(records), self._devices_path)
