from __future__ import annotations

import pytest

from wolbot.config import get_settings
from wolbot.core import ConversationEngine, DeviceRegistry
from wolbot.storage import RegistryStore

AUTHORIZED_CHAT = 1001
BROADCAST_IP = "192.168.1.255"

ENV_KEYS = ("BOT_TOKEN", "CHAT_ID", "BROADCAST_IP", "DATA_DIR", "WOLBOT_ENV_FILE")


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    for key in ENV_KEYS:
        # setenv first so teardown removes anything python-dotenv wrote
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.setenv("WOLBOT_ENV_FILE", str(tmp_path / "missing.env"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class RecordingSender:
    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[tuple[str, str, int]] = []
        self.error = error

    def __call__(self, mac: str, address: str, port: int) -> None:
        self.calls.append((mac, address, port))
        if self.error is not None:
            raise self.error


@pytest.fixture
def store(tmp_path) -> RegistryStore:
    return RegistryStore(tmp_path / "data")


@pytest.fixture
def registry(store) -> DeviceRegistry:
    return DeviceRegistry.load(store)


@pytest.fixture
def sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture
def engine(registry, sender) -> ConversationEngine:
    return ConversationEngine(
        registry,
        authorized_session=AUTHORIZED_CHAT,
        broadcast_ip=BROADCAST_IP,
        send=sender,
    )
