"""Tests for the wolbot CLI."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

import wolbot.cli.commands.wake as wake_cmd
from wolbot import __version__
from wolbot.cli import app
from wolbot.errors import TransmissionError
from wolbot.storage import RegistryStore

runner = CliRunner()


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    path = tmp_path / "data"
    monkeypatch.setenv("DATA_DIR", str(path))
    monkeypatch.setenv("BROADCAST_IP", "192.168.1.255")
    return path


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"wolbot version {__version__}" in result.stdout


def test_add_list_delete(data_dir):
    result = runner.invoke(app, ["add", "desk", "aa:bb:cc:dd:ee:ff"])
    assert result.exit_code == 0
    assert "Added 'desk'" in result.stdout

    records = RegistryStore(data_dir).load()
    assert [(r.name, r.mac) for r in records] == [("desk", "AA:BB:CC:DD:EE:FF")]

    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0
    assert "desk" in result.stdout
    assert "AA:BB:CC:DD:EE:FF" in result.stdout

    result = runner.invoke(app, ["delete", "desk"])
    assert result.exit_code == 0
    assert RegistryStore(data_dir).load() == []


def test_add_invalid_mac(data_dir):
    result = runner.invoke(app, ["add", "desk", "nope"])

    assert result.exit_code == 1
    assert "Invalid MAC address" in result.stdout


def test_add_duplicate(data_dir):
    runner.invoke(app, ["add", "desk", "AA:BB:CC:DD:EE:FF"])
    result = runner.invoke(app, ["add", "desk", "11:22:33:44:55:66"])

    assert result.exit_code == 1
    assert "already exists" in result.stdout


def test_modify(data_dir):
    runner.invoke(app, ["add", "desk", "AA:BB:CC:DD:EE:FF"])

    result = runner.invoke(
        app, ["modify", "desk", "--name", "office", "--mac", "11:22:33:44:55:66"]
    )

    assert result.exit_code == 0
    records = RegistryStore(data_dir).load()
    assert [(r.name, r.mac) for r in records] == [("office", "11:22:33:44:55:66")]


def test_delete_missing(data_dir):
    result = runner.invoke(app, ["delete", "ghost"])

    assert result.exit_code == 1
    assert "not found" in result.stdout


def test_wol_sends_to_configured_address(data_dir, monkeypatch):
    calls: list[tuple[str, str, int]] = []
    monkeypatch.setattr(
        wake_cmd, "wake", lambda mac, address, port: calls.append((mac, address, port))
    )
    runner.invoke(app, ["add", "desk", "AA:BB:CC:DD:EE:FF"])

    result = runner.invoke(app, ["wol", "desk"])

    assert result.exit_code == 0
    assert calls == [("AA:BB:CC:DD:EE:FF", "192.168.1.255", 9)]


def test_wol_transmission_error(data_dir, monkeypatch):
    def _fail(mac: str, address: str, port: int) -> None:
        raise TransmissionError("Network is unreachable")

    monkeypatch.setattr(wake_cmd, "wake", _fail)
    runner.invoke(app, ["add", "desk", "AA:BB:CC:DD:EE:FF"])

    result = runner.invoke(app, ["wol", "desk"])

    assert result.exit_code == 1
    assert "unreachable" in result.stdout


def test_run_requires_token(data_dir):
    result = runner.invoke(app, ["run"])

    assert result.exit_code == 1


def test_info(data_dir):
    result = runner.invoke(app, ["info"])

    assert result.exit_code == 0
    assert "Devices: 0" in result.stdout
