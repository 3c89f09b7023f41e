"""Tests for command parsing."""

import pytest

from wolbot.core.commands import (
    Cancel,
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
    Unrecognized,
    Wake,
    callback_data,
    classify_line,
    parse_callback,
    parse_command,
)


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        ("wol", ShowWakeMenu()),
        ("wol:desk", Wake("desk")),
        ("add", StartAdd()),
        ("modify", ShowModifyMenu()),
        ("modify:desk", ShowModifyOptions("desk")),
        ("modify_name:desk", StartModifyName("desk")),
        ("modify_mac:desk", StartModifyMac("desk")),
        ("delete", ShowDeleteMenu()),
        ("delete:desk", Delete("desk")),
        ("cancel", Cancel()),
        ("wol:living room:pc", Wake("living room:pc")),
    ],
)
def test_parse_callback(data, expected):
    assert parse_callback(data) == expected


@pytest.mark.parametrize("data", ["", "reboot:desk", "modify_name"])
def test_parse_callback_unknown(data):
    assert parse_callback(data) is None


def test_callback_data_roundtrip():
    assert parse_callback(callback_data("delete", "desk")) == Delete("desk")


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("help", ShowHelp()),
        ("start", ShowHelp()),
        ("wol", ShowWakeMenu()),
        ("add", StartAdd()),
        ("modify", ShowModifyMenu()),
        ("delete", ShowDeleteMenu()),
        ("list", ShowList()),
        ("cancel", Cancel()),
        ("LIST", ShowList()),
    ],
)
def test_parse_command(name, expected):
    assert parse_command(name) == expected


def test_parse_command_unknown():
    assert parse_command("reboot") is None


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("desk", QuickWakeOrDelete("desk")),
        ("desk,AA:BB:CC:DD:EE:FF", QuickAdd("desk", "AA:BB:CC:DD:EE:FF")),
        (
            "desk, office , 11:22:33:44:55:66",
            QuickModify("desk", "office", "11:22:33:44:55:66"),
        ),
        ("a,b,c,d", Unrecognized("a,b,c,d")),
    ],
)
def test_classify_line(text, expected):
    assert classify_line(text) == expected
