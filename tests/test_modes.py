"""Tests for the mode stack and command tables."""

from __future__ import annotations

import pytest

from fleetsh.commands import build_modes
from fleetsh.commands.base import Command
from fleetsh.errors import ModeError
from fleetsh.modes import GLOBAL_MODE, NODE_MODE, ModeStack


def test_pop_on_floor_is_noop():
    modes = ModeStack()
    modes.pop()
    modes.pop()
    assert modes.depth == 1
    assert modes.current.name == GLOBAL_MODE


def test_push_unknown_mode_fails_and_keeps_stack():
    modes = ModeStack()
    with pytest.raises(ModeError):
        modes.push("nowhere")
    assert modes.depth == 1


def test_push_and_pop_known_mode():
    modes = ModeStack()
    modes.add_mode("extra", "> ")
    modes.push("extra")
    assert modes.current.name == "extra"
    assert modes.depth == 2
    modes.pop()
    assert modes.current.name == GLOBAL_MODE


def test_first_registered_command_wins():
    modes = ModeStack()
    first = Command("dup", "first")
    second = Command("dup", "second")
    modes.current.add_commands([first])
    modes.current.add_commands([second, Command("other", "x")])
    assert modes.lookup("dup") is first
    assert [cmd.name for cmd in modes.current.list_commands()] == ["dup", "other"]


def test_sealed_mode_rejects_more_commands():
    modes = ModeStack()
    modes.current.seal()
    with pytest.raises(ModeError):
        modes.current.add_commands([Command("late", "x")])


def test_lookup_only_searches_current_mode():
    modes = build_modes()
    assert modes.lookup("work-load") is None
    assert modes.lookup("echo") is not None
    modes.push(NODE_MODE)
    assert modes.lookup("work-load") is not None
    assert modes.lookup("echo") is not None


def test_node_mode_lists_global_commands_first():
    modes = build_modes()
    names = [cmd.name for cmd in modes.get(NODE_MODE).list_commands()]
    assert names.index("quit") < names.index("leave-node")
    assert "send" in names


def test_help_lists_commands(capsys):
    modes = build_modes()
    text = modes.current.help()
    assert text.startswith("global mode commands:")
    assert "change-node" in text
    assert "work-load" not in text
