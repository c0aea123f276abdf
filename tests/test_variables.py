"""Tests for variable expansion and command splitting."""

from __future__ import annotations

from fleetsh.parser import split_command
from fleetsh.variables import VariablesEngine


def test_bound_variables_are_expanded():
    engine = VariablesEngine()
    engine.set("NODE", "42@abc")
    assert engine.preprocess("echo $NODE ${NODE}x") == "echo 42@abc 42@abcx"


def test_unbound_variables_are_left_alone():
    engine = VariablesEngine()
    assert engine("echo $NODE and $") == "echo $NODE and $"


def test_unset_removes_binding():
    engine = VariablesEngine()
    engine.set("A", 1)
    assert engine.get("A") == "1"
    engine.unset("A")
    engine.unset("A")
    assert engine.get("A") is None
    assert engine.bound() == {}


def test_split_command_keeps_raw_remainder():
    assert split_command("  send 1   {\"a\":  1} ") == ("send", "1   {\"a\":  1}")
    assert split_command("help") == ("help", "")
    assert split_command("   ") == ("", "")
