"""Tests for the prompt_toolkit completer."""

from __future__ import annotations

from prompt_toolkit.completion import CompleteEvent
from prompt_toolkit.document import Document

from fleetsh.completion import ShellCompleter


def _complete(shell, text):
    completer = ShellCompleter(shell.ctx)
    return [c.text for c in completer.get_completions(Document(text), CompleteEvent())]


def test_completes_command_names_of_current_mode(shell):
    assert _complete(shell, "list-") == ["list-nodes"]
    assert "work-load" not in _complete(shell, "")


def test_node_mode_completes_node_commands(fleet_shell):
    fleet_shell.process("change-node Platon")
    assert _complete(fleet_shell, "work") == ["work-load"]


def test_change_node_completes_display_names(fleet_shell):
    assert _complete(fleet_shell, "change-node Pl") == ["Platon:123"]
    assert _complete(fleet_shell, "echo Pl") == []
