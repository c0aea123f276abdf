"""Tests for line dispatch, history recording and error reporting."""

from __future__ import annotations

import pytest

from fleetsh.repl import UNKNOWN_COMMAND, CommandResult


def test_echo_prints_arguments(shell, capsys):
    assert shell.process("echo hello world") is CommandResult.EXECUTED
    assert capsys.readouterr().out == "hello world\n"


def test_unknown_command(shell):
    assert shell.process("frobnicate") is CommandResult.NO_COMMAND
    assert shell.last_error == UNKNOWN_COMMAND


@pytest.mark.parametrize("line", ["", "   ", "\t"])
def test_blank_lines_are_nop(shell, line):
    assert shell.process(line) is CommandResult.NOP
    assert shell.last_error == ""


@pytest.mark.parametrize(
    "line",
    ["echo", "help", "help extra", "sleep", "sleep abc", "sleep -5", "clear", "work-load", "change-node", "$X", "quit now"],
)
def test_every_line_is_classified(shell, line):
    result = shell.process(line)
    assert result in set(CommandResult)
    if result is CommandResult.NO_COMMAND:
        assert shell.last_error


def test_variables_are_expanded_before_dispatch(shell, capsys):
    shell.ctx.variables.set("WHO", "world")
    shell.process("echo hello $WHO and $UNBOUND")
    assert capsys.readouterr().out == "hello world and $UNBOUND\n"


def test_history_records_executed_and_failed_lines(shell, capsys):
    shell.handle_line("echo one")
    shell.handle_line("bogus")
    shell.handle_line("   ")
    assert shell.history_store.snapshot() == ["echo one", "bogus"]
    out = capsys.readouterr().out
    assert out == "one\nerror: unknown command\n"


def test_history_keeps_raw_line(shell):
    shell.ctx.variables.set("X", "1")
    shell.handle_line("echo $X")
    assert shell.history_store.snapshot() == ["echo $X"]


def test_unexpected_handler_exception_is_contained(shell, monkeypatch):
    echo = shell.ctx.modes.lookup("echo")

    def explode(ctx, args):
        raise ValueError("kaboom")

    monkeypatch.setattr(echo, "run", explode)
    assert shell.process("echo hi") is CommandResult.NO_COMMAND
    assert shell.last_error == "echo: kaboom"


def test_multiline_continuation(shell):
    buffer = []
    assert shell.handle_multiline(buffer, "echo a \\")
    assert not shell.handle_multiline(buffer, "b")
    assert " ".join(buffer) == "echo a  b"


def test_loop_stops_after_quit(shell, capsys):
    lines = iter(["echo first", "quit", "echo never"])
    assert shell._loop(lambda prompt: next(lines)) == 0
    assert shell.ctx.done
    assert "never" not in capsys.readouterr().out


def test_loop_exits_on_eof(shell):
    def read(prompt):
        raise EOFError

    assert shell._loop(read) == 0
