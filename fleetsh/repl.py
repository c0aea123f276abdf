"""Read-eval loop for fleet-shell."""

from __future__ import annotations

import enum
import logging
import sys
from typing import Callable, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.patch_stdout import patch_stdout

from fleetreg.errors import RegistryError

from .completion import ShellCompleter
from .context import ShellContext
from .errors import CommandError, UnknownCommand
from .history import HistoryStore, StoreBackedHistory
from .output import emit_error
from .parser import split_command

LOGGER = logging.getLogger("fleetsh.repl")

UNKNOWN_COMMAND = "unknown command"


class CommandResult(enum.Enum):
    EXECUTED = "executed"
    NO_COMMAND = "no_command"
    NOP = "nop"


class ShellREPL:
    """Dispatches input lines against the current mode.

    :meth:`process` classifies a single line; :meth:`handle_line` adds history
    and error reporting; :meth:`run` drives either a prompt_toolkit session
    (on a terminal) or a plain ``input()`` loop.
    """

    def __init__(self, ctx: ShellContext, *, history_store: Optional[HistoryStore] = None) -> None:
        self.ctx = ctx
        self.history_store = history_store
        self.last_error = ""

    # ------------------------------------------------------------------
    # dispatch
    # ------------------------------------------------------------------
    def process(self, line: str) -> CommandResult:
        self.last_error = ""
        text = self.ctx.variables.preprocess(line)
        name, args = split_command(text)
        if not name:
            return CommandResult.NOP
        try:
            command = self.ctx.modes.lookup(name)
            if command is None:
                raise UnknownCommand(UNKNOWN_COMMAND)
            command.run(self.ctx, args)
        except (CommandError, RegistryError) as exc:
            LOGGER.debug("%s failed: %s", name, exc)
            return self._no_command(str(exc) or type(exc).__name__)
        except Exception as exc:
            LOGGER.exception("command %s failed", name)
            return self._no_command(f"{name}: {exc}")
        return CommandResult.EXECUTED

    def _no_command(self, message: str) -> CommandResult:
        self.last_error = message
        return CommandResult.NO_COMMAND

    def handle_line(self, line: str) -> CommandResult:
        result = self.process(line)
        if result is not CommandResult.NOP:
            self._record_history(line)
        if result is CommandResult.NO_COMMAND:
            emit_error(self.last_error)
        return result

    def _record_history(self, entry: str) -> None:
        if self.history_store is not None:
            self.history_store.append(entry.strip())

    # ------------------------------------------------------------------
    # loops
    # ------------------------------------------------------------------
    def prompt_text(self) -> str:
        return self.ctx.variables.preprocess(self.ctx.modes.current.prompt)

    def run(self) -> int:
        if not sys.stdin.isatty():
            return self._loop(input)
        history = StoreBackedHistory(self.history_store) if self.history_store else None
        session: PromptSession = PromptSession(
            history=history,
            completer=ShellCompleter(self.ctx),
            complete_while_typing=False,
        )

        def read_line(prompt: str) -> str:
            with patch_stdout():
                return session.prompt(prompt)

        return self._loop(read_line)

    def _loop(self, read_line: Callable[[str], str]) -> int:
        buffer: List[str] = []
        while not self.ctx.done:
            try:
                line = read_line(self.prompt_text())
            except (EOFError, KeyboardInterrupt):
                print()
                return 0
            if self.handle_multiline(buffer, line):
                continue
            payload = " ".join(buffer) if buffer else line
            buffer.clear()
            self.handle_line(payload)
        return 0

    def handle_multiline(self, buffer: List[str], line: str) -> bool:
        stripped = line.rstrip()
        if stripped.endswith("\\"):
            buffer.append(stripped[:-1])
            return True
        if buffer:
            buffer.append(stripped)
        return False
