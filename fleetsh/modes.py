"""Shell modes and the mode stack."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

from .errors import ModeError

if TYPE_CHECKING:  # pragma: no cover
    from .commands.base import Command

GLOBAL_MODE = "global"
NODE_MODE = "node"


class Mode:
    """A named context with its own command table.

    Commands are added while the shell is being assembled; the first
    command registered under a name wins. :meth:`seal` freezes the table.
    """

    def __init__(self, name: str, prompt: str) -> None:
        self.name = name
        self.prompt = prompt
        self._commands: Dict[str, "Command"] = {}
        self._ordered: List["Command"] = []
        self._sealed = False

    def add_commands(self, commands: Iterable["Command"]) -> None:
        if self._sealed:
            raise ModeError(f"mode '{self.name}' is sealed")
        for command in commands:
            if command.name in self._commands:
                continue
            self._commands[command.name] = command
            self._ordered.append(command)

    def seal(self) -> None:
        self._sealed = True

    def lookup(self, name: str) -> Optional["Command"]:
        return self._commands.get(name)

    def list_commands(self) -> Tuple["Command", ...]:
        return tuple(self._ordered)

    def help(self) -> str:
        lines = [f"{self.name} mode commands:"]
        lines.extend(f"  {command.format_help()}" for command in self._ordered)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Mode({self.name!r}, commands={len(self._ordered)})"


class ModeStack:
    """Stack of active modes; the bottom is always the global mode."""

    def __init__(self, global_prompt: str = "$ ") -> None:
        self._modes: Dict[str, Mode] = {}
        self._stack: List[Mode] = [self.add_mode(GLOBAL_MODE, global_prompt)]

    def add_mode(self, name: str, prompt: str) -> Mode:
        if name in self._modes:
            raise ModeError(f"mode '{name}' already exists")
        mode = Mode(name, prompt)
        self._modes[name] = mode
        return mode

    def get(self, name: str) -> Optional[Mode]:
        return self._modes.get(name)

    def push(self, name: str) -> Mode:
        mode = self._modes.get(name)
        if mode is None:
            raise ModeError(f"unknown mode: {name}")
        self._stack.append(mode)
        return mode

    def pop(self) -> None:
        if len(self._stack) > 1:
            self._stack.pop()

    @property
    def current(self) -> Mode:
        return self._stack[-1]

    @property
    def depth(self) -> int:
        return len(self._stack)

    def lookup(self, command_name: str) -> Optional["Command"]:
        return self.current.lookup(command_name)
