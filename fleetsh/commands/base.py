"""Command base class for fleet-shell."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Type

from ..context import ShellContext
from ..errors import ArgumentError, CommandError


@dataclass
class Command:
    """A named handler in a mode's command table."""

    name: str
    description: str

    def run(self, ctx: ShellContext, args: str) -> None:
        raise NotImplementedError("Command must implement run()")

    def format_help(self) -> str:
        return f"{self.name:<14} {self.description}"

    def fail(self, message: str, error: Type[CommandError] = CommandError) -> CommandError:
        return error(f"{self.name}: {message}")

    def expect_no_args(self, args: str) -> None:
        if args.strip():
            raise self.fail("too many arguments (none expected)", ArgumentError)

    def require_args(self, args: str, usage: str) -> str:
        text = args.strip()
        if not text:
            raise self.fail(f"missing argument, usage: {self.name} {usage}", ArgumentError)
        return text
