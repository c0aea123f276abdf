"""Commands available in every mode."""

from __future__ import annotations

import logging
import time

from .base import Command
from ..context import ShellContext
from ..errors import ArgumentError, NotImplementedCommand

LOGGER = logging.getLogger("fleetsh.commands")


class QuitCommand(Command):
    def __init__(self) -> None:
        super().__init__("quit", "Stop the registry and leave the shell")

    def run(self, ctx: ShellContext, args: str) -> None:
        self.expect_no_args(args)
        ctx.client.shutdown()
        ctx.done = True


class EchoCommand(Command):
    def __init__(self) -> None:
        super().__init__("echo", "Print the (expanded) arguments")

    def run(self, ctx: ShellContext, args: str) -> None:
        print(args)


class ClearCommand(Command):
    def __init__(self) -> None:
        super().__init__("clear", "Clear the screen (not implemented)")

    def run(self, ctx: ShellContext, args: str) -> None:
        raise self.fail("not implemented, use ctrl+l to clear the screen", NotImplementedCommand)


class HelpCommand(Command):
    def __init__(self) -> None:
        super().__init__("help", "List the commands of the current mode")

    def run(self, ctx: ShellContext, args: str) -> None:
        self.expect_no_args(args)
        print(ctx.modes.current.help())


class SleepCommand(Command):
    def __init__(self) -> None:
        super().__init__("sleep", "Pause for the given number of milliseconds")

    def run(self, ctx: ShellContext, args: str) -> None:
        text = self.require_args(args, "<milliseconds>")
        try:
            millis = int(text)
        except ValueError:
            raise self.fail(f"not a number: {text!r}", ArgumentError) from None
        if millis < 0:
            raise self.fail("duration must not be negative", ArgumentError)
        LOGGER.debug("sleeping %d ms", millis)
        time.sleep(millis / 1000.0)
