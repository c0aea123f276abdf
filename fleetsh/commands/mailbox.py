"""Commands reading the shell's own mailbox."""

from __future__ import annotations

from .base import Command
from ..context import ShellContext
from ..errors import NotImplementedCommand
from ..output import format_message


class MailboxCommand(Command):
    def __init__(self) -> None:
        super().__init__("mailbox", "Show the mailbox (not implemented)")

    def run(self, ctx: ShellContext, args: str) -> None:
        raise self.fail("not implemented yet", NotImplementedCommand)


class DequeueCommand(Command):
    def __init__(self) -> None:
        super().__init__("dequeue", "Remove a message by position (not implemented)")

    def run(self, ctx: ShellContext, args: str) -> None:
        raise self.fail("not implemented yet", NotImplementedCommand)


class PopFrontCommand(Command):
    def __init__(self) -> None:
        super().__init__("pop-front", "Remove and print the oldest message, if any")

    def run(self, ctx: ShellContext, args: str) -> None:
        self.expect_no_args(args)
        message = ctx.mailbox.try_peek_message()
        if message is None:
            print("pop-front: mailbox is empty")
            return
        print(format_message(message))


class AwaitMsgCommand(Command):
    def __init__(self) -> None:
        super().__init__("await-msg", "Block until a message arrives and print it")

    def run(self, ctx: ShellContext, args: str) -> None:
        self.expect_no_args(args)
        print(format_message(ctx.mailbox.wait_for_message()))
