"""Commands that move between global mode and node mode."""

from __future__ import annotations

from fleetreg.messages import Fail, Leave

from .base import Command
from ..context import GLOBAL_MODE_GUIDANCE, ShellContext
from ..errors import ModeError


class LeaveNodeCommand(Command):
    def __init__(self) -> None:
        super().__init__("leave-node", "Return to global mode")

    def run(self, ctx: ShellContext, args: str) -> None:
        self.expect_no_args(args)
        ctx.client.leave_node()
        ctx.leave_node_mode()
        print("Leaving node mode")


class BackCommand(Command):
    def __init__(self) -> None:
        super().__init__("back", "Return to the previously selected node")

    def run(self, ctx: ShellContext, args: str) -> None:
        self.expect_no_args(args)
        reply = ctx.client.back()
        if isinstance(reply, Leave):
            ctx.leave_node_mode()
            print("Back in global mode")
            return
        ctx.bind_node(reply.node_id)
        print(f"Back at {ctx.display_name(reply.node_id)}")


class WhereAmICommand(Command):
    def __init__(self) -> None:
        super().__init__("whereami", "Show the selected node")

    def run(self, ctx: ShellContext, args: str) -> None:
        self.expect_no_args(args)
        reply = ctx.client.where_am_i()
        if isinstance(reply, Fail):
            raise ModeError(GLOBAL_MODE_GUIDANCE)
        ctx.bind_node(reply.value)
        print(ctx.display_name(reply.value))
