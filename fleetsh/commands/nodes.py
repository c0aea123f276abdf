"""Fleet-wide node commands: listing, sample data, selection, routes."""

from __future__ import annotations

from fleetreg.messages import FAIL_NO_NODES, Fail
from fleetreg.sample import load_sample_fleet

from .base import Command
from ..context import ShellContext, display_names
from ..errors import CommandError, EmptyRegistry, UnknownNode
from ..output import NO_NODES_MESSAGE, render_node_table, render_routes


class ListNodesCommand(Command):
    def __init__(self) -> None:
        super().__init__("list-nodes", "List all known nodes")

    def run(self, ctx: ShellContext, args: str) -> None:
        self.expect_no_args(args)
        fleet = ctx.client.snapshot()
        render_node_table(fleet, display_names(fleet))


class TestNodesCommand(Command):
    def __init__(self) -> None:
        super().__init__("test-nodes", "Load a small sample fleet into the registry")

    def run(self, ctx: ShellContext, args: str) -> None:
        self.expect_no_args(args)
        count = load_sample_fleet(ctx.client)
        print(f"loaded {count} sample nodes")


class ChangeNodeCommand(Command):
    def __init__(self) -> None:
        super().__init__("change-node", "Select a node by <pid>@<host-id> or <host>[:<pid>]")

    def run(self, ctx: ShellContext, args: str) -> None:
        spec = self.require_args(args, "<node-id> | <host>[:<pid>]")
        try:
            target = ctx.resolve_node(spec)
        except CommandError as exc:
            raise self.fail(str(exc), type(exc)) from None
        reply = ctx.client.change_node(target)
        if isinstance(reply, Fail):
            if reply.reason == FAIL_NO_NODES:
                raise self.fail(reply.reason, EmptyRegistry)
            raise self.fail(f"{reply.reason}: {target}", UnknownNode)
        ctx.enter_node(reply.value)


class AllRoutesCommand(Command):
    def __init__(self) -> None:
        super().__init__("all-routes", "Show the direct routes of every node")

    def run(self, ctx: ShellContext, args: str) -> None:
        self.expect_no_args(args)
        fleet = ctx.client.snapshot()
        if not fleet:
            print(NO_NODES_MESSAGE)
            return
        names = display_names(fleet)
        for data in fleet:
            neighbours = ctx.client.get_routes(data.node_id)
            render_routes(names[data.node_id], [names.get(node_id, str(node_id)) for node_id in neighbours])
