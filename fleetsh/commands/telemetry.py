"""Node-mode telemetry commands."""

from __future__ import annotations

from fleetreg.messages import Fail, NotFound

from .base import Command
from ..context import ShellContext
from ..errors import ModeError, NoTelemetry, UnknownNode
from ..output import render_interfaces, render_node_info, render_ram_usage, render_work_load


class WorkLoadCommand(Command):
    def __init__(self) -> None:
        super().__init__("work-load", "Show processes, actors and CPU load of the node")

    def run(self, ctx: ShellContext, args: str) -> None:
        self.expect_no_args(args)
        reply = ctx.client.get_work_load(ctx.require_node())
        if isinstance(reply, NotFound):
            raise self.fail("no work load statistics available for node", NoTelemetry)
        render_work_load(reply.value, fill=ctx.config.bar_fill, width=ctx.config.bar_width)


class RamUsageCommand(Command):
    def __init__(self) -> None:
        super().__init__("ram-usage", "Show RAM usage of the node")

    def run(self, ctx: ShellContext, args: str) -> None:
        self.expect_no_args(args)
        reply = ctx.client.get_ram_usage(ctx.require_node())
        if isinstance(reply, NotFound):
            raise self.fail("no RAM usage available for node", NoTelemetry)
        render_ram_usage(reply.value, fill=ctx.config.bar_fill, width=ctx.config.bar_width)


class StatisticsCommand(Command):
    def __init__(self) -> None:
        super().__init__("statistics", "Show node info, work load and RAM usage")

    def run(self, ctx: ShellContext, args: str) -> None:
        self.expect_no_args(args)
        reply = ctx.client.current_node_data()
        if isinstance(reply, Fail):
            raise self.fail(reply.reason, ModeError if ctx.current_node is None else UnknownNode)
        data = reply.value
        render_node_info(data.node_info)
        if data.work_load is None:
            print("No work load statistics available for node")
        else:
            render_work_load(data.work_load, fill=ctx.config.bar_fill, width=ctx.config.bar_width)
        if data.ram_usage is None:
            print("No RAM usage available for node")
        else:
            render_ram_usage(data.ram_usage, fill=ctx.config.bar_fill, width=ctx.config.bar_width)


class InterfacesCommand(Command):
    def __init__(self) -> None:
        super().__init__("interfaces", "Show network interfaces of the node")

    def run(self, ctx: ShellContext, args: str) -> None:
        self.expect_no_args(args)
        node_id = ctx.require_node()
        reply = ctx.client.get_node_info(node_id)
        if isinstance(reply, NotFound):
            raise self.fail(f"unknown node: {node_id}", UnknownNode)
        render_interfaces(reply.value)
