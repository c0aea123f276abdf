"""Command tables for the fleet-shell modes."""

from __future__ import annotations

from typing import List

from .actors import DirectRoutesCommand, ListActorsCommand, SendCommand
from .base import Command
from .general import ClearCommand, EchoCommand, HelpCommand, QuitCommand, SleepCommand
from .mailbox import AwaitMsgCommand, DequeueCommand, MailboxCommand, PopFrontCommand
from .navigation import BackCommand, LeaveNodeCommand, WhereAmICommand
from .nodes import AllRoutesCommand, ChangeNodeCommand, ListNodesCommand, TestNodesCommand
from .telemetry import InterfacesCommand, RamUsageCommand, StatisticsCommand, WorkLoadCommand
from ..modes import NODE_MODE, ModeStack


def global_commands() -> List[Command]:
    return [
        QuitCommand(),
        EchoCommand(),
        ClearCommand(),
        HelpCommand(),
        SleepCommand(),
        ListNodesCommand(),
        TestNodesCommand(),
        ChangeNodeCommand(),
        AllRoutesCommand(),
        WhereAmICommand(),
        MailboxCommand(),
        DequeueCommand(),
        PopFrontCommand(),
        AwaitMsgCommand(),
    ]


def node_commands() -> List[Command]:
    return [
        LeaveNodeCommand(),
        BackCommand(),
        WorkLoadCommand(),
        RamUsageCommand(),
        StatisticsCommand(),
        InterfacesCommand(),
        DirectRoutesCommand(),
        ListActorsCommand(),
        SendCommand(),
    ]


def build_modes(global_prompt: str = "$ ", node_prompt: str = "$ ") -> ModeStack:
    """Build the global and node modes; node mode is global plus node commands, global first."""
    modes = ModeStack(global_prompt)
    node = modes.add_mode(NODE_MODE, node_prompt)
    modes.current.add_commands(global_commands())
    node.add_commands(global_commands())
    node.add_commands(node_commands())
    modes.current.seal()
    node.seal()
    return modes


__all__ = ["Command", "build_modes", "global_commands", "node_commands"]
