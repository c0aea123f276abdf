"""Shared shell state and node resolution helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

from fleetreg.client import QueryClient
from fleetreg.mailbox import Mailbox
from fleetreg.messages import Ok
from fleetreg.models import NodeData, NodeId, NodeInfo

from .config import ShellConfig
from .errors import AmbiguousHost, ArgumentError, EmptyRegistry, ModeError, UnresolvedHost
from .modes import NODE_MODE, ModeStack
from .variables import VariablesEngine

LOGGER = logging.getLogger("fleetsh.context")

NODE_VARIABLE = "NODE"
GLOBAL_MODE_GUIDANCE = (
    "You are currently in global mode. Select a node with 'change-node <node-id>' or 'change-node <host>[:<pid>]'."
)


def display_name(info: NodeInfo, node_count: int) -> str:
    """Hostname, suffixed with ``:<pid>`` once more than one node is known."""
    if node_count > 1:
        return f"{info.hostname}:{info.node_id.process_id}"
    return info.hostname


def display_names(fleet: Iterable[NodeData]) -> Dict[NodeId, str]:
    rows = list(fleet)
    return {data.node_id: display_name(data.node_info, len(rows)) for data in rows}


@dataclass
class ShellContext:
    """Holds the state shared by all commands of one shell session."""

    client: QueryClient
    modes: ModeStack
    config: ShellConfig = field(default_factory=ShellConfig)
    variables: VariablesEngine = field(default_factory=VariablesEngine)
    mailbox: Mailbox = field(default_factory=lambda: Mailbox("shell"))
    current_node: Optional[NodeId] = None
    done: bool = False

    # ------------------------------------------------------------------
    # mode tracking
    # ------------------------------------------------------------------
    def enter_node(self, node_id: NodeId) -> None:
        """Select *node_id*; enters node mode when coming from global mode."""
        if self.modes.depth == 1:
            self.modes.push(NODE_MODE)
        self.bind_node(node_id)

    def bind_node(self, node_id: NodeId) -> None:
        self.current_node = node_id
        self.variables.set(NODE_VARIABLE, str(node_id))
        LOGGER.debug("current node is now %s", node_id)

    def leave_node_mode(self) -> None:
        self.modes.pop()
        self.variables.unset(NODE_VARIABLE)
        self.current_node = None

    def require_node(self) -> NodeId:
        if self.current_node is None:
            raise ModeError(GLOBAL_MODE_GUIDANCE)
        return self.current_node

    # ------------------------------------------------------------------
    # naming
    # ------------------------------------------------------------------
    def display_name(self, node_id: NodeId) -> str:
        count = len(self.client.list_nodes())
        reply = self.client.get_node_info(node_id)
        if not isinstance(reply, Ok):
            return str(node_id)
        return display_name(reply.value, count)

    def resolve_node(self, spec: str) -> NodeId:
        """Accept ``<pid>@<host-id>``, ``<host>`` or ``<host>:<pid>``."""
        try:
            return NodeId.parse(spec)
        except ValueError:
            pass
        return self.resolve_host(spec)

    def resolve_host(self, spec: str) -> NodeId:
        host, sep, pid_text = spec.partition(":")
        if not host or ":" in pid_text or (sep and not pid_text):
            raise ArgumentError(f"invalid node or host: {spec!r}")
        candidates = self.client.nodes_on_host(host)
        if not sep:
            if len(candidates) == 1:
                return candidates[0]
            if len(candidates) > 1:
                raise AmbiguousHost(f"host '{host}' runs {len(candidates)} nodes, use '{host}:<pid>'")
        else:
            try:
                pid = int(pid_text)
            except ValueError:
                raise ArgumentError(f"invalid process id in {spec!r}") from None
            for node_id in candidates:
                if node_id.process_id == pid:
                    return node_id
        if not candidates and not self.client.list_nodes():
            raise EmptyRegistry("no nodes known")
        raise UnresolvedHost(f"no node matches '{spec}'")
