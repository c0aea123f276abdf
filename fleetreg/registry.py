"""Node registry state: per-node telemetry plus the navigation history."""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, FrozenSet, List, Optional, Set, Tuple, Union

from .messages import (
    FAIL_GLOBAL_MODE,
    FAIL_NO_NODES,
    FAIL_NOT_FOUND,
    FAIL_UNKNOWN_NODE,
    Continue,
    Fail,
    Leave,
    Ok,
)
from .models import ActorRef, NodeData, NodeId, NodeInfo, RamUsage, WorkLoad


class NodeRegistry:
    """Authoritative store of node telemetry and navigation history.

    Entries are added once and never merged: a second ``add_node`` for a
    known id is a late announcement and is discarded. Work load and RAM
    usage overwrite the stored value for known nodes only.

    The visited stack drives navigation. Empty means global mode; the top
    entry is the current node and always refers to a known node.

    The registry is not thread-safe. :class:`~fleetreg.service.RegistryService`
    owns one instance and applies messages to it one at a time.
    """

    def __init__(self) -> None:
        self._nodes: Dict[NodeId, NodeData] = {}
        self._visited: List[NodeId] = []
        self._routes: Dict[NodeId, Set[NodeId]] = {}
        self._actors: Dict[NodeId, Dict[int, ActorRef]] = {}

    # ------------------------------------------------------------------
    # Telemetry
    # ------------------------------------------------------------------
    def add_node(self, info: NodeInfo) -> bool:
        if not info.node_id.is_valid or info.node_id in self._nodes:
            return False
        self._nodes[info.node_id] = NodeData(node_info=info)
        return True

    def set_work_load(self, work_load: WorkLoad) -> bool:
        data = self._nodes.get(work_load.node_id)
        if data is None:
            return False
        self._nodes[work_load.node_id] = replace(data, work_load=work_load)
        return True

    def set_ram_usage(self, ram_usage: RamUsage) -> bool:
        data = self._nodes.get(ram_usage.node_id)
        if data is None:
            return False
        self._nodes[ram_usage.node_id] = replace(data, ram_usage=ram_usage)
        return True

    def add_route(self, source: NodeId, target: NodeId) -> bool:
        if source == target or source not in self._nodes or target not in self._nodes:
            return False
        self._routes.setdefault(source, set()).add(target)
        self._routes.setdefault(target, set()).add(source)
        return True

    def register_actor(self, ref: ActorRef) -> bool:
        if ref.node_id not in self._nodes:
            return False
        actors = self._actors.setdefault(ref.node_id, {})
        if ref.actor_id in actors:
            return False
        actors[ref.actor_id] = ref
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def list_nodes(self) -> List[NodeData]:
        return [self._nodes[node_id] for node_id in sorted(self._nodes)]

    def node_ids(self) -> Tuple[NodeId, ...]:
        return tuple(sorted(self._nodes))

    def has_node(self, node_id: NodeId) -> bool:
        return node_id in self._nodes

    def get_node_info(self, node_id: NodeId) -> Optional[NodeInfo]:
        data = self._nodes.get(node_id)
        return data.node_info if data else None

    def get_work_load(self, node_id: NodeId) -> Optional[WorkLoad]:
        data = self._nodes.get(node_id)
        return data.work_load if data else None

    def get_ram_usage(self, node_id: NodeId) -> Optional[RamUsage]:
        data = self._nodes.get(node_id)
        return data.ram_usage if data else None

    def get_routes(self, node_id: NodeId) -> FrozenSet[NodeId]:
        return frozenset(self._routes.get(node_id, ()))

    def nodes_on_host(self, hostname: str) -> Tuple[NodeId, ...]:
        return tuple(
            node_id for node_id in sorted(self._nodes) if self._nodes[node_id].node_info.hostname == hostname
        )

    def get_actor(self, node_id: NodeId, actor_id: int) -> Optional[ActorRef]:
        return self._actors.get(node_id, {}).get(actor_id)

    def list_actors(self, node_id: NodeId) -> str:
        return "".join(f"{actor_id}\n" for actor_id in sorted(self._actors.get(node_id, {})))

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    @property
    def depth(self) -> int:
        return len(self._visited)

    def change_node(self, target: NodeId) -> Union[Ok, Fail]:
        if not self._nodes:
            return Fail(FAIL_NO_NODES)
        if not target.is_valid or target not in self._nodes:
            return Fail(FAIL_UNKNOWN_NODE)
        if not self._visited or self._visited[-1] != target:
            self._visited.append(target)
        return Ok(target)

    def where_am_i(self) -> Union[Ok, Fail]:
        if not self._visited:
            return Fail(FAIL_GLOBAL_MODE)
        return Ok(self._visited[-1])

    def current_node_data(self) -> Union[Ok, Fail]:
        if not self._visited:
            return Fail(FAIL_NOT_FOUND)
        data = self._nodes.get(self._visited[-1])
        if data is None:
            return Fail(FAIL_NOT_FOUND)
        return Ok(data)

    def leave_node(self) -> Ok:
        self._visited.clear()
        return Ok()

    def back(self) -> Union[Leave, Continue]:
        if len(self._visited) <= 1:
            self._visited.clear()
            return Leave()
        self._visited.pop()
        return Continue(self._visited[-1])
