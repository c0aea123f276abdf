"""Blocking query client for the node registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, FrozenSet, Optional, Tuple, Union

from .errors import HandshakeError, ProtocolError, RegistryError
from .messages import (
    AddNode,
    AddRoute,
    Back,
    ChangeNode,
    Continue,
    CurrentNodeData,
    ErrorReply,
    Fail,
    GetActorHandle,
    GetNodeInfo,
    GetRamUsage,
    GetRoutes,
    GetWorkLoad,
    HasNode,
    Init,
    Invalid,
    Leave,
    LeaveNode,
    ListActorsOnNode,
    ListNodes,
    NodesOnHost,
    Notice,
    NotFound,
    Ok,
    RegisterActor,
    Reply,
    Request,
    SetRamUsage,
    SetWorkLoad,
    Shutdown,
    Snapshot,
    WhereAmI,
    accepts,
)
from .models import ActorRef, NodeData, NodeId, NodeInfo, RamUsage, WorkLoad
from .transport import Transport

LOGGER = logging.getLogger("fleetreg.client")


@dataclass
class QueryClient:
    """One blocking call per registry operation.

    Calls never overlap: each waits for the reply to the single outstanding
    request before returning. Operations with one success shape return the
    payload directly; the others return the reply so the caller can match on
    its shape.
    """

    transport: Transport

    def _call(self, request: Request, *, timeout: Optional[float] = None) -> Reply:
        reply = self.transport.request(request, timeout=timeout)
        if not accepts(request, reply):
            detail = reply.reason if isinstance(reply, ErrorReply) else repr(reply)
            LOGGER.warning("unexpected reply to %s: %s", type(request).__name__, detail)
            raise ProtocolError(
                f"{type(request).__name__}: unexpected reply ({detail})",
                request=request,
                reply=reply,
            )
        return reply

    def _tell(self, notice: Notice) -> None:
        self.transport.tell(notice)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def handshake(self, peer: Any, *, timeout: Optional[float] = None) -> None:
        try:
            self._call(Init(peer), timeout=timeout)
        except RegistryError as exc:
            raise HandshakeError(f"handshake failed: {exc}") from exc

    def shutdown(self, reason: str = "user_shutdown") -> None:
        self._tell(Shutdown(reason))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def list_nodes(self) -> Tuple[NodeId, ...]:
        return self._call(ListNodes()).value

    def snapshot(self) -> Tuple[NodeData, ...]:
        return self._call(Snapshot()).value

    def has_node(self, node_id: NodeId) -> bool:
        return bool(self._call(HasNode(node_id)).value)

    def get_node_info(self, node_id: NodeId) -> Union[Ok, NotFound]:
        return self._call(GetNodeInfo(node_id))

    def get_work_load(self, node_id: NodeId) -> Union[Ok, NotFound]:
        return self._call(GetWorkLoad(node_id))

    def get_ram_usage(self, node_id: NodeId) -> Union[Ok, NotFound]:
        return self._call(GetRamUsage(node_id))

    def get_routes(self, node_id: NodeId) -> FrozenSet[NodeId]:
        return self._call(GetRoutes(node_id)).value

    def nodes_on_host(self, hostname: str) -> Tuple[NodeId, ...]:
        return self._call(NodesOnHost(hostname)).value

    def get_actor_handle(self, node_id: NodeId, actor_id: int) -> Union[Ok, Invalid]:
        return self._call(GetActorHandle(node_id, actor_id))

    def list_actors_on_node(self, node_id: NodeId) -> str:
        return self._call(ListActorsOnNode(node_id)).value

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def change_node(self, target: NodeId) -> Union[Ok, Fail]:
        return self._call(ChangeNode(target))

    def where_am_i(self) -> Union[Ok, Fail]:
        return self._call(WhereAmI())

    def current_node_data(self) -> Union[Ok, Fail]:
        return self._call(CurrentNodeData())

    def leave_node(self) -> None:
        self._call(LeaveNode())

    def back(self) -> Union[Leave, Continue]:
        return self._call(Back())

    # ------------------------------------------------------------------
    # Telemetry pushes
    # ------------------------------------------------------------------
    def push_node_info(self, info: NodeInfo) -> None:
        self._tell(AddNode(info))

    def push_work_load(self, work_load: WorkLoad) -> None:
        self._tell(SetWorkLoad(work_load))

    def push_ram_usage(self, ram_usage: RamUsage) -> None:
        self._tell(SetRamUsage(ram_usage))

    def push_route(self, source: NodeId, target: NodeId) -> None:
        self._tell(AddRoute(source, target))

    def push_actor(self, ref: ActorRef) -> None:
        self._tell(RegisterActor(ref))
