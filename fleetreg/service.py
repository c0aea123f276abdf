"""Single-threaded service that owns the node registry."""

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

from .errors import TransportError
from .messages import (
    AddNode,
    AddRoute,
    Back,
    ChangeNode,
    CurrentNodeData,
    ErrorReply,
    GetActorHandle,
    GetNodeInfo,
    GetRamUsage,
    GetRoutes,
    GetWorkLoad,
    HasNode,
    Init,
    InitDone,
    Invalid,
    LeaveNode,
    ListActorsOnNode,
    ListNodes,
    Message,
    NodesOnHost,
    NotFound,
    Ok,
    RegisterActor,
    Reply,
    SetRamUsage,
    SetWorkLoad,
    Shutdown,
    Snapshot,
    WhereAmI,
)
from .registry import NodeRegistry

LOGGER = logging.getLogger("fleetreg.service")


@dataclass
class _Envelope:
    message: Message
    reply_to: Optional["queue.Queue[Reply]"] = None


class RegistryService:
    """Applies inbox messages to a :class:`NodeRegistry`, strictly in order.

    Shell requests and telemetry pushes share one inbox and one worker
    thread, so the registry is only ever touched from that thread and needs
    no locking of its own.
    """

    def __init__(self, registry: Optional[NodeRegistry] = None, *, name: str = "fleet-registry") -> None:
        self.registry = registry if registry is not None else NodeRegistry()
        self.name = name
        self.peer: Optional[Any] = None
        self._inbox: "queue.Queue[_Envelope]" = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._running = False
        self._lifecycle_lock = threading.Lock()
        self._handlers: Dict[Type[Message], Callable[[Any], Optional[Reply]]] = {
            Init: self._on_init,
            AddNode: self._on_add_node,
            SetWorkLoad: self._on_set_work_load,
            SetRamUsage: self._on_set_ram_usage,
            AddRoute: self._on_add_route,
            RegisterActor: self._on_register_actor,
            ListNodes: lambda _msg: Ok(self.registry.node_ids()),
            Snapshot: lambda _msg: Ok(tuple(self.registry.list_nodes())),
            HasNode: lambda msg: Ok(self.registry.has_node(msg.node_id)),
            GetNodeInfo: lambda msg: _found(self.registry.get_node_info(msg.node_id)),
            GetWorkLoad: lambda msg: _found(self.registry.get_work_load(msg.node_id)),
            GetRamUsage: lambda msg: _found(self.registry.get_ram_usage(msg.node_id)),
            GetRoutes: lambda msg: Ok(self.registry.get_routes(msg.node_id)),
            NodesOnHost: lambda msg: Ok(self.registry.nodes_on_host(msg.hostname)),
            GetActorHandle: self._on_get_actor_handle,
            ListActorsOnNode: lambda msg: Ok(self.registry.list_actors(msg.node_id)),
            ChangeNode: lambda msg: self.registry.change_node(msg.target),
            WhereAmI: lambda _msg: self.registry.where_am_i(),
            CurrentNodeData: lambda _msg: self.registry.current_node_data(),
            LeaveNode: lambda _msg: self.registry.leave_node(),
            Back: lambda _msg: self.registry.back(),
        }

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        with self._lifecycle_lock:
            return self._running

    def start(self) -> None:
        with self._lifecycle_lock:
            if self._running:
                return
            self._running = True
            self._thread = threading.Thread(target=self._run, daemon=True, name=self.name)
            self._thread.start()
        LOGGER.debug("%s started", self.name)

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """Queue a shutdown notice and wait for the worker to finish."""
        thread = self._thread
        if thread is None:
            return
        self.tell(Shutdown("service stopped"))
        thread.join(timeout=timeout)
        self._thread = None

    # ------------------------------------------------------------------
    # Inbox
    # ------------------------------------------------------------------
    def tell(self, message: Message) -> None:
        with self._lifecycle_lock:
            if not self._running:
                LOGGER.debug("%s is not running, dropped %s", self.name, type(message).__name__)
                return
            self._inbox.put(_Envelope(message))

    def ask(self, message: Message, *, timeout: Optional[float] = None) -> Reply:
        """Queue *message* and block until its reply arrives."""
        reply_box: "queue.Queue[Reply]" = queue.Queue(maxsize=1)
        with self._lifecycle_lock:
            if not self._running:
                raise TransportError(f"{self.name} is not running")
            self._inbox.put(_Envelope(message, reply_box))
        try:
            return reply_box.get(timeout=timeout)
        except queue.Empty:
            raise TransportError(f"no reply to {type(message).__name__} within {timeout}s") from None

    def _run(self) -> None:
        while True:
            envelope = self._inbox.get()
            message = envelope.message
            if isinstance(message, Shutdown):
                LOGGER.info("%s shutting down: %s", self.name, message.reason)
                break
            reply = self._apply(message)
            if envelope.reply_to is not None:
                envelope.reply_to.put(reply if reply is not None else ErrorReply("no reply produced"))
        with self._lifecycle_lock:
            self._running = False
            pending = self._drain()
        for envelope in pending:
            if envelope.reply_to is not None:
                envelope.reply_to.put(ErrorReply(f"{self.name} stopped"))

    def _drain(self) -> List[_Envelope]:
        pending: List[_Envelope] = []
        while True:
            try:
                pending.append(self._inbox.get_nowait())
            except queue.Empty:
                return pending

    def _apply(self, message: Message) -> Optional[Reply]:
        handler = self._handlers.get(type(message))
        if handler is None:
            LOGGER.warning("unexpected message: %r", message)
            return ErrorReply(f"unsupported message: {type(message).__name__}")
        try:
            return handler(message)
        except Exception as exc:
            LOGGER.exception("%s failed", type(message).__name__)
            return ErrorReply(str(exc))

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    def _on_init(self, message: Init) -> Reply:
        self.peer = message.peer
        LOGGER.debug("handshake with %r", message.peer)
        return InitDone()

    def _on_add_node(self, message: AddNode) -> None:
        node_id = message.info.node_id
        if self.registry.add_node(message.info):
            LOGGER.info("new node_info: %s (%s)", node_id, message.info.hostname)
        else:
            LOGGER.debug("dropped duplicate node_info: %s", node_id)

    def _on_set_work_load(self, message: SetWorkLoad) -> None:
        if not self.registry.set_work_load(message.work_load):
            LOGGER.debug("dropped work_load for unknown node: %s", message.work_load.node_id)

    def _on_set_ram_usage(self, message: SetRamUsage) -> None:
        if not self.registry.set_ram_usage(message.ram_usage):
            LOGGER.debug("dropped ram_usage for unknown node: %s", message.ram_usage.node_id)

    def _on_add_route(self, message: AddRoute) -> None:
        if not self.registry.add_route(message.source, message.target):
            LOGGER.debug("dropped route %s -> %s", message.source, message.target)

    def _on_register_actor(self, message: RegisterActor) -> None:
        if not self.registry.register_actor(message.ref):
            LOGGER.debug("dropped actor %s on %s", message.ref.actor_id, message.ref.node_id)

    def _on_get_actor_handle(self, message: GetActorHandle) -> Reply:
        ref = self.registry.get_actor(message.node_id, message.actor_id)
        return Ok(ref) if ref is not None else Invalid()


def _found(value: Optional[Any]) -> Reply:
    return Ok(value) if value is not None else NotFound()
