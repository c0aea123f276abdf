"""Closed catalog of registry requests, notices and replies.

Every :class:`Request` names the reply shapes it accepts in ``replies``.
The query client rejects anything else as a protocol error, so callers only
ever match on the shapes listed here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Tuple, Type

from .models import ActorRef, NodeId, NodeInfo, RamUsage, WorkLoad

FAIL_NO_NODES = "no nodes known"
FAIL_UNKNOWN_NODE = "unknown node"
FAIL_GLOBAL_MODE = "in global mode"
FAIL_NOT_FOUND = "not found"


# ----------------------------------------------------------------------------
# Replies
# ----------------------------------------------------------------------------


class Reply:
    """Base class for registry replies."""


@dataclass(frozen=True)
class Ok(Reply):
    value: Any = None


@dataclass(frozen=True)
class Fail(Reply):
    reason: str


@dataclass(frozen=True)
class NotFound(Reply):
    pass


@dataclass(frozen=True)
class Invalid(Reply):
    pass


@dataclass(frozen=True)
class Leave(Reply):
    pass


@dataclass(frozen=True)
class Continue(Reply):
    node_id: NodeId


@dataclass(frozen=True)
class InitDone(Reply):
    pass


@dataclass(frozen=True)
class ErrorReply(Reply):
    """Sent for unsupported messages or internal failures; never accepted."""

    reason: str


# ----------------------------------------------------------------------------
# Messages
# ----------------------------------------------------------------------------


class Message:
    """Base class for everything placed in the registry inbox."""


class Request(Message):
    """A message that expects exactly one reply."""

    replies: ClassVar[Tuple[Type[Reply], ...]] = ()


class Notice(Message):
    """A fire-and-forget message; the registry never answers it."""


@dataclass(frozen=True)
class Init(Request):
    peer: Any
    replies: ClassVar[Tuple[Type[Reply], ...]] = (InitDone,)


@dataclass(frozen=True)
class ListNodes(Request):
    replies: ClassVar[Tuple[Type[Reply], ...]] = (Ok,)


@dataclass(frozen=True)
class Snapshot(Request):
    replies: ClassVar[Tuple[Type[Reply], ...]] = (Ok,)


@dataclass(frozen=True)
class HasNode(Request):
    node_id: NodeId
    replies: ClassVar[Tuple[Type[Reply], ...]] = (Ok,)


@dataclass(frozen=True)
class GetNodeInfo(Request):
    node_id: NodeId
    replies: ClassVar[Tuple[Type[Reply], ...]] = (Ok, NotFound)


@dataclass(frozen=True)
class GetWorkLoad(Request):
    node_id: NodeId
    replies: ClassVar[Tuple[Type[Reply], ...]] = (Ok, NotFound)


@dataclass(frozen=True)
class GetRamUsage(Request):
    node_id: NodeId
    replies: ClassVar[Tuple[Type[Reply], ...]] = (Ok, NotFound)


@dataclass(frozen=True)
class GetRoutes(Request):
    node_id: NodeId
    replies: ClassVar[Tuple[Type[Reply], ...]] = (Ok,)


@dataclass(frozen=True)
class NodesOnHost(Request):
    hostname: str
    replies: ClassVar[Tuple[Type[Reply], ...]] = (Ok,)


@dataclass(frozen=True)
class GetActorHandle(Request):
    node_id: NodeId
    actor_id: int
    replies: ClassVar[Tuple[Type[Reply], ...]] = (Ok, Invalid)


@dataclass(frozen=True)
class ListActorsOnNode(Request):
    node_id: NodeId
    replies: ClassVar[Tuple[Type[Reply], ...]] = (Ok,)


@dataclass(frozen=True)
class ChangeNode(Request):
    target: NodeId
    replies: ClassVar[Tuple[Type[Reply], ...]] = (Ok, Fail)


@dataclass(frozen=True)
class WhereAmI(Request):
    replies: ClassVar[Tuple[Type[Reply], ...]] = (Ok, Fail)


@dataclass(frozen=True)
class CurrentNodeData(Request):
    replies: ClassVar[Tuple[Type[Reply], ...]] = (Ok, Fail)


@dataclass(frozen=True)
class LeaveNode(Request):
    replies: ClassVar[Tuple[Type[Reply], ...]] = (Ok,)


@dataclass(frozen=True)
class Back(Request):
    replies: ClassVar[Tuple[Type[Reply], ...]] = (Leave, Continue)


@dataclass(frozen=True)
class AddNode(Notice):
    info: NodeInfo


@dataclass(frozen=True)
class SetWorkLoad(Notice):
    work_load: WorkLoad


@dataclass(frozen=True)
class SetRamUsage(Notice):
    ram_usage: RamUsage


@dataclass(frozen=True)
class AddRoute(Notice):
    source: NodeId
    target: NodeId


@dataclass(frozen=True)
class RegisterActor(Notice):
    ref: ActorRef


@dataclass(frozen=True)
class Shutdown(Notice):
    reason: str = "user_shutdown"


def accepts(request: Request, reply: Any) -> bool:
    """Return True when *reply* is one of the shapes *request* accepts."""
    return isinstance(reply, Reply) and isinstance(reply, request.replies)
