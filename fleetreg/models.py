"""Data model for nodes, telemetry records and actor handles."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Tuple

from .mailbox import Mailbox

HOST_ID_LENGTH = 40

_NODE_ID_RE = re.compile(r"^(\d+)@([0-9a-fA-F]{%d})$" % HOST_ID_LENGTH)
_HOST_ID_RE = re.compile(r"^[0-9a-f]{%d}$" % HOST_ID_LENGTH)


@dataclass(frozen=True, order=True)
class NodeId:
    """Identifies a monitored process: process id plus host fingerprint."""

    process_id: int
    host_id: str

    def __post_init__(self) -> None:
        host_id = str(self.host_id).lower()
        if not _HOST_ID_RE.match(host_id):
            raise ValueError(f"host id must be {HOST_ID_LENGTH} hex digits: {self.host_id!r}")
        if int(self.process_id) < 0:
            raise ValueError(f"process id must be non-negative: {self.process_id}")
        object.__setattr__(self, "host_id", host_id)
        object.__setattr__(self, "process_id", int(self.process_id))

    def __str__(self) -> str:
        return f"{self.process_id}@{self.host_id}"

    @classmethod
    def parse(cls, text: str) -> "NodeId":
        """Parse the ``<process_id>@<host_id>`` form produced by ``str()``."""
        match = _NODE_ID_RE.match(text.strip())
        if not match:
            raise ValueError(f"invalid node id: {text!r}")
        return cls(int(match.group(1)), match.group(2))

    @property
    def is_valid(self) -> bool:
        return self != INVALID_NODE_ID


INVALID_NODE_ID = NodeId(0, "0" * HOST_ID_LENGTH)


class Protocol(Enum):
    ETHERNET = "ethernet"
    IPV4 = "ipv4"
    IPV6 = "ipv6"


InterfaceMap = Mapping[str, Mapping[Protocol, Tuple[str, ...]]]


@dataclass(frozen=True)
class CpuInfo:
    core_count: int
    mhz_per_core: int


@dataclass(frozen=True)
class NodeInfo:
    node_id: NodeId
    cpu: Tuple[CpuInfo, ...]
    hostname: str
    os: str
    interfaces: InterfaceMap = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        frozen = {name: MappingProxyType({protocol: tuple(values) for protocol, values in addresses.items()}) for name, addresses in self.interfaces.items()}
        object.__setattr__(self, "cpu", tuple(self.cpu))
        object.__setattr__(self, "interfaces", MappingProxyType(frozen))


@dataclass(frozen=True)
class WorkLoad:
    node_id: NodeId
    num_processes: int
    num_actors: int
    cpu_load_percent: float


@dataclass(frozen=True)
class RamUsage:
    node_id: NodeId
    bytes_in_use: int
    bytes_available: int

    def percent_used(self) -> Optional[float]:
        if self.bytes_available <= 0:
            return None
        return self.bytes_in_use * 100.0 / self.bytes_available


@dataclass(frozen=True)
class NodeData:
    """Everything the registry knows about one node."""

    node_info: NodeInfo
    work_load: Optional[WorkLoad] = None
    ram_usage: Optional[RamUsage] = None

    @property
    def node_id(self) -> NodeId:
        return self.node_info.node_id


ActorBehavior = Callable[[Any, Optional[Mailbox]], None]


@dataclass(frozen=True)
class ActorRef:
    """Handle to an actor living on a monitored node."""

    actor_id: int
    node_id: NodeId
    behavior: Optional[ActorBehavior] = field(default=None, compare=False, repr=False)
    mailbox: Mailbox = field(default_factory=Mailbox, compare=False, repr=False)

    def tell(self, message: Any, sender: Optional[Mailbox] = None) -> None:
        """Deliver *message* fire-and-forget."""
        if self.behavior is not None:
            self.behavior(message, sender)
        else:
            self.mailbox.put(message)


__all__ = [
    "ActorRef",
    "CpuInfo",
    "HOST_ID_LENGTH",
    "INVALID_NODE_ID",
    "InterfaceMap",
    "NodeData",
    "NodeId",
    "NodeInfo",
    "Protocol",
    "RamUsage",
    "WorkLoad",
]
