"""
fleetreg - node registry toolkit for fleet-shell.

The registry is the single owner of node telemetry and navigation history.
Each module keeps one responsibility:

    models.py     → node ids, telemetry records, actor handles
    registry.py   → registry state machine (telemetry store + visited stack)
    messages.py   → closed catalog of requests, notices and replies
    service.py    → single-threaded service applying messages in order
    transport.py  → transport interface and the in-process binding
    client.py     → blocking query client with reply-shape checking
    mailbox.py    → blocking / polling inbox used by the shell
    sample.py     → static sample fleet
"""

from .client import QueryClient  # noqa: F401
from .errors import HandshakeError, ProtocolError, RegistryError, TransportError  # noqa: F401
from .mailbox import Mailbox  # noqa: F401
from .models import (  # noqa: F401
    INVALID_NODE_ID,
    ActorRef,
    CpuInfo,
    NodeData,
    NodeId,
    NodeInfo,
    Protocol,
    RamUsage,
    WorkLoad,
)
from .registry import NodeRegistry  # noqa: F401
from .service import RegistryService  # noqa: F401
from .transport import LocalTransport, Transport  # noqa: F401

__all__ = [
    "QueryClient",
    "RegistryError",
    "TransportError",
    "HandshakeError",
    "ProtocolError",
    "Mailbox",
    "INVALID_NODE_ID",
    "ActorRef",
    "CpuInfo",
    "NodeData",
    "NodeId",
    "NodeInfo",
    "Protocol",
    "RamUsage",
    "WorkLoad",
    "NodeRegistry",
    "RegistryService",
    "LocalTransport",
    "Transport",
]

__version__ = "0.1.0"
