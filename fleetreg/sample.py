"""Static sample fleet loaded by the ``test-nodes`` command."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from .client import QueryClient
from .mailbox import Mailbox
from .models import ActorRef, CpuInfo, NodeData, NodeId, NodeInfo, Protocol, RamUsage, WorkLoad

SOKRATES = NodeId(42, "afafafafafafafafafafafafafafafafafafafaf")
PLATON = NodeId(123, "bfbfbfbfbfbfbfbfbfbfbfbfbfbfbfbfbfbfbfbf")
HOST123 = NodeId(1231, "000000000fbfbfbfbfbfbfbfbfbfbfbfbfbfbfbf")

ECHO_ACTOR_IDS = (1, 2)


def echo_behavior(message: Any, sender: Optional[Mailbox]) -> None:
    """Answer every message by handing it back to the sender."""
    if sender is not None:
        sender.put(message)


def sample_fleet() -> List[NodeData]:
    return [
        NodeData(
            node_info=NodeInfo(
                node_id=SOKRATES,
                cpu=(CpuInfo(2, 2300),),
                hostname="Sokrates",
                os="Mac OS X",
                interfaces={
                    "en0": {
                        Protocol.ETHERNET: ("00:00:FF:FF:92:00",),
                        Protocol.IPV4: ("192.168.0.12",),
                    }
                },
            ),
            work_load=WorkLoad(SOKRATES, 0, 5, 3.0),
            ram_usage=RamUsage(SOKRATES, 512, 1024),
        ),
        NodeData(
            node_info=NodeInfo(
                node_id=PLATON,
                cpu=(CpuInfo(4, 1500), CpuInfo(32, 3500)),
                hostname="Platon",
                os="Linux",
                interfaces={
                    "wlan0": {
                        Protocol.ETHERNET: ("00:00:FF:FF:00:00",),
                        Protocol.IPV6: ("fe80::1", "fe80::2"),
                    }
                },
            ),
            work_load=WorkLoad(PLATON, 10, 20, 3.0),
            ram_usage=RamUsage(PLATON, 1024, 8096),
        ),
        NodeData(
            node_info=NodeInfo(
                node_id=HOST123,
                cpu=(CpuInfo(4, 1500), CpuInfo(8, 2500), CpuInfo(64, 5500)),
                hostname="hostname123",
                os="BSD",
                interfaces={"en1": {Protocol.ETHERNET: ("00:00:FF:FF:00:00",)}},
            ),
            work_load=WorkLoad(HOST123, 23, 20, 3.0),
            ram_usage=RamUsage(HOST123, 1024, 8096),
        ),
    ]


def sample_routes() -> List[Tuple[NodeId, NodeId]]:
    return [(SOKRATES, PLATON), (PLATON, HOST123)]


def sample_actors() -> List[ActorRef]:
    return [
        ActorRef(actor_id, data.node_id, behavior=echo_behavior)
        for data in sample_fleet()
        for actor_id in ECHO_ACTOR_IDS
    ]


def load_sample_fleet(client: QueryClient) -> int:
    """Push the sample fleet as telemetry notices and return the node count."""
    fleet = sample_fleet()
    for data in fleet:
        client.push_node_info(data.node_info)
        if data.work_load is not None:
            client.push_work_load(data.work_load)
        if data.ram_usage is not None:
            client.push_ram_usage(data.ram_usage)
    for source, target in sample_routes():
        client.push_route(source, target)
    for ref in sample_actors():
        client.push_actor(ref)
    return len(fleet)
