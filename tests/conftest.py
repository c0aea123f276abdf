"""
Pytest fixtures for fleet-shell tests.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from fleetreg.client import QueryClient
from fleetreg.models import CpuInfo, NodeId, NodeInfo
from fleetreg.sample import load_sample_fleet
from fleetreg.service import RegistryService
from fleetreg.transport import LocalTransport
from fleetsh.commands import build_modes
from fleetsh.config import ShellConfig
from fleetsh.context import ShellContext
from fleetsh.history import HistoryStore
from fleetsh.repl import ShellREPL


def make_node_id(pid: int, digit: str = "a") -> NodeId:
    return NodeId(pid, digit * 40)


def make_info(node_id: NodeId, hostname: str = "host", os_name: str = "Linux") -> NodeInfo:
    return NodeInfo(node_id=node_id, cpu=(CpuInfo(4, 2000),), hostname=hostname, os=os_name)


@pytest.fixture
def service():
    svc = RegistryService(name="test-registry")
    svc.start()
    yield svc
    svc.stop()


@pytest.fixture
def client(service):
    return QueryClient(LocalTransport(service, default_timeout=5.0))


@pytest.fixture
def shell(client, tmp_path):
    config = ShellConfig(history_path=tmp_path / "history", log_level="WARNING")
    ctx = ShellContext(client=client, modes=build_modes(), config=config)
    client.handshake(ctx.mailbox)
    return ShellREPL(ctx, history_store=HistoryStore(config.history_path, limit=config.history_limit))


@pytest.fixture
def fleet_shell(shell):
    load_sample_fleet(shell.ctx.client)
    return shell
