"""Tests for NodeRegistry state and navigation."""

from __future__ import annotations

import random

import pytest

from fleetreg.messages import FAIL_GLOBAL_MODE, FAIL_NO_NODES, FAIL_UNKNOWN_NODE, Continue, Fail, Leave, Ok
from fleetreg.models import INVALID_NODE_ID, ActorRef, RamUsage, WorkLoad
from fleetreg.registry import NodeRegistry

from conftest import make_info, make_node_id

A = make_node_id(1, "a")
B = make_node_id(2, "b")
C = make_node_id(3, "c")


@pytest.fixture
def registry():
    reg = NodeRegistry()
    for node_id, host in ((A, "alpha"), (B, "beta"), (C, "beta")):
        assert reg.add_node(make_info(node_id, host))
    return reg


def test_add_node_is_idempotent():
    reg = NodeRegistry()
    info = make_info(A)
    assert reg.add_node(info) is True
    assert reg.add_node(make_info(A, hostname="other")) is False
    assert reg.node_ids() == (A,)
    assert reg.get_node_info(A).hostname == "host"


def test_updates_for_unknown_nodes_are_dropped():
    reg = NodeRegistry()
    reg.add_node(make_info(A))
    before = reg.list_nodes()
    assert reg.set_work_load(WorkLoad(B, 1, 1, 1.0)) is False
    assert reg.set_ram_usage(RamUsage(B, 1, 2)) is False
    assert reg.list_nodes() == before


def test_updates_overwrite_known_node_telemetry(registry):
    assert registry.get_work_load(A) is None
    assert registry.set_work_load(WorkLoad(A, 1, 2, 10.0))
    assert registry.set_work_load(WorkLoad(A, 3, 4, 20.0))
    assert registry.get_work_load(A).num_processes == 3
    assert registry.set_ram_usage(RamUsage(A, 10, 20))
    assert registry.get_ram_usage(A).bytes_available == 20


def test_routes_are_undirected_and_need_known_ends(registry):
    assert registry.add_route(A, B)
    assert registry.get_routes(A) == frozenset({B})
    assert registry.get_routes(B) == frozenset({A})
    assert not registry.add_route(A, make_node_id(99))
    assert not registry.add_route(A, A)
    assert registry.get_routes(C) == frozenset()


def test_nodes_on_host(registry):
    assert registry.nodes_on_host("alpha") == (A,)
    assert registry.nodes_on_host("beta") == (B, C)
    assert registry.nodes_on_host("gamma") == ()


def test_actor_registration(registry):
    assert registry.register_actor(ActorRef(2, A))
    assert registry.register_actor(ActorRef(1, A))
    assert not registry.register_actor(ActorRef(1, A))
    assert not registry.register_actor(ActorRef(1, make_node_id(99)))
    assert registry.list_actors(A) == "1\n2\n"
    assert registry.list_actors(B) == ""
    assert registry.get_actor(A, 1) == ActorRef(1, A)
    assert registry.get_actor(A, 5) is None


def test_change_node_on_empty_registry_fails():
    assert NodeRegistry().change_node(A) == Fail(FAIL_NO_NODES)


def test_change_node_to_unknown_node_fails(registry):
    assert registry.change_node(make_node_id(99)) == Fail(FAIL_UNKNOWN_NODE)
    assert registry.depth == 0


def test_change_node_does_not_duplicate_top(registry):
    assert registry.change_node(A) == Ok(A)
    assert registry.change_node(A) == Ok(A)
    assert registry.depth == 1
    assert registry.back() == Leave()
    assert registry.depth == 0


def test_back_continues_to_previous_node(registry):
    registry.change_node(A)
    registry.change_node(B)
    assert registry.back() == Continue(A)
    assert registry.where_am_i() == Ok(A)


def test_leave_node_clears_whole_history(registry):
    registry.change_node(A)
    registry.change_node(B)
    registry.change_node(C)
    assert registry.leave_node() == Ok()
    assert registry.depth == 0
    assert registry.where_am_i() == Fail(FAIL_GLOBAL_MODE)


def test_global_mode_queries_fail_cleanly():
    reg = NodeRegistry()
    assert reg.where_am_i() == Fail(FAIL_GLOBAL_MODE)
    assert isinstance(reg.current_node_data(), Fail)
    assert reg.back() == Leave()


def test_current_node_data_returns_selected_node(registry):
    registry.set_work_load(WorkLoad(B, 1, 2, 3.0))
    registry.change_node(B)
    reply = registry.current_node_data()
    assert reply.value.node_id == B
    assert reply.value.work_load.num_actors == 2
    assert reply.value.ram_usage is None


@pytest.mark.parametrize("seed", range(5))
def test_where_am_i_tracks_random_navigation(registry, seed):
    rng = random.Random(seed)
    expected = []
    for _ in range(40):
        op = rng.choice(["change", "change", "back", "leave"])
        if op == "change":
            target = rng.choice([A, B, C])
            registry.change_node(target)
            if not expected or expected[-1] != target:
                expected.append(target)
        elif op == "back":
            reply = registry.back()
            if len(expected) <= 1:
                expected.clear()
                assert reply == Leave()
            else:
                expected.pop()
                assert reply == Continue(expected[-1])
        else:
            registry.leave_node()
            expected.clear()
        reply = registry.where_am_i()
        if expected:
            assert reply == Ok(expected[-1])
        else:
            assert reply == Fail(FAIL_GLOBAL_MODE)


def test_invalid_node_id_is_never_stored():
    reg = NodeRegistry()
    assert reg.add_node(make_info(INVALID_NODE_ID, "ghost")) is False
    assert reg.node_ids() == ()
    assert not reg.has_node(INVALID_NODE_ID)


def test_change_node_to_invalid_node_id_fails(registry):
    assert registry.change_node(INVALID_NODE_ID) == Fail(FAIL_UNKNOWN_NODE)
    assert registry.depth == 0
