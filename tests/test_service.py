"""Tests for the registry service worker and the query client."""

from __future__ import annotations

import threading
from unittest.mock import MagicMock

import pytest

from fleetreg.client import QueryClient
from fleetreg.errors import HandshakeError, ProtocolError, TransportError
from fleetreg.messages import AddNode, ErrorReply, Fail, InitDone, ListNodes, NotFound, Ok, Request
from fleetreg.models import INVALID_NODE_ID, WorkLoad
from fleetreg.service import RegistryService
from fleetreg.transport import LocalTransport

from conftest import make_info, make_node_id

A = make_node_id(1, "a")
B = make_node_id(2, "b")


def test_notices_and_requests_are_processed_in_send_order(client):
    client.push_node_info(make_info(A))
    client.push_work_load(WorkLoad(A, 1, 2, 3.0))
    assert client.list_nodes() == (A,)
    assert client.get_work_load(A) == Ok(WorkLoad(A, 1, 2, 3.0))


def test_telemetry_for_unknown_node_is_dropped(client):
    client.push_work_load(WorkLoad(B, 1, 2, 3.0))
    assert client.list_nodes() == ()
    assert client.get_work_load(B) == NotFound()


def test_concurrent_pushes_interleave_with_queries(client):
    ids = [make_node_id(pid, "c") for pid in range(1, 51)]

    def push():
        for node_id in ids:
            client.push_node_info(make_info(node_id))

    pusher = threading.Thread(target=push)
    pusher.start()
    seen = []
    while len(seen) < len(ids):
        seen = client.list_nodes()
        assert list(seen) == sorted(seen)
    pusher.join()
    assert client.list_nodes() == tuple(ids)


def test_scenario_change_node_on_empty_registry(client):
    assert client.change_node(A) == Fail("no nodes known")


def test_handshake_records_peer(service, client):
    peer = object()
    client.handshake(peer)
    assert service.peer is peer


def test_ask_after_stop_raises_transport_error():
    service = RegistryService()
    service.start()
    service.stop()
    with pytest.raises(TransportError):
        service.ask(ListNodes())


def test_shutdown_notice_stops_service(service, client):
    client.shutdown()
    if service._thread is not None:
        service._thread.join(timeout=5.0)
    assert not service.is_running
    with pytest.raises(TransportError):
        client.list_nodes()


def test_unknown_request_yields_error_reply(service):
    class Unsupported(Request):
        replies = (Ok,)

    reply = service.ask(Unsupported(), timeout=5.0)
    assert isinstance(reply, ErrorReply)
    assert "Unsupported" in reply.reason


def test_unexpected_reply_raises_protocol_error():
    transport = MagicMock()
    transport.request.return_value = InitDone()
    client = QueryClient(transport)
    with pytest.raises(ProtocolError) as info:
        client.list_nodes()
    assert isinstance(info.value.reply, InitDone)
    assert isinstance(info.value.request, ListNodes)


def test_error_reply_becomes_protocol_error():
    transport = MagicMock()
    transport.request.return_value = ErrorReply("boom")
    with pytest.raises(ProtocolError, match="boom"):
        QueryClient(transport).get_node_info(A)


def test_handshake_failure_is_reported():
    service = RegistryService()
    client = QueryClient(LocalTransport(service))
    with pytest.raises(HandshakeError):
        client.handshake(object())


def test_has_node(client):
    client.push_node_info(make_info(A))
    assert client.has_node(A) is True
    assert client.has_node(B) is False


def test_invalid_node_id_is_not_listed(client):
    client.push_node_info(make_info(INVALID_NODE_ID, "ghost"))
    assert client.list_nodes() == ()


def test_notices_after_stop_are_dropped():
    service = RegistryService()
    service.start()
    service.stop()
    service.tell(AddNode(make_info(A)))
    assert service._inbox.empty()
