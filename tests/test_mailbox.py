"""Tests for the blocking and non-blocking mailbox reads."""

from __future__ import annotations

import threading

import pytest

from fleetreg.errors import TransportError
from fleetreg.mailbox import Mailbox


def test_try_peek_on_empty_mailbox_returns_none():
    assert Mailbox().try_peek_message() is None


def test_messages_are_read_in_arrival_order():
    box = Mailbox()
    box.put("a")
    box.put("b")
    assert box.try_peek_message() == "a"
    assert box.wait_for_message() == "b"
    assert len(box) == 0


def test_wait_for_message_blocks_until_put():
    box = Mailbox()
    timer = threading.Timer(0.05, box.put, args=("late",))
    timer.start()
    try:
        assert box.wait_for_message(timeout=5.0) == "late"
    finally:
        timer.join()


def test_wait_for_message_timeout_raises():
    with pytest.raises(TransportError):
        Mailbox("empty").wait_for_message(timeout=0.01)
