"""Thread-safe mailbox used as the shell's message inbox."""

from __future__ import annotations

import collections
import threading
from typing import Any, Deque, List, Optional

from .errors import TransportError


class Mailbox:
    """FIFO inbox with a blocking wait and a zero-duration poll.

    ``wait_for_message`` blocks until a message is queued (or the optional
    timeout expires); ``try_peek_message`` never blocks and returns ``None``
    when nothing is queued. Both remove the oldest message.
    """

    def __init__(self, name: str = "mailbox") -> None:
        self.name = name
        self._queue: Deque[Any] = collections.deque()
        self._cv = threading.Condition(threading.Lock())

    def put(self, message: Any) -> None:
        with self._cv:
            self._queue.append(message)
            self._cv.notify()

    def wait_for_message(self, timeout: Optional[float] = None) -> Any:
        with self._cv:
            if not self._cv.wait_for(lambda: bool(self._queue), timeout=timeout):
                raise TransportError(f"{self.name}: no message within {timeout}s")
            return self._queue.popleft()

    def try_peek_message(self) -> Optional[Any]:
        with self._cv:
            if not self._queue:
                return None
            return self._queue.popleft()

    def snapshot(self) -> List[Any]:
        with self._cv:
            return list(self._queue)

    def __len__(self) -> int:
        with self._cv:
            return len(self._queue)
