"""Transport interface between the shell and the registry service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .messages import Message, Notice, Reply, Request
from .service import RegistryService


class Transport:
    """Delivers requests (blocking) and notices (fire-and-forget)."""

    def request(self, message: Request, *, timeout: Optional[float] = None) -> Reply:
        raise NotImplementedError("Transport must implement request()")

    def tell(self, message: Notice) -> None:
        raise NotImplementedError("Transport must implement tell()")


@dataclass
class LocalTransport(Transport):
    """Transport bound to a :class:`RegistryService` in the same process."""

    service: RegistryService
    default_timeout: Optional[float] = None

    def request(self, message: Request, *, timeout: Optional[float] = None) -> Reply:
        effective = timeout if timeout is not None else self.default_timeout
        return self.service.ask(message, timeout=effective)

    def tell(self, message: Message) -> None:
        self.service.tell(message)
