"""Exceptions raised by the fleet registry toolkit."""

from __future__ import annotations

from typing import Any, Optional


class RegistryError(RuntimeError):
    """Base class for registry toolkit failures."""


class TransportError(RegistryError):
    """Raised when a request cannot be delivered or answered."""


class HandshakeError(TransportError):
    """Raised when the startup handshake with the registry fails."""


class ProtocolError(RegistryError):
    """Raised when the registry answers with a reply the request does not accept."""

    def __init__(self, message: str, *, request: Any = None, reply: Optional[Any] = None) -> None:
        super().__init__(message)
        self.request = request
        self.reply = reply
