"""Errors surfaced by fleet-shell commands."""

from __future__ import annotations


class CommandError(RuntimeError):
    """A command failed; the message is shown to the user as-is."""


class ArgumentError(CommandError):
    """Wrong arity or an unparseable argument."""


class UnknownCommand(CommandError):
    """No command with that name in the current mode."""


class UnknownNode(CommandError):
    """The node id is not known to the registry."""


class EmptyRegistry(CommandError):
    """The registry does not know any node yet."""


class NoTelemetry(CommandError):
    """The node is known but the requested field was not reported yet."""


class AmbiguousHost(CommandError):
    """More than one node runs on the given host."""


class UnresolvedHost(CommandError):
    """No node matches the given host specification."""


class UnknownActor(CommandError):
    """No actor with that id is known on the current node."""


class NotImplementedCommand(CommandError):
    """The command exists but has no implementation yet."""


class ModeError(CommandError):
    """Unknown mode, or a command used outside the mode it needs."""


class ConfigError(ValueError):
    """Invalid startup configuration."""
