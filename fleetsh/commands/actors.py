"""Node-mode commands for routes and actors."""

from __future__ import annotations

import json
import logging
import re

from fleetreg.messages import Invalid

from .base import Command
from ..context import ShellContext
from ..errors import ArgumentError, UnknownActor
from ..output import render_actor_list, render_routes

LOGGER = logging.getLogger("fleetsh.commands")

_ACTOR_ID_RE = re.compile(r"\d+")


class DirectRoutesCommand(Command):
    def __init__(self) -> None:
        super().__init__("direct-routes", "Show the direct routes of the node")

    def run(self, ctx: ShellContext, args: str) -> None:
        self.expect_no_args(args)
        node_id = ctx.require_node()
        neighbours = ctx.client.get_routes(node_id)
        render_routes(ctx.display_name(node_id), [ctx.display_name(other) for other in neighbours])


class ListActorsCommand(Command):
    def __init__(self) -> None:
        super().__init__("list-actors", "List actor ids known on the node")

    def run(self, ctx: ShellContext, args: str) -> None:
        self.expect_no_args(args)
        text = ctx.client.list_actors_on_node(ctx.require_node())
        render_actor_list(text, empty_message="list-actors: no actors known on this node")


class SendCommand(Command):
    """``send <actor-id> <json>`` delivers a message with the shell mailbox as sender."""

    def __init__(self) -> None:
        super().__init__("send", "Send a JSON message to an actor: send <actor-id> <json>")

    def run(self, ctx: ShellContext, args: str) -> None:
        node_id = ctx.require_node()
        match = _ACTOR_ID_RE.match(args)
        if match is None:
            raise self.fail("missing actor id as first argument", ArgumentError)
        rest = args[match.end():]
        if not rest.strip():
            raise self.fail("missing message after actor id", ArgumentError)
        if rest[0] != " ":
            raise self.fail("invalid format: expected a space after actor id", ArgumentError)
        try:
            message = json.loads(rest)
        except ValueError:
            raise self.fail("cannot deserialize a message from given input", ArgumentError) from None
        actor_id = int(match.group())
        reply = ctx.client.get_actor_handle(node_id, actor_id)
        if isinstance(reply, Invalid):
            raise self.fail(f"no actor known with id {actor_id}", UnknownActor)
        LOGGER.debug("sending %r to actor %d on %s", message, actor_id, node_id)
        reply.value.tell(message, sender=ctx.mailbox)
