"""prompt_toolkit completer for fleet-shell."""

from __future__ import annotations

import logging
from typing import Iterable, List

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document

from fleetreg.errors import RegistryError

from .context import ShellContext, display_names

LOGGER = logging.getLogger("fleetsh.completion")

NODE_ARGUMENT_COMMANDS = {"change-node"}


class ShellCompleter(Completer):
    """Completes command names of the current mode and node names for change-node."""

    def __init__(self, ctx: ShellContext) -> None:
        self.ctx = ctx

    def get_completions(self, document: Document, complete_event: CompleteEvent) -> Iterable[Completion]:
        text = document.text_before_cursor.lstrip()
        if " " not in text:
            yield from self._complete(text, self.command_names())
            return
        name, _, partial = text.partition(" ")
        if name in NODE_ARGUMENT_COMMANDS and " " not in partial.lstrip():
            yield from self._complete(partial.lstrip(), self.node_names())

    def command_names(self) -> List[str]:
        return [command.name for command in self.ctx.modes.current.list_commands()]

    def node_names(self) -> List[str]:
        try:
            fleet = self.ctx.client.snapshot()
        except RegistryError as exc:
            LOGGER.debug("node completion unavailable: %s", exc)
            return []
        return sorted(display_names(fleet).values())

    @staticmethod
    def _complete(prefix: str, candidates: Iterable[str]) -> Iterable[Completion]:
        for candidate in candidates:
            if candidate.startswith(prefix):
                yield Completion(candidate, start_position=-len(prefix))
