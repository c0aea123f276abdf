"""Persistent command history for fleet-shell."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from prompt_toolkit.history import History

LOGGER = logging.getLogger("fleetsh.history")


class HistoryStore:
    """File-backed list of input lines, trimmed to ``limit`` entries.

    The dispatch loop decides what is recorded; the store keeps every line
    it is given, including repeats, so mistakes can be recalled and fixed.
    """

    def __init__(self, path: Optional[Union[str, Path]], *, limit: int = 1000) -> None:
        self.limit = max(1, int(limit or 1))
        self.path = Path(path).expanduser() if path else None
        self.entries: List[str] = []
        if self.path:
            self._load()

    def _load(self) -> None:
        try:
            data = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return
        except OSError as exc:
            LOGGER.warning("cannot read history %s: %s", self.path, exc)
            return
        lines = [line for line in data.splitlines() if line.strip()]
        self.entries = lines[-self.limit :]

    def append(self, line: str) -> None:
        text = line.rstrip("\n")
        if not text.strip():
            return
        self.entries.append(text)
        if len(self.entries) > self.limit:
            self.entries = self.entries[-self.limit :]
        self._persist()

    def extend(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.append(line)

    def _persist(self) -> None:
        if not self.path:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("\n".join(self.entries) + "\n", encoding="utf-8")
        except OSError as exc:
            # A history file that cannot be written must not break the shell.
            LOGGER.debug("cannot write history %s: %s", self.path, exc)

    def snapshot(self) -> List[str]:
        return list(self.entries)


class StoreBackedHistory(History):
    """prompt_toolkit history that reads from a :class:`HistoryStore`.

    Recording is left to the dispatch loop, so ``store_string`` does nothing.
    """

    def __init__(self, store: HistoryStore) -> None:
        super().__init__()
        self.store = store

    def load_history_strings(self) -> Iterable[str]:
        return list(reversed(self.store.snapshot()))

    def store_string(self, string: str) -> None:
        pass
