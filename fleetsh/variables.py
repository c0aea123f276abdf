"""Shell variables and the line preprocessor that expands them."""

from __future__ import annotations

from string import Template
from typing import Dict, Optional


class VariablesEngine:
    """Expands ``$NAME`` and ``${NAME}`` references in input lines.

    References to unbound variables are left in the line unchanged.
    """

    def __init__(self) -> None:
        self._values: Dict[str, str] = {}

    def set(self, name: str, value: str) -> None:
        self._values[name] = str(value)

    def unset(self, name: str) -> None:
        self._values.pop(name, None)

    def get(self, name: str) -> Optional[str]:
        return self._values.get(name)

    def bound(self) -> Dict[str, str]:
        return dict(self._values)

    def preprocess(self, line: str) -> str:
        if "$" not in line:
            return line
        return Template(line).safe_substitute(self._values)

    __call__ = preprocess
