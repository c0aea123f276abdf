"""Command line splitting for fleet-shell."""

from __future__ import annotations

from typing import Tuple


def split_command(line: str) -> Tuple[str, str]:
    """Split off the command name and return ``(name, raw_arguments)``.

    Only the first whitespace-delimited token is separated; handlers parse
    the remainder themselves. A blank line yields ``("", "")``.
    """
    parts = line.strip().split(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1]
