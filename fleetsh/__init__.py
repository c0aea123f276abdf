"""Interactive operator shell for a fleet node registry.

Modules:

- ``cli``: argument parsing and process entry point
- ``repl``: dispatch of input lines and the read loop
- ``modes``: mode stack and per-mode command tables
- ``commands``: the command handlers
- ``context``: shared shell state and node name resolution
"""

from __future__ import annotations

from .cli import main

__all__ = ["main", "__version__"]
__version__ = "0.1.0"
