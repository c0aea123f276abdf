"""Startup configuration for fleet-shell."""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .errors import ConfigError

LOG_ENV_VAR = "FLEETSH_LOG"
DEFAULT_HISTORY_PATH = Path.home() / ".fleetsh-history"


def default_log_level() -> str:
    return os.environ.get(LOG_ENV_VAR, "WARNING")


@dataclass
class ShellConfig:
    history_path: Optional[Path] = DEFAULT_HISTORY_PATH
    history_limit: int = 1000
    log_level: str = field(default_factory=default_log_level)
    global_prompt: str = "$ "
    node_prompt: str = "$ "
    bar_width: int = 50
    bar_fill: str = "#"
    load_test_nodes: bool = False

    def validate(self) -> "ShellConfig":
        if self.history_limit < 1:
            raise ConfigError(f"history limit must be positive (got {self.history_limit})")
        if self.bar_width < 1:
            raise ConfigError(f"bar width must be positive (got {self.bar_width})")
        if len(self.bar_fill) != 1:
            raise ConfigError(f"bar fill must be a single character (got {self.bar_fill!r})")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigError(f"unknown log level: {self.log_level}")
        return self

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "ShellConfig":
        history_path = None if args.no_history else args.history
        return cls(
            history_path=history_path,
            history_limit=args.history_limit,
            log_level=args.log_level,
            global_prompt=args.prompt,
            node_prompt=args.node_prompt,
            bar_width=args.bar_width,
            bar_fill=args.bar_fill,
            load_test_nodes=args.test_nodes,
        )
