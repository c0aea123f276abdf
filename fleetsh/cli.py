"""fleet-shell CLI entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from fleetreg.client import QueryClient
from fleetreg.errors import HandshakeError
from fleetreg.sample import load_sample_fleet
from fleetreg.service import RegistryService
from fleetreg.transport import LocalTransport

from .commands import build_modes
from .config import DEFAULT_HISTORY_PATH, ShellConfig, default_log_level
from .context import ShellContext
from .errors import ConfigError
from .history import HistoryStore
from .repl import CommandResult, ShellREPL

LOG = logging.getLogger("fleetsh.cli")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_HANDSHAKE_FAILED = 3
EXIT_BAD_CONFIG = 42


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise ConfigError(message)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="fleetsh", description="Interactive shell for a fleet node registry")
    parser.add_argument("--log-level", default=default_log_level(), help="Logging level (default from FLEETSH_LOG or WARNING)")
    parser.add_argument("-c", "--command", help="Execute a single command non-interactively (quote the command string)")
    parser.add_argument("--script", type=Path, help="Execute commands from a file, stopping at the first failure")
    parser.add_argument("--history", type=Path, default=DEFAULT_HISTORY_PATH, help="Path to the command history file")
    parser.add_argument("--no-history", action="store_true", help="Do not read or write a history file")
    parser.add_argument("--history-limit", type=int, default=1000, help="Maximum number of history entries kept")
    parser.add_argument("--prompt", default="$ ", help="Prompt shown in global mode")
    parser.add_argument("--node-prompt", default="$ ", help="Prompt shown in node mode (may reference $NODE)")
    parser.add_argument("--bar-width", type=int, default=50, help="Width of progress bars")
    parser.add_argument("--bar-fill", default="#", help="Fill character of progress bars")
    parser.add_argument("--test-nodes", action="store_true", help="Load the sample fleet before the first command")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    try:
        args = parser.parse_args(argv)
        config = ShellConfig.from_args(args).validate()
    except ConfigError as exc:
        parser.print_usage(sys.stderr)
        print(f"fleetsh: invalid configuration: {exc}", file=sys.stderr)
        return EXIT_BAD_CONFIG
    _configure_logging(config.log_level)

    service = RegistryService()
    service.start()
    try:
        client = QueryClient(LocalTransport(service))
        ctx = ShellContext(
            client=client,
            modes=build_modes(config.global_prompt, config.node_prompt),
            config=config,
        )
        try:
            client.handshake(ctx.mailbox)
        except HandshakeError as exc:
            LOG.error("%s", exc)
            print(f"fleetsh: {exc}", file=sys.stderr)
            return EXIT_HANDSHAKE_FAILED
        if config.load_test_nodes:
            load_sample_fleet(client)
        history = HistoryStore(config.history_path, limit=config.history_limit)
        repl = ShellREPL(ctx, history_store=history)
        if args.command:
            return _run_single_command(repl, args.command)
        if args.script:
            return _run_script(repl, args.script)
        try:
            return repl.run()
        except KeyboardInterrupt:
            print()
            return EXIT_OK
    finally:
        service.stop()


def _run_single_command(repl: ShellREPL, command_line: str) -> int:
    result = repl.handle_line(command_line)
    return EXIT_FAILURE if result is CommandResult.NO_COMMAND else EXIT_OK


def _run_script(repl: ShellREPL, path: Path) -> int:
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        print(f"fleetsh: cannot read script {path}: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    buffer: List[str] = []
    for line in lines:
        if line.lstrip().startswith("#"):
            continue
        if repl.handle_multiline(buffer, line):
            continue
        payload = " ".join(buffer) if buffer else line
        buffer.clear()
        if repl.handle_line(payload) is CommandResult.NO_COMMAND:
            LOG.info("script %s stopped at: %s", path, payload)
            return EXIT_FAILURE
        if repl.ctx.done:
            break
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
