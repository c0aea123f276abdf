"""Output helpers for fleet-shell."""

from __future__ import annotations

import json
from typing import Any, Iterable, Mapping, Optional, Sequence

from tabulate import tabulate

from fleetreg.models import NodeData, NodeInfo, RamUsage, WorkLoad

PROGRESS_BAR_ERROR = "[ERROR]: invalid percent in progress bar"
TABLE_FORMAT = "github"
NO_NODES_MESSAGE = " no nodes available"


def progress_bar(percent: float, fill: str = "#", width: int = 50) -> str:
    """Render ``[####   ]`` with ``round(percent * width / 100)`` filled cells."""
    if not 0 <= percent <= 100:
        return PROGRESS_BAR_ERROR
    filled = int(round(percent * width / 100.0))
    return "[" + fill * filled + " " * (width - filled) + "]"


def emit_error(message: str) -> None:
    print(f"error: {message}")


def format_message(message: Any) -> str:
    if isinstance(message, str):
        return message
    try:
        return json.dumps(message, sort_keys=True)
    except (TypeError, ValueError):
        return repr(message)


def _format_cpu(info: NodeInfo) -> str:
    return ", ".join(f"{cpu.core_count}x{cpu.mhz_per_core}MHz" for cpu in info.cpu) or "-"


def _format_ram(data: NodeData) -> str:
    if data.ram_usage is None:
        return "-"
    return f"{data.ram_usage.bytes_in_use}/{data.ram_usage.bytes_available}"


def render_node_table(rows: Sequence[NodeData], names: Mapping[Any, str]) -> None:
    """Print one line per node; *names* maps node ids to display names."""
    if not rows:
        print(NO_NODES_MESSAGE)
        return
    table = [
        [names.get(data.node_id, data.node_info.hostname), str(data.node_id), data.node_info.os, _format_cpu(data.node_info), _format_ram(data)]
        for data in rows
    ]
    print(tabulate(table, headers=["Node", "ID", "OS", "CPU", "RAM (used/avail)"], tablefmt=TABLE_FORMAT))


def render_node_info(info: NodeInfo) -> None:
    print(f"Node-ID:  {info.node_id}")
    print(f"Hostname: {info.hostname}")
    print(f"OS:       {info.os}")
    if info.cpu:
        table = [[index, cpu.core_count, cpu.mhz_per_core] for index, cpu in enumerate(info.cpu)]
        print(tabulate(table, headers=["CPU", "Cores", "MHz/core"], tablefmt=TABLE_FORMAT))


def render_work_load(work_load: WorkLoad, *, fill: str = "#", width: int = 50) -> None:
    print(f"Processes: {work_load.num_processes}")
    print(f"Actors:    {work_load.num_actors}")
    print(f"CPU load:  {progress_bar(work_load.cpu_load_percent, fill, width)} {work_load.cpu_load_percent:.1f}%")


def render_ram_usage(ram_usage: RamUsage, *, fill: str = "#", width: int = 50) -> None:
    percent = ram_usage.percent_used()
    print(f"RAM:       {ram_usage.bytes_in_use}/{ram_usage.bytes_available} bytes")
    if percent is None:
        print("RAM usage: unknown (no memory available)")
        return
    print(f"RAM usage: {progress_bar(percent, fill, width)} {percent:.1f}%")


def render_interfaces(info: NodeInfo) -> None:
    if not info.interfaces:
        print(" no interfaces known")
        return
    table = []
    for name in sorted(info.interfaces):
        for protocol, addresses in info.interfaces[name].items():
            table.append([name, protocol.value, ", ".join(addresses)])
    print(tabulate(table, headers=["Interface", "Protocol", "Addresses"], tablefmt=TABLE_FORMAT))


def render_routes(name: str, neighbours: Iterable[str]) -> None:
    names = sorted(neighbours)
    if not names:
        print(f"{name}: (no direct routes)")
        return
    print(f"{name}: {', '.join(names)}")


def render_actor_list(text: str, *, empty_message: Optional[str] = None) -> None:
    if not text:
        if empty_message:
            print(empty_message)
        return
    print(text, end="" if text.endswith("\n") else "\n")
