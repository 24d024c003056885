# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Rich output formatters for the CLI."""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from podsnap.errors import PodSnapError
    from podsnap.replies import ReplyOutcome
    from podsnap.types import ContainerSnapshot, PodSnapshot

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from podsnap._helpers import format_bytes, format_duration
from podsnap.replies import ErrorOccurred
from podsnap.wire import to_wire

_console = Console()
_err_console = Console(stderr=True)

_SHORT_ID = 12


def _short(container_id: str, *, no_trunc: bool) -> str:
    return container_id if no_trunc else container_id[:_SHORT_ID]


def _status_style(running: bool) -> str:  # noqa: FBT001
    return "green" if running else "yellow"


def format_container_list(
    items: list[ContainerSnapshot], *, json_output: bool = False, no_trunc: bool = False
) -> None:
    """Print container snapshots as a rich table or wire-form JSON."""
    if json_output:
        click_echo_json([to_wire(s) for s in items])
        return

    if not items:
        _console.print("[dim]No containers found.[/dim]")
        return

    table = Table(title="Containers")
    table.add_column("Container ID", style="dim")
    table.add_column("Image")
    table.add_column("Command")
    table.add_column("Running For")
    table.add_column("Status")
    table.add_column("Ports")
    table.add_column("Names", style="cyan")
    table.add_column("Size")

    for snap in items:
        style = _status_style(snap.running)
        ports = ", ".join(
            f"{p.host_ip or '0.0.0.0'}:{p.host_port}->{p.container_port}/{p.protocol}"
            for p in snap.ports
        )
        size = (
            f"{format_bytes(snap.rw_size)} (virtual {format_bytes(snap.rootfs_size)})"
            if snap.size_reported
            else "-"
        )
        table.add_row(
            _short(snap.id, no_trunc=no_trunc),
            snap.image,
            " ".join(snap.command),
            format_duration(snap.running_for),
            f"[{style}]{snap.status}[/{style}]",
            ports,
            snap.names,
            size,
        )

    _console.print(table)


def format_pod_list(items: list[PodSnapshot], *, json_output: bool = False) -> None:
    """Print pod snapshots as a rich table or wire-form JSON."""
    if json_output:
        click_echo_json([to_wire(p) for p in items])
        return

    if not items:
        _console.print("[dim]No pods found.[/dim]")
        return

    table = Table(title="Pods")
    table.add_column("Pod ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Status")
    table.add_column("Cgroup", style="dim")
    table.add_column("# of Containers")
    table.add_column("Containers")

    for pod in items:
        style = _status_style(pod.status == "Running")
        members = ", ".join(f"{c.name} ({c.status})" for c in pod.containers_info)
        table.add_row(
            pod.id[:_SHORT_ID],
            pod.name,
            f"[{style}]{pod.status}[/{style}]",
            pod.cgroup,
            pod.number_of_containers,
            members,
        )

    _console.print(table)


def format_reply(outcome: ReplyOutcome, *, json_output: bool = False) -> None:
    """Print an error reply as a rich panel or its wire form."""
    if json_output:
        click_echo_json(outcome.to_wire())
        return

    if isinstance(outcome, ErrorOccurred):
        panel = Panel(outcome.reason, title="[red]ErrorOccurred[/red]", expand=False)
        _err_console.print(panel)
        return

    lines = [f"[bold]Pod:[/bold] {outcome.pod_id}"]
    if not outcome.errors:
        lines.append("[dim]No container errors.[/dim]")
    lines.extend(f"[yellow]{e.container_id}[/yellow]: {e.reason}" for e in outcome.errors)
    panel = Panel("\n".join(lines), title="[yellow]PodContainerError[/yellow]", expand=False)
    _err_console.print(panel)


def format_error(err: PodSnapError) -> None:
    """Print an error as a rich panel with suggestions."""
    title, suggestion = _error_info(err)
    lines = [str(err)]
    if suggestion:
        lines.append(f"\n[dim]{suggestion}[/dim]")

    panel = Panel(
        "\n".join(lines),
        title=f"[red]{title}[/red]",
        expand=False,
    )
    _err_console.print(panel)


def _error_info(err: PodSnapError) -> tuple[str, str]:
    """Map an error to a title and suggestion string."""
    from podsnap.errors import ContainerQueryError, DumpError, PodNotFound  # noqa: PLC0415

    if isinstance(err, DumpError):
        return "Invalid Dump", "Check the file is a YAML mapping with containers/pods."
    if isinstance(err, PodNotFound):
        return "Pod Not Found", "Run 'podsnap pods <dump>' to see available pods."
    if isinstance(err, ContainerQueryError):
        return "Container Query Failed", "Retry with --partial to list the readable members."
    return "Error", ""


def click_echo_json(data: object) -> None:
    """Serialize data to JSON and echo to stdout."""
    sys.stdout.write(json.dumps(data, indent=2, default=str) + "\n")


def print_info(msg: str) -> None:
    """Print a dimmed informational message to stderr."""
    _err_console.print(f"[dim]{msg}[/dim]")
