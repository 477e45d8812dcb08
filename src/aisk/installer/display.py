"""Rich rendering of command results.

Every batch command prints one row per target followed by a summary line,
so partial failures are always visible.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from aisk.audit.models import AuditEvent
from aisk.installer.results import BatchResult, OutcomeStatus
from aisk.skills.updates import UpdateInfo

_STATUS_STYLES: dict[OutcomeStatus, str] = {
    OutcomeStatus.DONE: "green",
    OutcomeStatus.DRY_RUN: "cyan",
    OutcomeStatus.SKIPPED: "yellow",
    OutcomeStatus.ERROR: "bold red",
}

_VERBS = {
    "install": "installed",
    "update": "updated",
    "uninstall": "removed",
}


def summarize(result: BatchResult) -> str:
    """One-line summary of a batch result."""
    if result.dry_run:
        head = f"Dry run: {result.succeeded} target(s) would change"
    else:
        verb = _VERBS.get(result.command, "done")
        head = f"{result.succeeded} target(s) {verb}"

    extras = []
    if result.failed:
        extras.append(f"{result.failed} failed")
    if result.skipped:
        extras.append(f"{result.skipped} skipped")
    return head + (f" ({', '.join(extras)})" if extras else "")


def render_batch_result(result: BatchResult, console: Console) -> None:
    """Print per-target outcomes and the summary line."""
    if not result.outcomes:
        console.print(f"[dim]Nothing to {result.command}.[/dim]")
        return

    table = Table(title=f"aisk {result.command}", show_lines=False)
    table.add_column("Skill", style="bold")
    table.add_column("Client")
    table.add_column("Scope")
    table.add_column("Status")
    table.add_column("Target", overflow="fold")
    table.add_column("Detail", overflow="fold")

    for outcome in result.outcomes:
        table.add_row(
            outcome.skill_name,
            outcome.client_id,
            outcome.scope,
            Text(outcome.status.value, style=_STATUS_STYLES[outcome.status]),
            outcome.target_path or "-",
            outcome.detail,
        )

    console.print(table)
    if not result.locked:
        console.print("[yellow]Warning: ran without the manifest lock.[/yellow]")
    console.print(summarize(result))


def render_updates(updates: list[UpdateInfo], console: Console) -> None:
    """Print installed versus available versions."""
    if not updates:
        console.print("[dim]No skills installed.[/dim]")
        return

    table = Table(title="Installed skills")
    table.add_column("Skill", style="bold")
    table.add_column("Installed")
    table.add_column("Available")
    table.add_column("Clients")
    table.add_column("Status")

    for info in updates:
        if info.missing:
            status = Text("missing", style="red")
        elif info.has_update:
            status = Text("update available", style="yellow")
        else:
            status = Text("up to date", style="green")
        table.add_row(
            info.skill_name,
            info.installed_version,
            info.available_version or "-",
            ", ".join(info.clients),
            status,
        )
    console.print(table)


def render_audit_events(events: list[AuditEvent], console: Console) -> None:
    """Print audit events as a table."""
    if not events:
        console.print("[dim]No audit events found.[/dim]")
        return

    table = Table(title="Audit events")
    table.add_column("Time", no_wrap=True)
    table.add_column("Command")
    table.add_column("Action")
    table.add_column("Status")
    table.add_column("Skill")
    table.add_column("Client")

    for event in events:
        style = "red" if event.status == "error" else ""
        table.add_row(
            event.timestamp,
            event.command,
            event.action,
            Text(event.status, style=style),
            event.skill or "-",
            event.client_id or "-",
        )
    console.print(table)
