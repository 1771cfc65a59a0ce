from __future__ import annotations

from typing import Protocol

import typer

from gitploy.events.types import (
    CommitRecorded,
    DeployCompleted,
    DeployFailed,
    Event,
    GitCommandIssued,
    WorkspaceProvisioned,
    WorktreeStatus,
)


class EventObserver(Protocol):
    def on_event(self, event: Event) -> None: ...


class StdoutObserver:
    """Echoes progress the way the equivalent git commands would be typed."""

    def on_event(self, event: Event) -> None:
        if isinstance(event, WorkspaceProvisioned):
            typer.echo(f"[Workspace] {event.path}")
        elif isinstance(event, GitCommandIssued):
            typer.echo(event.command)
        elif isinstance(event, WorktreeStatus):
            typer.echo(event.porcelain or "(clean)")
        elif isinstance(event, CommitRecorded):
            typer.echo(f"commit {event.sha}")
            typer.echo(f"Author: {event.author_name} <{event.author_email}>")
            typer.echo(f"Date:   {event.committed_at}")
            typer.echo("")
            for line in event.message.splitlines() or [""]:
                typer.echo(f"    {line}")
            typer.echo("")
        elif isinstance(event, DeployCompleted):
            typer.echo(f"[Deploy] Pushed {event.sha[:8]} to {event.remote_url} ({event.duration_ms}ms)")
        elif isinstance(event, DeployFailed):
            typer.echo(f"[Deploy] FAILED: {event.remote_url} - {event.error}")
