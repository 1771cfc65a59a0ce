from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class Event(BaseModel):
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    event_type: str


class WorkspaceProvisioned(Event):
    event_type: str = "WorkspaceProvisioned"
    path: str


class GitCommandIssued(Event):
    event_type: str = "GitCommandIssued"
    command: str


class WorktreeStatus(Event):
    event_type: str = "WorktreeStatus"
    porcelain: str = ""


class CommitRecorded(Event):
    event_type: str = "CommitRecorded"
    sha: str
    author_name: str = ""
    author_email: str = ""
    message: str = ""
    committed_at: str = ""


class DeployCompleted(Event):
    event_type: str = "DeployCompleted"
    remote_url: str
    sha: str = ""
    duration_ms: int = 0


class DeployFailed(Event):
    event_type: str = "DeployFailed"
    remote_url: str
    error: str = ""


EVENT_TYPE_MAP: dict[str, type[Event]] = {
    "WorkspaceProvisioned": WorkspaceProvisioned,
    "GitCommandIssued": GitCommandIssued,
    "WorktreeStatus": WorktreeStatus,
    "CommitRecorded": CommitRecorded,
    "DeployCompleted": DeployCompleted,
    "DeployFailed": DeployFailed,
}
