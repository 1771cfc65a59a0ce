from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from gitploy.config.settings import GitployConfig, validate_token
from gitploy.errors import GitployError
from gitploy.workspace.provisioner import scoped_workspace
from gitploy.workspace.repo_client import CommitSnapshot, EventEmitter, RepoClient

logger = logging.getLogger(__name__)

MESSAGE_PREFIX = "Wow look at this!"


@dataclass
class DeployResult:
    directory: Path
    head: CommitSnapshot
    commit: CommitSnapshot


def default_message(now: datetime | None = None) -> str:
    now = now or datetime.now()
    return f"{MESSAGE_PREFIX} {now.strftime('%Y-%m-%d %H:%M:%S')}"


def run_deployment(
    config: GitployConfig,
    message: str,
    emitter: EventEmitter,
) -> DeployResult:
    """Clone, commit ``message`` and push, in a workspace scoped to this call.

    The token is checked before anything touches the filesystem or network.
    The first failure aborts the run; the workspace is removed either way
    unless ``config.keep_workspace`` is set.
    """
    token = validate_token(config.token)
    start = time.monotonic()

    try:
        with scoped_workspace(keep=config.keep_workspace) as directory:
            emitter.emit("WorkspaceProvisioned", path=str(directory))
            client = RepoClient(
                config.remote_url,
                directory,
                token,
                username=config.username,
                author=config.author,
                filename=config.filename,
                timeout=config.timeout,
                emitter=emitter,
            )
            head = client.clone()
            snapshot = client.commit(message)
            client.push()
    except GitployError as e:
        emitter.emit("DeployFailed", remote_url=config.remote_url, error=str(e))
        raise

    duration_ms = int((time.monotonic() - start) * 1000)
    emitter.emit(
        "DeployCompleted",
        remote_url=config.remote_url,
        sha=snapshot.sha,
        duration_ms=duration_ms,
    )
    return DeployResult(directory=directory, head=head, commit=snapshot)
