from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

from gitploy.config.settings import AuthorConfig
from gitploy.errors import CloneError, CommitError, PushError, sanitize_error
from gitploy.workspace import git_ops

logger = logging.getLogger(__name__)


class EventEmitter:
    """Protocol for event emission (satisfied by EventDispatcher)."""

    def emit(self, event_type: str, **data: Any) -> None: ...


@dataclass(frozen=True)
class CommitSnapshot:
    sha: str
    author_name: str
    author_email: str
    message: str
    timestamp: datetime

    def __str__(self) -> str:
        body = "\n".join(f"    {line}" for line in self.message.splitlines())
        return (
            f"commit {self.sha}\n"
            f"Author: {self.author_name} <{self.author_email}>\n"
            f"Date:   {self.timestamp.isoformat()}\n\n"
            f"{body}\n"
        )


def _parse_ident(line: str) -> tuple[str, str, datetime]:
    # "<name> <<email>> <epoch seconds> <+hhmm>"
    ident, seconds, offset = line.rsplit(" ", 2)
    name, _, email = ident.partition(" <")
    sign = -1 if offset.startswith("-") else 1
    tz = timezone(sign * timedelta(hours=int(offset[1:3]), minutes=int(offset[3:5])))
    return name, email.rstrip(">"), datetime.fromtimestamp(int(seconds), tz=tz)


def read_snapshot(ref: str, *, cwd: Path) -> CommitSnapshot:
    sha = git_ops.rev_parse(ref, cwd=cwd)
    header, _, message = git_ops.cat_commit(sha, cwd=cwd).partition("\n\n")
    author = next((line for line in header.splitlines() if line.startswith("author ")), "")
    name, email, when = _parse_ident(author[len("author "):])
    return CommitSnapshot(
        sha=sha,
        author_name=name,
        author_email=email,
        message=message,
        timestamp=when,
    )


class RepoClient:
    """Clone, commit to, and push a single remote repository with token auth.

    The token travels as the password of an HTTP Basic ``Authorization`` header
    handed to each git invocation through its environment, never on the command
    line, in the remote URL or in ``.git/config``. The username only has to be
    non-empty.
    """

    def __init__(
        self,
        remote_url: str,
        directory: Path,
        credential: str,
        *,
        username: str = "gitploy",
        author: AuthorConfig | None = None,
        filename: str = "example-git-file",
        timeout: float | None = None,
        emitter: EventEmitter | None = None,
    ) -> None:
        self.remote_url = remote_url
        self.directory = Path(directory)
        self.username = username
        self.author = author or AuthorConfig()
        self.filename = filename
        self.timeout = timeout
        self._credential = credential
        self._emitter = emitter or EventEmitter()

    def _auth(self) -> dict[str, str]:
        return git_ops.auth_config(self.username, self._credential)

    def _clean(self, error: Exception) -> str:
        return sanitize_error(str(error), self._credential)

    def _record(self, snapshot: CommitSnapshot) -> None:
        self._emitter.emit(
            "CommitRecorded",
            sha=snapshot.sha,
            author_name=snapshot.author_name,
            author_email=snapshot.author_email,
            message=snapshot.message,
            committed_at=snapshot.timestamp.isoformat(),
        )

    def clone(self) -> CommitSnapshot:
        prefix = f"Error cloning the repository {self.remote_url}"
        if not self.directory.is_dir():
            raise CloneError(f"{prefix}: directory does not exist: {self.directory}")
        if any(self.directory.iterdir()):
            raise CloneError(f"{prefix}: directory is not empty: {self.directory}")

        self._emitter.emit("GitCommandIssued", command=f"git clone {self.remote_url} {self.directory}")
        try:
            git_ops.clone(self.remote_url, self.directory, auth=self._auth(), timeout=self.timeout)
            snapshot = read_snapshot("HEAD", cwd=self.directory)
        except (git_ops.GitError, ValueError) as e:
            raise CloneError(f"{prefix}: {self._clean(e)}") from e

        logger.info("Cloned %s at %s", self.remote_url, snapshot.sha[:8])
        self._record(snapshot)
        return snapshot

    def commit(self, message: str) -> CommitSnapshot:
        if not git_ops.is_repo_root(self.directory):
            raise CommitError("open", f"Error opening the repo in directory {self.directory}")

        file_path = self.directory / self.filename
        self._emitter.emit("GitCommandIssued", command=f'echo "{message}" > {self.filename}')
        try:
            file_path.write_text(message)
        except OSError as e:
            raise CommitError("write", f"Error writing to file {file_path}: {e}") from e

        self._emitter.emit("GitCommandIssued", command=f"git add {self.filename}")
        try:
            git_ops.add([self.filename], cwd=self.directory)
        except git_ops.GitError as e:
            raise CommitError("add", f"Error adding file {file_path}: {e}") from e

        self._emitter.emit("GitCommandIssued", command="git status --porcelain")
        try:
            porcelain = git_ops.status(cwd=self.directory)
        except git_ops.GitError as e:
            raise CommitError("status", f"Error getting status: {e}") from e
        self._emitter.emit("WorktreeStatus", porcelain=porcelain)

        self._emitter.emit("GitCommandIssued", command=f'git commit -m "{message}"')
        try:
            sha = git_ops.commit(
                message,
                author_name=self.author.name,
                author_email=self.author.email,
                cwd=self.directory,
            )
        except git_ops.GitError as e:
            raise CommitError("commit", f"Error committing: {e}") from e

        self._emitter.emit("GitCommandIssued", command="git show -s")
        try:
            snapshot = read_snapshot(sha, cwd=self.directory)
        except (git_ops.GitError, ValueError) as e:
            raise CommitError("show", f"Error reading commit {sha}: {e}") from e

        logger.info("Committed %s in %s", snapshot.sha[:8], self.directory)
        self._record(snapshot)
        return snapshot

    def push(self) -> None:
        prefix = f"Error pushing commit to remote {self.remote_url}"
        if not git_ops.is_repo_root(self.directory):
            raise PushError(f"Error opening the repo in directory {self.directory}")

        self._emitter.emit("GitCommandIssued", command="git push")
        try:
            git_ops.push(cwd=self.directory, auth=self._auth(), timeout=self.timeout)
        except (git_ops.GitError, ValueError) as e:
            raise PushError(f"{prefix}: {self._clean(e)}") from e
        logger.info("Pushed %s to %s", self.directory, self.remote_url)
