from __future__ import annotations

import re


class GitployError(Exception):
    """Base class for every failure that aborts a run."""


class ConfigError(GitployError):
    pass


class WorkspaceError(GitployError):
    pass


class RepoClientError(GitployError):
    pass


class CloneError(RepoClientError):
    pass


class CommitError(RepoClientError):
    def __init__(self, step: str, message: str) -> None:
        self.step = step
        super().__init__(message)


class PushError(RepoClientError):
    pass


def sanitize_error(error: str, secret: str = "") -> str:
    """Strip Basic credentials and the given secret from error messages."""
    error = re.sub(r"(Authorization:\s*Basic)\s+[A-Za-z0-9+/=]+", r"\1 [REDACTED]", error)
    error = re.sub(r"https://[^/\s:@]+:[^/\s@]+@", "https://[REDACTED]@", error)
    if secret:
        error = error.replace(secret, "[REDACTED]")
    return error
