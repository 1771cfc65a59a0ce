from __future__ import annotations

import base64
import os
import subprocess
from pathlib import Path


class GitError(Exception):
    def __init__(self, command: list[str], returncode: int, stderr: str) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"git command failed ({returncode}): {' '.join(command)}\n{stderr}")


def basic_auth_header(username: str, password: str) -> str:
    """Build an HTTP Basic ``Authorization`` header value for git's http.extraHeader."""
    if not username:
        raise ValueError("Basic auth username must not be empty")
    encoded = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
    return f"Authorization: Basic {encoded}"


def _environment(env_config: dict[str, str] | None) -> dict[str, str]:
    env = dict(os.environ, GIT_TERMINAL_PROMPT="0")
    if not env_config:
        return env
    # Appended after any entries the caller's environment already defines.
    base = int(env.get("GIT_CONFIG_COUNT", "0") or "0")
    for i, (key, value) in enumerate(env_config.items(), start=base):
        env[f"GIT_CONFIG_KEY_{i}"] = key
        env[f"GIT_CONFIG_VALUE_{i}"] = value
    env["GIT_CONFIG_COUNT"] = str(base + len(env_config))
    return env


def run_git(
    *args: str,
    cwd: Path,
    config: dict[str, str] | None = None,
    env_config: dict[str, str] | None = None,
    timeout: float | None = None,
    input: str | None = None,
    strip: bool = True,
) -> str:
    """Run git in ``cwd``.

    ``config`` entries are passed as ``-c`` arguments and are visible in the
    process list; anything secret belongs in ``env_config``, which reaches git
    through ``GIT_CONFIG_COUNT``/``GIT_CONFIG_KEY_n``/``GIT_CONFIG_VALUE_n``.
    """
    cmd = ["git"]
    for key, value in (config or {}).items():
        cmd.extend(["-c", f"{key}={value}"])
    cmd.extend(args)
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            env=_environment(env_config),
            timeout=timeout,
            input=input,
        )
    except subprocess.TimeoutExpired:
        raise GitError(cmd, -1, f"timed out after {timeout}s") from None
    if result.returncode != 0:
        raise GitError(cmd, result.returncode, result.stderr.strip())
    return result.stdout.strip() if strip else result.stdout


def auth_config(username: str, token: str) -> dict[str, str]:
    return {"http.extraHeader": basic_auth_header(username, token)}


def clone(
    url: str,
    path: Path,
    *,
    auth: dict[str, str] | None = None,
    timeout: float | None = None,
) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    run_git("clone", url, str(path), cwd=path.parent, env_config=auth, timeout=timeout)


def push(
    *,
    cwd: Path,
    auth: dict[str, str] | None = None,
    timeout: float | None = None,
) -> str:
    """Push the current branch to its upstream using git's default push settings."""
    return run_git("push", cwd=cwd, env_config=auth, timeout=timeout)


def rev_parse(ref: str, *, cwd: Path) -> str:
    return run_git("rev-parse", ref, cwd=cwd)


def add(paths: list[str], *, cwd: Path) -> None:
    if not paths:
        return
    run_git("add", "--", *paths, cwd=cwd)


def commit(
    message: str,
    *,
    author_name: str,
    author_email: str,
    cwd: Path,
) -> str:
    # Message is read from stdin and stored byte for byte; identity is pinned
    # for both author and committer so no git config is consulted.
    identity = {"user.name": author_name, "user.email": author_email}
    run_git(
        "commit",
        "--cleanup=verbatim",
        "--allow-empty-message",
        "--author",
        f"{author_name} <{author_email}>",
        "--file=-",
        cwd=cwd,
        config=identity,
        input=message,
    )
    return rev_parse("HEAD", cwd=cwd)


def status(*, cwd: Path) -> str:
    return run_git("status", "--porcelain", cwd=cwd)


def cat_commit(sha: str, *, cwd: Path) -> str:
    """Return the raw commit object, headers and message untouched."""
    return run_git("cat-file", "commit", sha, cwd=cwd, strip=False)


def is_repo_root(path: Path) -> bool:
    """True when ``path`` is the top level of a work tree, not just somewhere inside one."""
    try:
        top = run_git("rev-parse", "--show-toplevel", cwd=path)
    except (GitError, FileNotFoundError, NotADirectoryError):
        return False
    return Path(top).resolve() == path.resolve()


def version() -> str:
    return run_git("--version", cwd=Path.cwd())
