from __future__ import annotations

import typer

from gitploy.config.settings import MIN_TOKEN_LENGTH, TOKEN_ENV, load_config, validate_token
from gitploy.errors import ConfigError
from gitploy.workspace import git_ops


def doctor() -> None:
    """Check that git is installed and a token is configured."""
    failed = False

    try:
        typer.echo(f"git: OK ({git_ops.version()})")
    except (git_ops.GitError, FileNotFoundError):
        typer.echo("git: FAILED - 'git' executable not found on PATH")
        failed = True

    try:
        config = load_config()
    except ConfigError as e:
        typer.echo(f"Config: FAILED - {e}")
        raise typer.Exit(code=1)

    typer.echo(f"Remote: {config.remote_url}")

    try:
        validate_token(config.token)
        typer.echo("Token: OK")
    except ConfigError:
        typer.echo(
            f"Token: FAILED - set {TOKEN_ENV} to a token of at least "
            f"{MIN_TOKEN_LENGTH} characters"
        )
        failed = True

    if failed:
        raise typer.Exit(code=1)
