from __future__ import annotations

import logging
from typing import Optional

import typer

from gitploy.config.settings import load_config, validate_token
from gitploy.errors import ConfigError, GitployError
from gitploy.events.dispatcher import EventDispatcher
from gitploy.events.observer import StdoutObserver
from gitploy.workspace.deployment import default_message, run_deployment


def run(
    remote: Optional[str] = typer.Option(None, "--remote", help="Remote repository URL (overrides config)"),
    message: Optional[str] = typer.Option(None, "--message", "-m", help="Commit message and file content"),
    keep_workspace: bool = typer.Option(False, "--keep-workspace", help="Do not delete the temporary clone"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Seconds before a clone or push is abandoned"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Clone the remote, commit a timestamped file, and push it back."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        config = load_config()
    except ConfigError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)

    if remote:
        config.remote_url = remote
    if keep_workspace:
        config.keep_workspace = True
    if timeout is not None:
        config.timeout = timeout

    # Pre-flight: nothing is created or fetched without a plausible token
    try:
        validate_token(config.token)
    except ConfigError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)

    dispatcher = EventDispatcher([StdoutObserver()])

    try:
        run_deployment(config, message or default_message(), dispatcher)
    except GitployError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)
