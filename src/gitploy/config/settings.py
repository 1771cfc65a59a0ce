from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, SecretStr, ValidationError

from gitploy.errors import ConfigError

CONFIG_FILENAME = "gitploy.yaml"
TOKEN_ENV = "GITHUB_PAT"
REMOTE_URL_ENV = "GITPLOY_REMOTE_URL"
KEEP_WORKSPACE_ENV = "GITPLOY_KEEP_WORKSPACE"

# Length guard against an obviously missing token; not an authorization check.
MIN_TOKEN_LENGTH = 20


class AuthorConfig(BaseModel):
    name: str = "Git Ploy"
    email: str = "gitploy@maik.fi"


class GitployConfig(BaseModel):
    remote_url: str = "https://github.com/maikdotfi/gitploy-dev"
    token: SecretStr = SecretStr("")
    username: str = "gitploy"
    author: AuthorConfig = AuthorConfig()
    filename: str = "example-git-file"
    keep_workspace: bool = False
    timeout: float | None = None


def validate_token(token: SecretStr | str) -> str:
    """Return the raw token, or raise :class:`ConfigError` if it is missing or too short."""
    raw = token.get_secret_value() if isinstance(token, SecretStr) else token
    if len(raw) < MIN_TOKEN_LENGTH:
        raise ConfigError("Github token not found")
    return raw


def _find_config_file(start: Path | None = None) -> Path | None:
    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _truthy(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config(start: Path | None = None) -> GitployConfig:
    config_path = _find_config_file(start)

    if config_path is not None:
        try:
            with open(config_path) as f:
                raw = yaml.safe_load(f) or {}
            config = GitployConfig.model_validate(raw)
        except (yaml.YAMLError, ValidationError) as e:
            raise ConfigError(f"Invalid config file {config_path}: {e}") from e
    else:
        config = GitployConfig()

    token_env = os.environ.get(TOKEN_ENV)
    if token_env is not None:
        config.token = SecretStr(token_env)

    remote_env = os.environ.get(REMOTE_URL_ENV)
    if remote_env:
        config.remote_url = remote_env

    keep_env = os.environ.get(KEEP_WORKSPACE_ENV)
    if keep_env is not None:
        config.keep_workspace = _truthy(keep_env)

    return config
