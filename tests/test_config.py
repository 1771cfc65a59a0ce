from pathlib import Path

import pytest
from pydantic import SecretStr

from gitploy.config.settings import (
    MIN_TOKEN_LENGTH,
    AuthorConfig,
    GitployConfig,
    load_config,
    validate_token,
)
from gitploy.errors import ConfigError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("GITHUB_PAT", "GITPLOY_REMOTE_URL", "GITPLOY_KEEP_WORKSPACE"):
        monkeypatch.delenv(name, raising=False)


def test_loads_from_cwd(tmp_path: Path) -> None:
    (tmp_path / "gitploy.yaml").write_text("remote_url: https://example.com/a/b\n")
    config = load_config(start=tmp_path)
    assert config.remote_url == "https://example.com/a/b"


def test_walks_parent_directories(tmp_path: Path) -> None:
    (tmp_path / "gitploy.yaml").write_text("author:\n  name: Parent Bot\n")
    child = tmp_path / "a" / "b" / "c"
    child.mkdir(parents=True)
    config = load_config(start=child)
    assert config.author.name == "Parent Bot"
    assert config.author.email == "gitploy@maik.fi"


def test_falls_back_to_defaults(tmp_path: Path) -> None:
    child = tmp_path / "no_config_here"
    child.mkdir()
    config = load_config(start=child)
    assert config.remote_url == "https://github.com/maikdotfi/gitploy-dev"
    assert config.author == AuthorConfig(name="Git Ploy", email="gitploy@maik.fi")
    assert config.filename == "example-git-file"
    assert config.username == "gitploy"
    assert config.keep_workspace is False
    assert config.timeout is None
    assert config.token.get_secret_value() == ""


def test_invalid_yaml_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / "gitploy.yaml").write_text("timeout: [not, a, number]\n")
    with pytest.raises(ConfigError):
        load_config(start=tmp_path)


def test_token_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_PAT", "t" * 30)
    config = load_config(start=tmp_path)
    assert config.token.get_secret_value() == "t" * 30


def test_env_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "gitploy.yaml").write_text(
        "remote_url: https://yaml.example/r\nkeep_workspace: true\n"
    )
    monkeypatch.setenv("GITPLOY_REMOTE_URL", "https://env.example/r")
    monkeypatch.setenv("GITPLOY_KEEP_WORKSPACE", "no")
    config = load_config(start=tmp_path)
    assert config.remote_url == "https://env.example/r"
    assert config.keep_workspace is False


def test_keep_workspace_env_truthy(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITPLOY_KEEP_WORKSPACE", "1")
    assert load_config(start=tmp_path).keep_workspace is True


def test_token_hidden_in_repr() -> None:
    config = GitployConfig(token=SecretStr("x" * 25))
    assert "x" * 25 not in repr(config)


class TestValidateToken:
    def test_accepts_min_length(self) -> None:
        token = "a" * MIN_TOKEN_LENGTH
        assert validate_token(SecretStr(token)) == token

    def test_accepts_plain_string(self) -> None:
        assert validate_token("b" * 40) == "b" * 40

    def test_rejects_short(self) -> None:
        with pytest.raises(ConfigError, match="Github token not found"):
            validate_token("a" * (MIN_TOKEN_LENGTH - 1))

    def test_rejects_empty(self) -> None:
        with pytest.raises(ConfigError):
            validate_token(SecretStr(""))
