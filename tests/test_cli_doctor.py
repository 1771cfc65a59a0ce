from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from gitploy.cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GITHUB_PAT", raising=False)
    monkeypatch.delenv("GITPLOY_REMOTE_URL", raising=False)


def test_doctor_healthy(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_PAT", "x" * 40)

    result = runner.invoke(app, ["doctor"])

    assert result.exit_code == 0
    assert "git: OK (git version" in result.output
    assert "Remote: https://github.com/maikdotfi/gitploy-dev" in result.output
    assert "Token: OK" in result.output
    assert "x" * 40 not in result.output


def test_doctor_missing_token() -> None:
    result = runner.invoke(app, ["doctor"])

    assert result.exit_code == 1
    assert "Token: FAILED" in result.output
    assert "GITHUB_PAT" in result.output


def test_doctor_git_not_installed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_PAT", "x" * 40)

    with patch("gitploy.cli.doctor.git_ops.version", side_effect=FileNotFoundError("git")):
        result = runner.invoke(app, ["doctor"])

    assert result.exit_code == 1
    assert "git: FAILED" in result.output
