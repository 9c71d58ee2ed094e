from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from labcli.config import (
    ConfigError,
    InvalidConfigError,
    LabConfig,
    MissingConfigError,
    bootstrap_config_file,
    load_config,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    monkeypatch.delenv("GITLAB_TOKEN", raising=False)
    monkeypatch.delenv("GITLAB_URL", raising=False)


def write_config(tmp_path: Path, content: str) -> Path:
    config_file = tmp_path / "config.toml"
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(textwrap.dedent(content), encoding="utf-8")
    return config_file


def test_load_config_success(tmp_path: Path) -> None:
    config_path = write_config(
        tmp_path,
        """
        [gitlab]
        url = "https://gitlab.example.com/"
        token = "secret"
        editor = "nvim"
        default_remote = "upstream"
        timeout = 10
        ssl_verify = false
        """,
    )

    config = load_config(config_path)
    assert isinstance(config, LabConfig)
    assert config.url == "https://gitlab.example.com"
    assert config.api_url == "https://gitlab.example.com/api/v4"
    assert config.token == "secret"
    assert config.editor == "nvim"
    assert config.default_remote == "upstream"
    assert config.timeout == 10.0
    assert config.ssl_verify is False
    assert config.source_path == config_path


def test_defaults_apply(tmp_path: Path) -> None:
    config_path = write_config(
        tmp_path,
        """
        [gitlab]
        token = "secret"
        """,
    )

    config = load_config(config_path)
    assert config.url == "https://gitlab.com"
    assert config.default_remote == "origin"
    assert config.editor is None
    assert config.ssl_verify is True


def test_environment_overrides_file(tmp_path: Path, monkeypatch) -> None:
    config_path = write_config(
        tmp_path,
        """
        [gitlab]
        url = "https://gitlab.example.com"
        token = "from-file"
        """,
    )
    monkeypatch.setenv("GITLAB_TOKEN", "from-env")
    monkeypatch.setenv("GITLAB_URL", "https://other.example.com")

    config = load_config(config_path)
    assert config.token == "from-env"
    assert config.url == "https://other.example.com"


def test_missing_file_without_token(tmp_path: Path) -> None:
    with pytest.raises(MissingConfigError) as exc_info:
        load_config(tmp_path / "missing.toml")
    assert isinstance(exc_info.value, ConfigError)


def test_missing_file_with_env_token(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("GITLAB_TOKEN", "env-token")

    config = load_config(tmp_path / "missing.toml")
    assert config.token == "env-token"
    assert config.source_path is None


def test_token_is_required(tmp_path: Path) -> None:
    config_path = write_config(
        tmp_path,
        """
        [gitlab]
        token = "   "
        """,
    )
    with pytest.raises(InvalidConfigError, match="token"):
        load_config(config_path)


def test_gitlab_section_is_required(tmp_path: Path) -> None:
    config_path = write_config(tmp_path, 'token = "secret"\n')
    with pytest.raises(InvalidConfigError, match="'gitlab' section"):
        load_config(config_path)


@pytest.mark.parametrize(
    "line",
    ['url = "gitlab.example.com"', "timeout = -1", 'ssl_verify = "no"', "editor = 3"],
)
def test_invalid_values_are_rejected(tmp_path: Path, line: str) -> None:
    config_path = write_config(tmp_path, f'[gitlab]\ntoken = "secret"\n{line}\n')
    with pytest.raises(InvalidConfigError):
        load_config(config_path)


def test_bootstrap_config_file(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.toml"

    assert bootstrap_config_file(path) is True
    assert "[gitlab]" in path.read_text(encoding="utf-8")
    assert bootstrap_config_file(path) is False
