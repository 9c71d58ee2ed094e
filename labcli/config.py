"""Configuration management for labcli."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_DIR = Path("~/.config/labcli").expanduser()
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"
DEFAULT_GITLAB_URL = "https://gitlab.com"
DEFAULT_REMOTE = "origin"
DEFAULT_TIMEOUT = 30.0


class ConfigError(RuntimeError):
    """Base error for configuration related issues."""


class MissingConfigError(ConfigError):
    """Raised when the configuration file cannot be found."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Configuration file not found at {path}")
        self.path = path


class InvalidConfigError(ConfigError):
    """Raised when the configuration file misses required keys or values."""


@dataclass(slots=True)
class LabConfig:
    """In-memory representation of the labcli configuration."""

    url: str
    token: str
    editor: str | None = None
    default_remote: str = DEFAULT_REMOTE
    timeout: float = DEFAULT_TIMEOUT
    ssl_verify: bool = True
    source_path: Path | None = None

    @property
    def api_url(self) -> str:
        return f"{self.url}/api/v4"


def load_config(path: Path | None = None) -> LabConfig:
    """Load configuration from ``path`` or the default location.

    The ``GITLAB_URL`` and ``GITLAB_TOKEN`` environment variables override
    the matching file settings. When no file exists, a configuration built
    from the environment alone is accepted as long as it carries a token.

    Raises
    ------
    MissingConfigError
        If the file cannot be found and the environment provides no token.
    InvalidConfigError
        If mandatory settings are missing or malformed.
    """

    config_path = (path or DEFAULT_CONFIG_PATH).expanduser()
    env_token = os.getenv("GITLAB_TOKEN", "").strip()

    section: dict[str, Any] = {}
    source_path: Path | None = None
    if config_path.exists():
        with config_path.open("rb") as fh:
            try:
                raw = tomllib.load(fh)
            except tomllib.TOMLDecodeError as exc:
                raise InvalidConfigError(
                    f"Invalid TOML in {config_path}: {exc}"
                ) from exc
        gitlab_section = raw.get("gitlab")
        if not isinstance(gitlab_section, dict):
            raise InvalidConfigError("'gitlab' section is required and must be a table")
        section = gitlab_section
        source_path = config_path
    elif not env_token:
        raise MissingConfigError(config_path)

    url = os.getenv("GITLAB_URL", "").strip() or _optional_str(section, "url")
    url = (url or DEFAULT_GITLAB_URL).rstrip("/")
    if not url.startswith(("http://", "https://")):
        raise InvalidConfigError(
            f"'url' must start with http:// or https://, got: {url}"
        )

    token = env_token or (_optional_str(section, "token") or "")
    if not token:
        raise InvalidConfigError(
            "A GitLab token is required. Set 'token' in the [gitlab] section "
            "or the GITLAB_TOKEN environment variable."
        )

    editor = _optional_str(section, "editor")
    default_remote = _optional_str(section, "default_remote") or DEFAULT_REMOTE

    timeout_raw = section.get("timeout", DEFAULT_TIMEOUT)
    if isinstance(timeout_raw, bool) or not isinstance(timeout_raw, (int, float)):
        raise InvalidConfigError("'timeout' must be a number when provided")
    if timeout_raw <= 0:
        raise InvalidConfigError("'timeout' must be positive")

    ssl_verify = section.get("ssl_verify", True)
    if not isinstance(ssl_verify, bool):
        raise InvalidConfigError("'ssl_verify' must be a boolean when provided")

    return LabConfig(
        url=url,
        token=token,
        editor=editor,
        default_remote=default_remote,
        timeout=float(timeout_raw),
        ssl_verify=ssl_verify,
        source_path=source_path,
    )


def _optional_str(section: dict[str, Any], key: str) -> str | None:
    value = section.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidConfigError(f"'{key}' must be a string when provided")
    return value.strip() or None


def bootstrap_config_file(path: Path) -> bool:
    """Create a default config file if missing.

    Returns True when the file was created, False if it already existed.
    """

    if path.exists():
        return False

    config_dir = path.parent
    config_dir.mkdir(parents=True, exist_ok=True)
    default_content = (
        "[gitlab]\n"
        f'url = "{DEFAULT_GITLAB_URL}"\n'
        'token = ""\n'
        f'default_remote = "{DEFAULT_REMOTE}"\n'
        'editor = "vim"\n'
    )
    path.write_text(default_content, encoding="utf-8")
    return True
