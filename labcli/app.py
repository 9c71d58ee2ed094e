"""Application bootstrap and context container for labcli."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .api import GitLabClient
from .config import LabConfig, load_config
from .git import Git


@dataclass(slots=True)
class AppContext:
    """Aggregates core services for the CLI lifecycle."""

    config: LabConfig
    git: Git
    client: GitLabClient

    def close(self) -> None:
        self.client.close()


def bootstrap(config_path: Path | None, *, cwd: Path | None = None) -> AppContext:
    """Load configuration and initialize the git and GitLab services."""

    # Defer error mapping to the CLI, which knows how to present messages.
    config = load_config(config_path)
    return AppContext(config=config, git=Git(cwd), client=GitLabClient(config))
