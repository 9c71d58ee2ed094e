"""Thin wrapper around the git command line for repository queries."""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_COMMENT_CHAR = "#"

# git@host:group/project.git, ssh://git@host:22/group/project.git,
# https://host/group/project.git
_REMOTE_PATTERNS = (
    re.compile(r"^[\w.-]+@[^:/]+:(?P<path>.+?)(?:\.git)?/?$"),
    re.compile(r"^(?:ssh|git|https?)://[^/]+/(?P<path>.+?)(?:\.git)?/?$"),
)


class GitError(RuntimeError):
    """Raised when a git command fails or returns unusable output."""


class Git:
    """Runs read-only git queries against the repository at ``cwd``."""

    def __init__(self, cwd: Path | None = None) -> None:
        self.cwd = (cwd or Path.cwd()).expanduser()

    def remotes(self) -> list[str]:
        return self._run_git("remote").split()

    def remote_url(self, name: str) -> str:
        return self._run_git("remote", "get-url", name).strip()

    def current_branch(self) -> str:
        branch = self._run_git("rev-parse", "--abbrev-ref", "HEAD").strip()
        if not branch or branch == "HEAD":
            raise GitError("Not on a branch (detached HEAD).")
        return branch

    def git_dir(self) -> Path:
        raw = self._run_git("rev-parse", "--git-dir").strip()
        path = Path(raw)
        return path if path.is_absolute() else (self.cwd / path).resolve()

    def comment_char(self) -> str:
        """Return the character git uses to mark comment lines in messages."""

        try:
            value = self._run_git("config", "--get", "core.commentChar").strip()
        except GitError:
            return DEFAULT_COMMENT_CHAR
        if not value or value == "auto":
            return DEFAULT_COMMENT_CHAR
        return value

    def editor(self) -> str | None:
        try:
            return self._run_git("var", "GIT_EDITOR").strip() or None
        except GitError:
            return None

    def _run_git(self, *args: str) -> str:
        logger.debug("Running git %s in %s", " ".join(args), self.cwd)
        try:
            process = subprocess.run(
                ["git", *args],
                cwd=self.cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise GitError("Git command not found - is git installed?") from exc
        if process.returncode != 0:
            args_display = " ".join(args)
            stderr = process.stderr.strip()
            raise GitError(
                f"git {args_display} failed (exit {process.returncode}): {stderr}"
            )
        return process.stdout


def project_path_from_url(remote_url: str) -> str:
    """Extract the ``group/project`` path from a git remote URL."""

    url = remote_url.strip()
    for pattern in _REMOTE_PATTERNS:
        match = pattern.match(url)
        if match:
            return match.group("path")
    raise GitError(f"Cannot determine a GitLab project from remote URL '{remote_url}'.")
