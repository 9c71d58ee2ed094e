"""Resolve ``[remote] <id>`` command arguments into a merge request target."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .api import GitLabClient, GitLabError
from .git import Git, GitError, project_path_from_url

logger = logging.getLogger(__name__)


class ArgumentError(ValueError):
    """Raised when the remote or merge request cannot be resolved."""


@dataclass(frozen=True, slots=True)
class MergeRequestTarget:
    remote: str
    project: str
    mr_iid: int


def parse_mr_id(value: str) -> int:
    """Parse a merge request IID, accepting GitLab's ``!123`` reference form."""

    text = value.strip().removeprefix("!")
    try:
        mr_iid = int(text)
    except ValueError:
        raise ArgumentError(f"'{value}' is not a valid merge request id.") from None
    if mr_iid <= 0:
        raise ArgumentError(f"Merge request id must be positive, got {mr_iid}.")
    return mr_iid


def resolve_target(
    args: Sequence[str],
    git: Git,
    client: GitLabClient,
    *,
    default_remote: str,
) -> MergeRequestTarget:
    """Turn ``[remote] <id>`` into a project path and merge request IID.

    A single argument naming a git remote selects the open merge request for
    the current branch on that remote's project. A single id uses
    ``default_remote``.
    """

    if not args:
        raise ArgumentError("A merge request id is required.")
    if len(args) > 2:
        raise ArgumentError(f"Expected at most 2 arguments, got {len(args)}.")

    try:
        known_remotes = git.remotes()
    except GitError as exc:
        raise ArgumentError(str(exc)) from exc

    mr_iid: int | None
    if len(args) == 2:
        remote, mr_iid = args[0], parse_mr_id(args[1])
    elif args[0] in known_remotes:
        remote, mr_iid = args[0], None
    else:
        remote, mr_iid = default_remote, parse_mr_id(args[0])

    if remote not in known_remotes:
        raise ArgumentError(f"'{remote}' is not a git remote of this repository.")

    try:
        project = project_path_from_url(git.remote_url(remote))
    except GitError as exc:
        raise ArgumentError(str(exc)) from exc

    if mr_iid is None:
        mr_iid = _mr_for_current_branch(git, client, project)

    logger.debug("Resolved target %s!%s via remote '%s'", project, mr_iid, remote)
    return MergeRequestTarget(remote=remote, project=project, mr_iid=mr_iid)


def _mr_for_current_branch(git: Git, client: GitLabClient, project: str) -> int:
    try:
        branch = git.current_branch()
    except GitError as exc:
        raise ArgumentError(str(exc)) from exc

    try:
        mr = client.find_mr_for_branch(project, branch)
    except GitLabError as exc:
        raise ArgumentError(f"Could not look up merge request: {exc}") from exc
    if mr is None:
        raise ArgumentError(f"No open merge request found for branch '{branch}'.")
    return int(mr["iid"])
