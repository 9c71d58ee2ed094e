"""Merge request command group for labcli."""

from __future__ import annotations

import click

from . import mr_note
from ._common import CONTEXT_SETTINGS


def build_mr_group() -> click.Group:
    """Create the ``mr`` group with its subcommands attached."""

    @click.group(name="mr", context_settings=CONTEXT_SETTINGS)
    def mr() -> None:
        """Work with GitLab merge requests."""

    mr_note.register(mr)
    return mr


def register(cli: click.Group) -> None:
    """Register the group with the root CLI group."""

    cli.add_command(build_mr_group())
