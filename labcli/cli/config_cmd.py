"""Config command for labcli."""

from __future__ import annotations

from pathlib import Path

import click

from ..config import DEFAULT_CONFIG_PATH, bootstrap_config_file
from ._common import LabCliError


@click.command(name="config")
@click.pass_context
def config(ctx: click.Context) -> None:
    """Open the labcli configuration file in the editor."""

    selected_path: Path | None = ctx.obj.get("config_path")
    effective_path = selected_path or DEFAULT_CONFIG_PATH

    created = bootstrap_config_file(effective_path)

    try:
        click.edit(filename=str(effective_path))
    except (OSError, click.ClickException) as exc:
        raise LabCliError(f"Failed to launch editor: {exc}") from exc

    if created:
        click.echo(f"Created configuration at {effective_path}")
    else:
        click.echo(f"Opened configuration at {effective_path}")


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(config)
