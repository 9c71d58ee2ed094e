"""Info command for labcli."""

from __future__ import annotations

import click

from ..config import LabConfig
from ..git import GitError
from ._common import get_app


@click.command(name="info")
@click.pass_context
def info(ctx: click.Context) -> None:
    """Display the effective configuration and repository remotes."""

    app = get_app(ctx)

    try:
        remotes = ", ".join(app.git.remotes()) or "(none)"
    except GitError:
        remotes = "(not a git repository)"

    click.echo("labcli info:\n")
    click.echo(f"  Config file   : {app.config.source_path or '(environment only)'}")
    click.echo(f"  Git remotes   : {remotes}")
    click.echo(f"  Comment char  : {app.git.comment_char()}")
    click.echo("\nConfiguration:\n")
    click.echo(_format_config(app.config))


def _format_config(config: LabConfig) -> str:
    def quote(value: str | None) -> str:
        if value is None:
            return '""'
        return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'

    lines = [
        "[gitlab]",
        f"url = {quote(config.url)}",
        f"token = {quote(_mask(config.token))}",
        f"default_remote = {quote(config.default_remote)}",
        f"editor = {quote(config.editor)}",
        f"timeout = {config.timeout:g}",
        f"ssl_verify = {'true' if config.ssl_verify else 'false'}",
    ]
    return "\n".join(lines)


def _mask(token: str) -> str:
    if len(token) <= 4:
        return "*" * len(token)
    return "*" * (len(token) - 4) + token[-4:]


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(info)
