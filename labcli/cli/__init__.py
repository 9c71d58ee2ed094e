"""labcli command-line interface."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import click

from . import config_cmd, info, mr
from ._common import CONTEXT_SETTINGS, LabCliError

__all__ = ["build_cli", "main", "LabCliError"]

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def build_cli() -> click.Group:
    """Create the root ``lab`` group and register every subcommand."""

    @click.group(context_settings=CONTEXT_SETTINGS)
    @click.option(
        "-c",
        "--config",
        "config_path_opt",
        type=click.Path(path_type=Path),
        default=None,
        help="Path to configuration TOML file.",
    )
    @click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
    @click.pass_context
    def cli(ctx: click.Context, config_path_opt: Path | None, verbose: bool) -> None:
        """GitLab command-line client."""

        ctx.ensure_object(dict)
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format=LOG_FORMAT,
        )
        ctx.obj["config_path"] = config_path_opt

    for register_command in (
        mr.register,
        config_cmd.register,
        info.register,
    ):
        register_command(cli)

    return cli


def main(argv: Sequence[str] | None = None) -> int:
    args = list(argv) if argv is not None else None
    try:
        result = build_cli().main(args=args, prog_name="lab", standalone_mode=False)
        return result if isinstance(result, int) else 0
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except SystemExit as exc:
        return int(exc.code or 0)
