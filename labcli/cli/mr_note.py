"""Note command for the merge request group."""

from __future__ import annotations

import click

from ..api import GitLabError
from ..editor import EditorError, open_editor
from ..git import GitError
from ..services.notes import (
    EDIT_DOCUMENT_NAME,
    NoteError,
    NoteRequest,
    compose_note,
    submit_note,
)
from ..targets import ArgumentError, resolve_target
from ._common import LabCliError, get_app


@click.command(name="note")
@click.option(
    "-m",
    "--message",
    "messages",
    multiple=True,
    help="Use the given <msg>; multiple -m are concatenated as separate paragraphs",
)
@click.option(
    "-F",
    "--file",
    "file_path",
    type=str,
    default="",
    help="Use the given file as the message",
)
@click.option(
    "--force-linebreak",
    is_flag=True,
    help="Append 2 spaces to the end of each line to force markdown linebreaks",
)
@click.argument("args", nargs=-1, required=True, metavar="[REMOTE] <ID>")
@click.pass_context
def note(
    ctx: click.Context,
    args: tuple[str, ...],
    messages: tuple[str, ...],
    file_path: str,
    force_linebreak: bool,
) -> None:
    """Add a note or comment to an MR on GitLab."""

    app = get_app(ctx)

    try:
        target = resolve_target(
            args, app.git, app.client, default_remote=app.config.default_remote
        )
    except ArgumentError as exc:
        raise click.UsageError(str(exc), ctx=ctx) from exc

    def edit(template: str) -> str:
        try:
            directory = app.git.git_dir()
        except GitError:
            directory = None
        return open_editor(
            template,
            name=EDIT_DOCUMENT_NAME,
            editor=app.config.editor or app.git.editor(),
            directory=directory,
        )

    try:
        body = compose_note(
            messages,
            file_path,
            force_linebreak,
            edit_fn=edit,
            comment_char=app.git.comment_char(),
        )
    except (NoteError, EditorError) as exc:
        raise LabCliError(str(exc)) from exc

    try:
        url = submit_note(app.client, NoteRequest(target=target, body=body))
    except GitLabError as exc:
        raise LabCliError(str(exc)) from exc

    click.echo(url)


def register(group: click.Group) -> None:
    """Register the command, and its ``comment`` alias, with the MR group."""

    group.add_command(note)
    group.add_command(note, name="comment")
