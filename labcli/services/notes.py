"""Merge request note workflows used by the CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from ..api import GitLabClient
from ..git import DEFAULT_COMMENT_CHAR
from ..targets import MergeRequestTarget

logger = logging.getLogger(__name__)

EditFunc = Callable[[str], str]

EDIT_DOCUMENT_NAME = "MR_NOTE"
EMPTY_BODY_MESSAGE = "aborting note due to empty note msg"


class NoteError(RuntimeError):
    """Base error for note composition failures."""


class NoteFileError(NoteError):
    """Raised when the file given as note body cannot be read."""


class EmptyBodyError(NoteError):
    """Raised when the resolved note body is empty."""

    def __init__(self) -> None:
        super().__init__(EMPTY_BODY_MESSAGE)


@dataclass(frozen=True, slots=True)
class ComposeTemplate:
    init_msg: str
    comment_char: str


@dataclass(frozen=True, slots=True)
class NoteRequest:
    """A fully resolved note, ready for a single submission."""

    target: MergeRequestTarget
    body: str

    @property
    def remote(self) -> str:
        return self.target.remote


def render_template(template: ComposeTemplate) -> str:
    """Build the scratch buffer shown in the editor."""

    return (
        f"{template.init_msg}\n"
        f"{template.comment_char} Write a message for this note. "
        "Commented lines are discarded."
    )


def strip_comments(text: str, comment_char: str) -> str:
    """Drop lines starting with ``comment_char`` and trim surrounding blanks.

    Only lines whose very first character is the marker are dropped; an
    indented marker is regular content. Lines are split on "\n" only.
    """

    kept = [line for line in text.split("\n") if not line.startswith(comment_char)]
    return "\n".join(kept).strip()


def text_to_markdown(text: str) -> str:
    """End every non-empty line with two spaces to force Markdown line breaks.

    Existing trailing spaces are normalised to exactly two, so running the
    transform twice yields the same text.
    """

    out: list[str] = []
    for line in text.split("\n"):
        content = line.removesuffix("\r")
        ending = line[len(content) :]
        if content:
            content = content.rstrip(" ") + "  "
        out.append(content + ending)
    return "\n".join(out)


def compose_note(
    messages: Sequence[str],
    file_path: str = "",
    force_linebreak: bool = False,
    *,
    edit_fn: EditFunc,
    comment_char: str = DEFAULT_COMMENT_CHAR,
) -> str:
    """Resolve the note body from a file, ``-m`` messages, or the editor.

    A file wins over messages and is used verbatim. Messages are joined as
    separate paragraphs. With neither, ``edit_fn`` receives the rendered
    template and its result has comment lines removed.
    """

    if file_path:
        body = _read_note_file(file_path)
    elif messages:
        body = "\n\n".join(messages)
    else:
        context = ComposeTemplate(init_msg="\n", comment_char=comment_char)
        template = render_template(context)
        body = strip_comments(edit_fn(template), comment_char)

    if body == "":
        raise EmptyBodyError()

    if force_linebreak:
        body = text_to_markdown(body)
    return body


def submit_note(client: GitLabClient, request: NoteRequest) -> str:
    """Create the note on GitLab and return its URL."""

    target = request.target
    url = client.mr_note_url(target.project, target.mr_iid, request.body)
    logger.info("Created note %s", url)
    return url


def _read_note_file(file_path: str) -> str:
    path = Path(file_path).expanduser()
    try:
        # newline="" keeps the file's exact line endings.
        with path.open(encoding="utf-8", newline="") as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise NoteFileError(f"Cannot read note file '{file_path}': {exc}") from exc
