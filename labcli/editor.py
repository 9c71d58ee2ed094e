"""Utilities for launching an editor to capture message content."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

import click

logger = logging.getLogger(__name__)


class EditorError(RuntimeError):
    """Raised when the interactive edit session cannot be completed."""


def open_editor(
    initial_content: str,
    *,
    name: str,
    editor: str | None = None,
    directory: Path | None = None,
) -> str:
    """Open ``initial_content`` in the editor and return the saved text.

    The scratch file is named after ``name`` (``<name>_EDITMSG``) and lives in
    ``directory``. Without a directory a uniquely named file is created in
    the system temp directory. The file is removed once the session ends,
    whether or not the edit succeeded.
    """

    path = _scratch_path(name, directory)
    logger.debug("Editing %s with %s", path, editor or "the default editor")

    try:
        path.write_text(initial_content, encoding="utf-8")
        click.edit(filename=str(path), editor=editor)
        return path.read_text(encoding="utf-8")
    except click.ClickException as exc:
        raise EditorError(exc.format_message()) from exc
    except OSError as exc:
        raise EditorError(f"Failed to edit {path}: {exc}") from exc
    finally:
        path.unlink(missing_ok=True)


def _scratch_path(name: str, directory: Path | None) -> Path:
    if directory is not None:
        return directory / f"{name}_EDITMSG"
    try:
        fd, raw_path = tempfile.mkstemp(
            prefix=f"{name}_", suffix="_EDITMSG", dir=tempfile.gettempdir()
        )
    except OSError as exc:
        raise EditorError(f"Cannot create a scratch file for {name}: {exc}") from exc
    os.close(fd)
    return Path(raw_path)
