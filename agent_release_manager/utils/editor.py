"""Launches the user's editor on a file and waits for it to close."""

import shlex
import subprocess
from pathlib import Path

import structlog

from agent_release_manager.exceptions import EditorCommandError

logger = structlog.get_logger(__name__)


def build_editor_command(editor_command: str, path: Path) -> list[str]:
    """Split an editor command line and append the file to edit."""
    parts = shlex.split(editor_command)
    if not parts:
        raise EditorCommandError("No editor command configured")
    return [*parts, str(path)]


def open_in_editor(editor_command: str, path: Path) -> None:
    """Open a file in the editor and block until the editor exits.

    The editor inherits the terminal so interactive editors work.

    Raises:
        EditorCommandError: If the editor cannot be started or exits non-zero.
    """
    cmd = build_editor_command(editor_command, path)
    logger.info("Opening release notes in editor", command=" ".join(cmd))
    try:
        subprocess.run(cmd, check=True)
    except FileNotFoundError as exc:
        raise EditorCommandError(f"Editor '{cmd[0]}' not found") from exc
    except subprocess.CalledProcessError as exc:
        raise EditorCommandError(f"Editor '{' '.join(cmd)}' exited with code {exc.returncode}") from exc
