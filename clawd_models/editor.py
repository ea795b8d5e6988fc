import logging
import os
import shlex
import subprocess
from pathlib import Path

from clawd_models.constants import DEFAULT_EDITOR
from clawd_models.errors import EditorError


logger = logging.getLogger(__name__)


def resolve_editor() -> str:
    return os.environ.get("EDITOR") or DEFAULT_EDITOR


def open_in_editor(path: Path, editor: str | None = None) -> None:
    command = shlex.split(editor or resolve_editor()) + [str(path)]
    logger.debug("launching editor: %s", command)
    try:
        subprocess.run(command, check=True)
    except FileNotFoundError as exc:
        raise EditorError(
            f"Editor not found: {command[0]}. Set $EDITOR to your preferred editor."
        ) from exc
    except subprocess.CalledProcessError as exc:
        raise EditorError(f"Editor exited with error: {exc.returncode}") from exc
