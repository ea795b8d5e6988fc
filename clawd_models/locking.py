import logging
import os
from contextlib import nullcontext
from pathlib import Path
from typing import IO, ContextManager

from clawd_models.constants import LOCK_SUFFIX


logger = logging.getLogger(__name__)

if os.name == "nt":  # pragma: no cover - Windows specific
    import msvcrt

    def _set_locked(handle: IO[str], locked: bool) -> None:
        handle.seek(0)
        mode = msvcrt.LK_LOCK if locked else msvcrt.LK_UNLCK
        msvcrt.locking(handle.fileno(), mode, 1)

else:
    import fcntl

    def _set_locked(handle: IO[str], locked: bool) -> None:
        fcntl.flock(handle.fileno(), fcntl.LOCK_EX if locked else fcntl.LOCK_UN)


def lock_path_for(config_path: Path) -> Path:
    return config_path.with_name(config_path.name + LOCK_SUFFIX)


class AdvisoryFileLock:
    """Serialize load/mutate/save of one bot config across clawd-models runs.

    The lock lives on ``<config>.lock`` next to the config, never on the config
    itself, because saving replaces the config file. Editors and the bots do
    not take it.
    """

    def __init__(self, config_path: Path) -> None:
        self.config_path = config_path
        self.lock_path = lock_path_for(config_path)
        self._handle: IO[str] | None = None

    def __enter__(self) -> "AdvisoryFileLock":
        self.lock_path.parent.mkdir(parents=True, exist_ok=True)
        handle = self.lock_path.open("a+", encoding="utf-8")
        try:
            _set_locked(handle, True)
        except OSError:
            handle.close()
            raise
        self._handle = handle
        logger.debug("locked %s", self.config_path)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        handle, self._handle = self._handle, None
        if handle is None:
            return
        try:
            _set_locked(handle, False)
        finally:
            handle.close()
            logger.debug("unlocked %s", self.config_path)


def config_lock(config_path: Path, enabled: bool) -> ContextManager[object]:
    if not enabled:
        return nullcontext()
    return AdvisoryFileLock(config_path)
