import logging
from pathlib import Path

from clawd_models.bots.registry import BOT_IDS, is_known_bot
from clawd_models.constants import (
    PREFERENCE_DIRNAME,
    PREFERENCE_FILENAME,
    PREFERENCE_KEY,
)
from clawd_models.errors import InvalidTargetError
from clawd_models.utils import read_json_safe, write_json


logger = logging.getLogger(__name__)


class PreferenceRepository:
    def __init__(self, root: Path | None = None) -> None:
        self._root = root or (Path.home() / PREFERENCE_DIRNAME)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def preference_path(self) -> Path:
        return self.root / PREFERENCE_FILENAME

    def load(self) -> str | None:
        payload, error = read_json_safe(self.preference_path)
        if error is not None:
            logger.debug(
                "ignoring unreadable preference %s: %s", self.preference_path, error
            )
            return None
        if not isinstance(payload, dict):
            return None
        bot_id = payload.get(PREFERENCE_KEY)
        if not isinstance(bot_id, str) or not is_known_bot(bot_id):
            return None
        return bot_id

    def save(self, bot_id: str) -> None:
        if not is_known_bot(bot_id):
            raise InvalidTargetError(bot_id, BOT_IDS)
        write_json(self.preference_path, {PREFERENCE_KEY: bot_id})
        logger.debug("saved preferred bot %s", bot_id)

    def clear(self) -> bool:
        if not self.preference_path.exists():
            return False
        self.preference_path.unlink()
        logger.debug("removed %s", self.preference_path)
        return True
