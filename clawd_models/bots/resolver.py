import logging
from dataclasses import dataclass
from pathlib import Path

from clawd_models.bots.preferences import PreferenceRepository
from clawd_models.bots.registry import BOT_IDS, BotMetadata, find_bot, list_targets
from clawd_models.constants import PREFERENCE_DIRNAME
from clawd_models.errors import (
    ConfigFileNotFoundError,
    NoTargetsAvailableError,
    UnknownTargetError,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedConfig:
    bot: BotMetadata
    config_path: Path
    was_auto_persisted: bool = False


class ConfigResolver:
    """Pick the bot config file a command operates on.

    Order: explicit id, saved preference, then the first bot in registry order
    whose config file exists. Only the last step writes the preference; an
    explicit selection is persisted by the caller.
    """

    def __init__(
        self,
        preferences: PreferenceRepository | None = None,
        home: Path | None = None,
    ) -> None:
        self.home = home
        self.preferences = preferences or PreferenceRepository(
            root=(home / PREFERENCE_DIRNAME) if home is not None else None
        )

    def config_path(self, bot: BotMetadata) -> Path:
        return bot.config_path(self.home)

    def resolve(self, explicit_bot_id: str | None = None) -> ResolvedConfig:
        if explicit_bot_id:
            return self._resolve_explicit(explicit_bot_id)

        saved = self.preferences.load()
        if saved is not None:
            bot = find_bot(saved)
            if bot is not None:
                path = self.config_path(bot)
                if path.exists():
                    logger.debug("using preferred bot %s at %s", bot.id, path)
                    return ResolvedConfig(bot=bot, config_path=path)
                logger.debug("preferred bot %s has no config at %s", bot.id, path)

        for bot in list_targets():
            path = self.config_path(bot)
            if path.exists():
                self.preferences.save(bot.id)
                logger.debug("auto-detected bot %s at %s", bot.id, path)
                return ResolvedConfig(
                    bot=bot, config_path=path, was_auto_persisted=True
                )

        raise NoTargetsAvailableError(
            [(bot.label, self.config_path(bot)) for bot in list_targets()]
        )

    def _resolve_explicit(self, bot_id: str) -> ResolvedConfig:
        bot = find_bot(bot_id)
        if bot is None:
            raise UnknownTargetError(bot_id, BOT_IDS)
        path = self.config_path(bot)
        if not path.exists():
            raise ConfigFileNotFoundError(bot.label, path)
        return ResolvedConfig(bot=bot, config_path=path)
