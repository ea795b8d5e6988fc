from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class BotId(str, Enum):
    OPENCLAW = "openclaw"
    CLAWDBOT = "clawdbot"
    MOLTBOT = "moltbot"


@dataclass(frozen=True)
class BotMetadata:
    bot_id: BotId
    label: str
    relative_config_path: str

    @property
    def id(self) -> str:
        return self.bot_id.value

    def config_path(self, home: Path | None = None) -> Path:
        return (home or Path.home()) / self.relative_config_path


# Ordered by auto-detection priority.
BOT_CATALOG: dict[BotId, BotMetadata] = {
    BotId.OPENCLAW: BotMetadata(
        bot_id=BotId.OPENCLAW,
        label="OpenClaw",
        relative_config_path=".openclaw/openclaw.json",
    ),
    BotId.CLAWDBOT: BotMetadata(
        bot_id=BotId.CLAWDBOT,
        label="ClawdBot",
        relative_config_path=".clawdbot/clawdbot.json",
    ),
    BotId.MOLTBOT: BotMetadata(
        bot_id=BotId.MOLTBOT,
        label="MoltBot",
        relative_config_path=".moltbot/moltbot.json",
    ),
}

BOT_IDS: list[str] = [bot.value for bot in BOT_CATALOG]


def list_targets() -> list[BotMetadata]:
    return list(BOT_CATALOG.values())


def find_bot(bot_id: str | None) -> BotMetadata | None:
    if not bot_id:
        return None
    try:
        return BOT_CATALOG[BotId(bot_id)]
    except ValueError:
        return None


def is_known_bot(bot_id: str | None) -> bool:
    return find_bot(bot_id) is not None


def resolve_path(bot_id: str, home: Path | None = None) -> Path | None:
    bot = find_bot(bot_id)
    if bot is None:
        return None
    return bot.config_path(home)
