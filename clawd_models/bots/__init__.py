from clawd_models.bots.preferences import PreferenceRepository
from clawd_models.bots.registry import (
    BOT_CATALOG,
    BOT_IDS,
    BotId,
    BotMetadata,
    find_bot,
    list_targets,
    resolve_path,
)
from clawd_models.bots.resolver import ConfigResolver, ResolvedConfig

__all__ = [
    "BOT_CATALOG",
    "BOT_IDS",
    "BotId",
    "BotMetadata",
    "ConfigResolver",
    "PreferenceRepository",
    "ResolvedConfig",
    "find_bot",
    "list_targets",
    "resolve_path",
]
