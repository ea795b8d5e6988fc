import logging
from pathlib import Path
from typing import Any, Callable

from clawd_models.bots.resolver import ResolvedConfig
from clawd_models.config.document import initial_document, touch
from clawd_models.config.repository import BotConfigRepository
from clawd_models.locking import config_lock
from clawd_models.operations.transfer import import_document, read_import_file


logger = logging.getLogger(__name__)

Mutation = Callable[[dict[str, Any]], dict[str, Any]]


class BotConfigService:
    def __init__(
        self,
        resolved: ResolvedConfig,
        repository: BotConfigRepository | None = None,
        lock: bool = False,
    ) -> None:
        self.resolved = resolved
        self.repository = repository or BotConfigRepository(resolved.config_path)
        self.lock = lock

    @property
    def label(self) -> str:
        return self.resolved.bot.label

    @property
    def config_path(self) -> Path:
        return self.repository.config_path

    def load(self) -> dict[str, Any]:
        return self.repository.load()

    def update(self, mutation: Mutation) -> dict[str, Any]:
        with config_lock(self.config_path, self.lock):
            current = self.repository.load()
            updated = touch(mutation(current))
            self.repository.save(updated)
        return updated

    def import_from(self, source: Path) -> dict[str, Any]:
        imported = read_import_file(source, self.repository)
        document = import_document(imported)
        with config_lock(self.config_path, self.lock):
            self.repository.save(document)
        logger.debug("imported %s into %s", source, self.config_path)
        return document


def initialize_config(
    repository: BotConfigRepository, home: Path | None = None
) -> bool:
    if repository.exists():
        return False
    repository.save(initial_document(home))
    return True
