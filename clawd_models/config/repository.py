import logging
from pathlib import Path
from typing import Any

from clawd_models.config.document import empty_document
from clawd_models.config.schema import JsonSchemaRepository, first_schema_error
from clawd_models.errors import ConfigParseError, ConfigSchemaError
from clawd_models.utils import read_json_safe, write_json


logger = logging.getLogger(__name__)


class BotConfigRepository:
    def __init__(
        self,
        config_path: Path,
        schema_repository: JsonSchemaRepository | None = None,
    ) -> None:
        self._config_path = config_path
        self._schema_repository = schema_repository or JsonSchemaRepository()
        self._validator = self._schema_repository.validator()

    @property
    def config_path(self) -> Path:
        return self._config_path

    def exists(self) -> bool:
        return self.config_path.exists()

    def load(self) -> dict[str, Any]:
        return self.parse_file(self.config_path)

    def parse_file(self, path: Path) -> dict[str, Any]:
        payload, error = read_json_safe(path)
        if error is not None:
            raise ConfigParseError(path, error)
        if payload is None:
            logger.debug("no config content at %s, using empty document", path)
            return empty_document()
        self.validate(payload, path)
        return payload

    def validate(self, payload: Any, path: Path | None = None) -> None:
        target = path or self.config_path
        if not isinstance(payload, dict):
            raise ConfigSchemaError(target, "must be a JSON object")
        detail = first_schema_error(payload, self._validator)
        if detail is not None:
            raise ConfigSchemaError(target, detail)

    def save(self, payload: dict[str, Any]) -> None:
        write_json(self.config_path, payload)
        logger.debug("saved config %s", self.config_path)
