import json
import logging
from pathlib import Path
from typing import Any

from clawd_models.config.document import fresh_meta
from clawd_models.config.repository import BotConfigRepository
from clawd_models.constants import CURRENT_VERSION
from clawd_models.errors import ConfigParseError, ImportFileNotFoundError
from clawd_models.utils import dump_json


logger = logging.getLogger(__name__)


def read_import_file(path: Path, repository: BotConfigRepository) -> dict[str, Any]:
    if not path.is_file():
        raise ImportFileNotFoundError(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigParseError(path, str(exc)) from exc
    repository.validate(payload, path)
    logger.debug("read import payload from %s", path)
    return payload


def import_document(
    imported: dict[str, Any], version: str = CURRENT_VERSION
) -> dict[str, Any]:
    document = dict(imported)
    document["meta"] = fresh_meta(version)
    return document


def export_document(document: dict[str, Any]) -> str:
    return dump_json(document)
