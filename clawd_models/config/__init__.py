from clawd_models.config.document import (
    empty_document,
    fresh_meta,
    initial_document,
    touch,
)
from clawd_models.config.repository import BotConfigRepository
from clawd_models.config.schema import JsonSchemaRepository

__all__ = [
    "BotConfigRepository",
    "JsonSchemaRepository",
    "empty_document",
    "fresh_meta",
    "initial_document",
    "touch",
]
