import json
import time
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

_SCHEMA_CACHE: dict[str, tuple[float, dict[str, Any]]] = {}

DEFAULT_SCHEMA_PATH = Path(__file__).resolve().parent / "schema.json"


def format_schema_error(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


class JsonSchemaRepository:
    def __init__(
        self, schema_path: Path = DEFAULT_SCHEMA_PATH, ttl_seconds: int = 3600
    ) -> None:
        self.schema_path = schema_path
        self.ttl_seconds = ttl_seconds

    def load_schema(self) -> dict[str, Any]:
        key = str(self.schema_path.resolve())
        cached = _SCHEMA_CACHE.get(key)
        now = time.time()
        if cached and now - cached[0] < self.ttl_seconds:
            return cached[1]
        schema = json.loads(self.schema_path.read_text(encoding="utf-8"))
        _SCHEMA_CACHE[key] = (now, schema)
        return schema

    def validator(self) -> Draft202012Validator:
        return Draft202012Validator(self.load_schema())


def first_schema_error(payload: Any, validator: Draft202012Validator) -> str | None:
    error = next(iter(validator.iter_errors(payload)), None)
    if error is None:
        return None
    return format_schema_error(error)
