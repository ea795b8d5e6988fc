from copy import deepcopy
from dataclasses import dataclass
from typing import Any

from clawd_models.constants import MODEL_COST_FIELDS, MODEL_DEFAULTS
from clawd_models.errors import (
    DuplicateModelError,
    ModelNotFoundError,
    ProviderNotFoundError,
)
from clawd_models.operations.common import ensure_list, providers_of
from clawd_models.operations.providers import list_providers
from clawd_models.utils import parse_int


@dataclass(frozen=True)
class ModelSpec:
    provider: str
    model_id: str
    name: str
    api: str = MODEL_DEFAULTS["api"]
    reasoning: bool = MODEL_DEFAULTS["reasoning"]
    input: str = MODEL_DEFAULTS["input"]
    input_cost: str | None = None
    output_cost: str | None = None
    cache_read: str | None = None
    cache_write: str | None = None
    context: str | None = None
    max_tokens: str | None = None

    def costs(self) -> dict[str, int]:
        raw = (self.input_cost, self.output_cost, self.cache_read, self.cache_write)
        return {
            field: parse_int(value, MODEL_DEFAULTS["cost"])
            for field, value in zip(MODEL_COST_FIELDS, raw)
        }

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.model_id,
            "name": self.name,
            "api": self.api,
            "reasoning": bool(self.reasoning),
            "input": split_input_types(self.input),
            "cost": self.costs(),
            "contextWindow": parse_int(self.context, MODEL_DEFAULTS["contextWindow"]),
            "maxTokens": parse_int(self.max_tokens, MODEL_DEFAULTS["maxTokens"]),
        }


def split_input_types(value: str | None) -> list[str]:
    items: list[str] = []
    for raw in (value or "").split(","):
        item = raw.strip()
        if item and item not in items:
            items.append(item)
    return items


def _find_model_index(models: list[Any], model_id: str) -> int | None:
    for index, model in enumerate(models):
        if isinstance(model, dict) and model.get("id") == model_id:
            return index
    return None


def add_model(document: dict[str, Any], spec: ModelSpec) -> dict[str, Any]:
    updated = deepcopy(document)
    provider = providers_of(updated).get(spec.provider)
    if not isinstance(provider, dict):
        raise ProviderNotFoundError(
            spec.provider, 'Add it first with "clawd-models providers:add".'
        )
    models = ensure_list(provider, "models")
    if _find_model_index(models, spec.model_id) is not None:
        raise DuplicateModelError(spec.provider, spec.model_id)
    models.append(spec.as_dict())
    return updated


def remove_model(
    document: dict[str, Any], provider_name: str, model_id: str
) -> dict[str, Any]:
    updated = deepcopy(document)
    provider = providers_of(updated).get(provider_name)
    if not isinstance(provider, dict):
        raise ProviderNotFoundError(provider_name)
    models = ensure_list(provider, "models")
    index = _find_model_index(models, model_id)
    if index is None:
        raise ModelNotFoundError(provider_name, model_id)
    del models[index]
    return updated


def list_models(
    document: dict[str, Any], provider_name: str | None = None
) -> dict[str, list[dict[str, Any]]]:
    providers = list_providers(document)
    if provider_name is not None:
        if provider_name not in providers:
            raise ProviderNotFoundError(provider_name)
        providers = {provider_name: providers[provider_name]}

    listing: dict[str, list[dict[str, Any]]] = {}
    for name, provider in providers.items():
        models = provider.get("models")
        if not isinstance(models, list):
            models = []
        listing[name] = [model for model in models if isinstance(model, dict)]
    return listing
