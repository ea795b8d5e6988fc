from copy import deepcopy
from dataclasses import dataclass
from typing import Any

from clawd_models.constants import PROVIDER_DEFAULTS
from clawd_models.errors import ProviderNotFoundError
from clawd_models.operations.common import providers_of, read_section


@dataclass(frozen=True)
class ProviderSpec:
    name: str
    base_url: str
    api: str = PROVIDER_DEFAULTS["api"]
    auth: str = PROVIDER_DEFAULTS["auth"]
    api_key: str | None = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "baseUrl": self.base_url,
            "api": self.api,
            "auth": self.auth,
            "models": [],
        }
        if self.api_key:
            payload["apiKey"] = self.api_key
        return payload


def add_provider(document: dict[str, Any], spec: ProviderSpec) -> dict[str, Any]:
    updated = deepcopy(document)
    providers_of(updated)[spec.name] = spec.as_dict()
    return updated


def remove_provider(document: dict[str, Any], name: str) -> dict[str, Any]:
    updated = deepcopy(document)
    providers = providers_of(updated)
    if name not in providers:
        raise ProviderNotFoundError(name)
    del providers[name]
    return updated


def list_providers(document: dict[str, Any]) -> dict[str, dict[str, Any]]:
    providers = read_section(document, "models", "providers")
    if not isinstance(providers, dict):
        return {}
    return {
        name: provider
        for name, provider in providers.items()
        if isinstance(provider, dict)
    }
