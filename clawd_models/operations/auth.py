from copy import deepcopy
from dataclasses import dataclass
from typing import Any

from clawd_models.constants import PROVIDER_DEFAULTS
from clawd_models.operations.common import profiles_of, read_section
from clawd_models.operations.providers import list_providers


@dataclass(frozen=True)
class ProfileRow:
    name: str
    provider: str
    mode: str
    tag: str


def add_profile(
    document: dict[str, Any], name: str, provider: str, mode: str
) -> dict[str, Any]:
    updated = deepcopy(document)
    profiles_of(updated)[name] = {"provider": provider, "mode": mode}
    return updated


def configured_profiles(document: dict[str, Any]) -> list[ProfileRow]:
    profiles = read_section(document, "auth", "profiles")
    if not isinstance(profiles, dict):
        return []
    return [
        ProfileRow(
            name=name,
            provider=str(profile.get("provider")),
            mode=str(profile.get("mode")),
            tag="configured",
        )
        for name, profile in profiles.items()
        if isinstance(profile, dict)
    ]


def supported_profiles(document: dict[str, Any]) -> list[ProfileRow]:
    profiles = read_section(document, "auth", "profiles")
    if not isinstance(profiles, dict):
        profiles = {}
    rows: list[ProfileRow] = []
    for provider_name, provider in list_providers(document).items():
        profile_name = f"{provider_name}:default"
        rows.append(
            ProfileRow(
                name=profile_name,
                provider=provider_name,
                mode=provider.get("auth") or PROVIDER_DEFAULTS["auth"],
                tag="default" if profile_name in profiles else "provider",
            )
        )
    return rows
