from typing import Any


def ensure_dict(parent: dict[str, Any], key: str) -> dict[str, Any]:
    value = parent.get(key)
    if not isinstance(value, dict):
        value = {}
        parent[key] = value
    return value


def ensure_list(parent: dict[str, Any], key: str) -> list[Any]:
    value = parent.get(key)
    if not isinstance(value, list):
        value = []
        parent[key] = value
    return value


def providers_of(document: dict[str, Any]) -> dict[str, Any]:
    return ensure_dict(ensure_dict(document, "models"), "providers")


def agents_of(document: dict[str, Any]) -> list[Any]:
    return ensure_list(ensure_dict(document, "agents"), "list")


def agent_defaults_of(document: dict[str, Any]) -> dict[str, Any]:
    return ensure_dict(ensure_dict(document, "agents"), "defaults")


def profiles_of(document: dict[str, Any]) -> dict[str, Any]:
    return ensure_dict(ensure_dict(document, "auth"), "profiles")


def read_section(document: dict[str, Any], *keys: str) -> Any:
    current: Any = document
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current
