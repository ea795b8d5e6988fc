from copy import deepcopy
from pathlib import Path
from typing import Any

from clawd_models.constants import AGENT_DEFAULTS, CURRENT_VERSION, GATEWAY_DEFAULTS
from clawd_models.utils import generate_token, now_iso


def fresh_meta(version: str = CURRENT_VERSION) -> dict[str, str]:
    return {"lastTouchedVersion": version, "lastTouchedAt": now_iso()}


def touch(document: dict[str, Any], version: str = CURRENT_VERSION) -> dict[str, Any]:
    touched = deepcopy(document)
    meta = touched.get("meta")
    if not isinstance(meta, dict):
        meta = {}
    meta.update(fresh_meta(version))
    touched["meta"] = meta
    return touched


def empty_document() -> dict[str, Any]:
    return {
        "meta": {},
        "auth": {"profiles": {}},
        "models": {"providers": {}},
        "agents": {"defaults": {"model": {"primary": None}}, "list": []},
        "gateway": {},
    }


def initial_document(home: Path | None = None) -> dict[str, Any]:
    home_dir = home or Path.home()
    return {
        "meta": fresh_meta(),
        "wizard": {
            "lastRunAt": None,
            "lastRunVersion": None,
            "lastRunCommand": None,
            "lastRunMode": None,
        },
        "auth": {"profiles": {}},
        "models": {"mode": "merge", "providers": {}},
        "agents": {
            "defaults": {
                "model": {"primary": None},
                "models": {},
                "workspace": str(home_dir / ".openclaw" / "workspace"),
                "maxConcurrent": AGENT_DEFAULTS["maxConcurrent"],
                "subagents": {
                    "maxConcurrent": AGENT_DEFAULTS["subagentsMaxConcurrent"]
                },
            },
            "list": [],
        },
        "messages": {"ackReactionScope": "group-mentions"},
        "commands": {"native": "auto", "nativeSkills": "auto"},
        "gateway": {
            "port": GATEWAY_DEFAULTS["port"],
            "mode": GATEWAY_DEFAULTS["mode"],
            "bind": GATEWAY_DEFAULTS["bind"],
            "auth": {"mode": GATEWAY_DEFAULTS["authMode"], "token": generate_token()},
            "tailscale": {"mode": "off", "resetOnExit": False},
        },
    }
