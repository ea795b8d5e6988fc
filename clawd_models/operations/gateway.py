from copy import deepcopy
from dataclasses import dataclass
from typing import Any

from clawd_models.constants import GATEWAY_DEFAULTS
from clawd_models.operations.common import ensure_dict, read_section
from clawd_models.utils import generate_token


@dataclass(frozen=True)
class GatewaySummary:
    port: int
    mode: str
    bind: str
    auth_mode: str
    token: str | None

    @property
    def masked_token(self) -> str | None:
        if not self.token:
            return None
        return f"{self.token[:8]}...{self.token[-4:]}"


def gateway_summary(document: dict[str, Any]) -> GatewaySummary:
    gateway = read_section(document, "gateway")
    if not isinstance(gateway, dict):
        gateway = {}
    auth = gateway.get("auth")
    if not isinstance(auth, dict):
        auth = {}
    return GatewaySummary(
        port=gateway.get("port") or GATEWAY_DEFAULTS["port"],
        mode=gateway.get("mode") or GATEWAY_DEFAULTS["mode"],
        bind=gateway.get("bind") or GATEWAY_DEFAULTS["bind"],
        auth_mode=auth.get("mode") or GATEWAY_DEFAULTS["authMode"],
        token=auth.get("token") or None,
    )


def refresh_token(document: dict[str, Any]) -> dict[str, Any]:
    updated = deepcopy(document)
    gateway = ensure_dict(updated, "gateway")
    if not isinstance(gateway.get("auth"), dict):
        gateway["auth"] = {"mode": GATEWAY_DEFAULTS["authMode"]}
    gateway["auth"]["token"] = generate_token()
    return updated
