from copy import deepcopy
from dataclasses import dataclass
from typing import Any

from clawd_models.constants import MAIN_AGENT_ID
from clawd_models.errors import AgentNotFoundError, DuplicateAgentError
from clawd_models.operations.common import (
    agent_defaults_of,
    agents_of,
    ensure_dict,
    read_section,
)


@dataclass(frozen=True)
class AgentSpec:
    agent_id: str
    name: str | None = None
    model: str | None = None
    workspace: str | None = None
    agent_dir: str | None = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"id": self.agent_id}
        optional = {
            "name": self.name,
            "model": self.model,
            "workspace": self.workspace,
            "agentDir": self.agent_dir,
        }
        for key, value in optional.items():
            if value:
                payload[key] = value
        return payload


@dataclass(frozen=True)
class AgentRow:
    agent_id: str
    name: str | None
    model: str | None
    workspace: str | None
    agent_dir: str | None
    max_concurrent: int | None = None
    subagents_max_concurrent: int | None = None


def _find_agent_index(agents: list[Any], agent_id: str) -> int | None:
    for index, agent in enumerate(agents):
        if isinstance(agent, dict) and agent.get("id") == agent_id:
            return index
    return None


def add_agent(document: dict[str, Any], spec: AgentSpec) -> dict[str, Any]:
    updated = deepcopy(document)
    agents = agents_of(updated)
    if _find_agent_index(agents, spec.agent_id) is not None:
        raise DuplicateAgentError(spec.agent_id)
    agents.append(spec.as_dict())
    return updated


def remove_agent(document: dict[str, Any], agent_id: str) -> dict[str, Any]:
    updated = deepcopy(document)
    agents = agents_of(updated)
    index = _find_agent_index(agents, agent_id)
    if index is None:
        raise AgentNotFoundError(agent_id)
    del agents[index]
    return updated


def set_default_model(
    document: dict[str, Any], model: str, agent: str | None = None
) -> dict[str, Any]:
    # There is a single global primary slot; `agent` does not select storage.
    updated = deepcopy(document)
    ensure_dict(agent_defaults_of(updated), "model")["primary"] = model
    return updated


def list_agents(document: dict[str, Any]) -> list[AgentRow]:
    agents = read_section(document, "agents", "list")
    defaults = read_section(document, "agents", "defaults")
    if not isinstance(defaults, dict):
        defaults = {}
    primary = read_section(defaults, "model", "primary")

    rows: list[AgentRow] = []
    for agent in agents if isinstance(agents, list) else []:
        if not isinstance(agent, dict):
            continue
        agent_id = str(agent.get("id", ""))
        if agent_id == MAIN_AGENT_ID:
            rows.append(
                AgentRow(
                    agent_id=agent_id,
                    name=agent.get("name"),
                    model=primary or agent.get("model"),
                    workspace=defaults.get("workspace"),
                    agent_dir=agent.get("agentDir"),
                    max_concurrent=defaults.get("maxConcurrent"),
                    subagents_max_concurrent=read_section(
                        defaults, "subagents", "maxConcurrent"
                    ),
                )
            )
            continue
        rows.append(
            AgentRow(
                agent_id=agent_id,
                name=agent.get("name"),
                model=agent.get("model"),
                workspace=agent.get("workspace"),
                agent_dir=agent.get("agentDir"),
            )
        )
    return rows
