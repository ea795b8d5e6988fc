from clawd_models.operations.agents import (
    AgentRow,
    AgentSpec,
    add_agent,
    list_agents,
    remove_agent,
    set_default_model,
)
from clawd_models.operations.auth import (
    ProfileRow,
    add_profile,
    configured_profiles,
    supported_profiles,
)
from clawd_models.operations.gateway import (
    GatewaySummary,
    gateway_summary,
    refresh_token,
)
from clawd_models.operations.models import (
    ModelSpec,
    add_model,
    list_models,
    remove_model,
)
from clawd_models.operations.providers import (
    ProviderSpec,
    add_provider,
    list_providers,
    remove_provider,
)
from clawd_models.operations.transfer import (
    export_document,
    import_document,
    read_import_file,
)

__all__ = [
    "AgentRow",
    "AgentSpec",
    "GatewaySummary",
    "ModelSpec",
    "ProfileRow",
    "ProviderSpec",
    "add_agent",
    "add_model",
    "add_profile",
    "add_provider",
    "configured_profiles",
    "export_document",
    "gateway_summary",
    "import_document",
    "list_agents",
    "list_models",
    "list_providers",
    "read_import_file",
    "refresh_token",
    "remove_agent",
    "remove_model",
    "remove_provider",
    "set_default_model",
    "supported_profiles",
]
