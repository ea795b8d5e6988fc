from typing import Any

from rich.console import Console, Group
from rich.markup import escape
from rich.text import Text

from clawd_models.constants import TROUBLESHOOTING_HINTS
from clawd_models.errors import ClawdModelsError
from clawd_models.operations.agents import AgentRow
from clawd_models.operations.auth import ProfileRow
from clawd_models.operations.gateway import GatewaySummary
from clawd_models.probe.builder import TestRequest
from clawd_models.probe.masking import display_headers
from clawd_models.probe.transport import TestResponse
from clawd_models.tui.enums import UIStyle, status_style
from clawd_models.tui.sections import UISection
from clawd_models.tui.tables import (
    AgentsTable,
    GatewayTable,
    ModelsTable,
    ProbeTable,
    ProfilesTable,
    ProvidersTable,
)
from clawd_models.utils import compact_home_path, compact_home_paths_in_text, dump_json


class ConfigConsoleUI:
    def __init__(
        self, console: Console | None = None, err_console: Console | None = None
    ) -> None:
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def render_saved(self, title: str, message: str) -> None:
        self.console.print(
            UISection.note(title, Text(message), style=UIStyle.GREEN.value)
        )

    def render_notice(self, title: str, message: str) -> None:
        self.err_console.print(
            UISection.note(
                title,
                Text(compact_home_paths_in_text(message)),
                style=UIStyle.DIM.value,
            )
        )

    def render_warning(self, title: str, message: str) -> None:
        self.err_console.print(
            UISection.note(title, Text(message), style=UIStyle.YELLOW.value)
        )

    def render_refused(self, error: ClawdModelsError) -> None:
        self.err_console.print(
            UISection.note(
                "refused",
                Text(compact_home_paths_in_text(str(error))),
                style=UIStyle.YELLOW.value,
            )
        )

    def render_config_location(self, label: str, path: str) -> None:
        self.console.print(
            UISection.note(
                "config",
                f"[bold]{escape(label)}[/bold]: {escape(compact_home_path(path))}",
                style=UIStyle.DIM.value,
            )
        )

    def render_providers(self, providers: dict[str, dict[str, Any]]) -> None:
        if not providers:
            self.console.print(
                UISection.note(
                    "providers", "No providers configured.", style=UIStyle.YELLOW.value
                )
            )
            return
        self.console.print(
            UISection.wrap(
                "providers",
                ProvidersTable.providers_table(providers),
                style=UIStyle.BLUE.value,
            )
        )

    def render_models(
        self,
        listing: dict[str, list[dict[str, Any]]],
        provider_name: str | None = None,
    ) -> None:
        title = f"models in {provider_name}" if provider_name else "models"
        self.console.print(
            UISection.wrap(
                escape(title),
                ModelsTable.models_group(listing),
                style=UIStyle.CYAN.value,
            )
        )

    def render_agents(self, rows: list[AgentRow]) -> None:
        if not rows:
            self.console.print(
                UISection.note(
                    "agents", "No agents configured.", style=UIStyle.YELLOW.value
                )
            )
            return
        self.console.print(
            UISection.wrap(
                "agents", AgentsTable.agents_group(rows), style=UIStyle.BLUE.value
            )
        )

    def render_gateway(self, summary: GatewaySummary) -> None:
        self.console.print(
            UISection.wrap(
                "gateway",
                GatewayTable.summary_block(summary),
                style=UIStyle.BLUE.value,
            )
        )

    def render_profiles(
        self, configured: list[ProfileRow], supported: list[ProfileRow]
    ) -> None:
        self.console.print(
            UISection.wrap(
                "configured in auth",
                ProfilesTable.profiles_table(configured),
                style=UIStyle.BLUE.value,
            )
        )
        self.console.print(
            UISection.wrap(
                "supported (from providers)",
                ProfilesTable.profiles_table(supported),
                style=UIStyle.CYAN.value,
            )
        )

    def render_probe_request(self, label: str, request: TestRequest) -> None:
        self.console.print(
            UISection.wrap(
                "test request",
                ProbeTable.request_block(request),
                style=UIStyle.BLUE.value,
                subtitle=escape(f"using {label} configuration"),
            )
        )
        if not request.has_api_key:
            self.render_warning(
                "warning", "No API key configured for this provider."
            )
        self.console.print(
            UISection.wrap(
                "request headers",
                ProbeTable.headers_table(display_headers(request.headers)),
                style=UIStyle.CYAN.value,
            )
        )

    def render_probe_response(self, api: str, response: TestResponse) -> None:
        self.console.print(
            UISection.wrap(
                "response headers",
                ProbeTable.headers_table(response.headers),
                style=UIStyle.CYAN.value,
            )
        )
        style = status_style(response.status)
        self.console.print(
            UISection.wrap(
                "response",
                Group(
                    Text.assemble(("Status: ", "bold"), (str(response.status), style)),
                    Text(dump_json(response.body)),
                ),
                style=style,
            )
        )
        if response.status == 404:
            hints = TROUBLESHOOTING_HINTS.get(api)
            if hints:
                self.console.print(
                    UISection.note(
                        "troubleshooting",
                        Text("\n".join(hints)),
                        style=UIStyle.YELLOW.value,
                    )
                )

    def render_transport_error(self, error: ClawdModelsError) -> None:
        self.err_console.print(
            UISection.note("request failed", Text(str(error)), style=UIStyle.RED.value)
        )
