from typing import Any

from rich.console import Group, RenderableType
from rich.padding import Padding
from rich.table import Column, Table
from rich.text import Text

from clawd_models.operations.agents import AgentRow
from clawd_models.operations.auth import ProfileRow
from clawd_models.operations.gateway import GatewaySummary
from clawd_models.probe.builder import TestRequest
from clawd_models.tui.enums import UIStyle
from clawd_models.utils import compact_home_path


def _text(value: Any) -> Text:
    return Text("" if value is None else str(value))


class ProvidersTable:
    @staticmethod
    def providers_table(providers: dict[str, dict[str, Any]]) -> Table:
        table = Table(
            Column(header="Provider", width=16),
            Column(header="Base URL", overflow="fold"),
            Column(header="API", width=20),
            Column(header="Auth", width=8),
            Column(header="Models", width=6, justify="right"),
            expand=True,
            header_style="bold",
        )
        for name, provider in providers.items():
            models = provider.get("models")
            count = len(models) if isinstance(models, list) else 0
            table.add_row(
                _text(name),
                _text(provider.get("baseUrl")),
                _text(provider.get("api")),
                _text(provider.get("auth")),
                str(count),
            )
        return table


class ModelsTable:
    @staticmethod
    def models_group(listing: dict[str, list[dict[str, Any]]]) -> RenderableType:
        blocks = []
        for provider_name, models in listing.items():
            heading = Text(provider_name, style="bold")
            if not models:
                blocks.append(
                    Group(heading, Text("  (no models)", style=UIStyle.DIM.value))
                )
                continue
            table = Table(
                Column(header="Model", overflow="fold"),
                Column(header="Name", overflow="fold"),
                Column(header="Context", width=9, justify="right"),
                Column(header="Max", width=7, justify="right"),
                expand=True,
                header_style="bold",
            )
            for model in models:
                table.add_row(
                    _text(model.get("id")),
                    _text(model.get("name")),
                    _text(model.get("contextWindow")),
                    _text(model.get("maxTokens")),
                )
            blocks.append(Group(heading, Padding(table, (0, 0, 0, 2))))
        if not blocks:
            return Text("No providers configured.", style=UIStyle.DIM.value)
        return Group(*blocks)


class AgentsTable:
    @staticmethod
    def agent_block(row: AgentRow) -> Table:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column(overflow="fold")
        fields = [
            ("Name", row.name),
            ("Model", row.model),
            ("Workspace", compact_home_path(row.workspace) if row.workspace else None),
            ("Max Concurrent", row.max_concurrent),
            ("Subagents Max Concurrent", row.subagents_max_concurrent),
            ("Agent Dir", row.agent_dir),
        ]
        for label, value in fields:
            if value:
                table.add_row(label, _text(value))
        return table

    @staticmethod
    def agents_group(rows: list[AgentRow]) -> Group:
        blocks = []
        for row in rows:
            blocks.append(
                Group(
                    Text(row.agent_id, style="bold"),
                    Padding(AgentsTable.agent_block(row), (0, 0, 0, 2)),
                )
            )
        return Group(*blocks)


class GatewayTable:
    @staticmethod
    def summary_block(summary: GatewaySummary) -> Table:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Port", str(summary.port))
        table.add_row("Mode", _text(summary.mode))
        table.add_row("Bind", _text(summary.bind))
        table.add_row("Auth Mode", _text(summary.auth_mode))
        if summary.masked_token:
            table.add_row("Token", summary.masked_token)
        return table


class ProfilesTable:
    @staticmethod
    def profiles_table(rows: list[ProfileRow]) -> RenderableType:
        if not rows:
            return Text("(none)", style=UIStyle.DIM.value)
        table = Table(
            Column(header="Tag", width=12),
            Column(header="Profile", overflow="fold"),
            Column(header="Provider", overflow="fold"),
            Column(header="Mode", width=10),
            expand=True,
            header_style="bold",
        )
        for row in rows:
            table.add_row(
                _text(f"[{row.tag}]"),
                _text(row.name),
                _text(row.provider),
                _text(row.mode),
            )
        return table


class ProbeTable:
    @staticmethod
    def request_block(request: TestRequest) -> Table:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column(overflow="fold")
        table.add_row("Model", _text(request.primary))
        table.add_row("Provider", _text(request.provider_name))
        table.add_row("Base URL", _text(request.base_url))
        table.add_row("API", _text(request.api))
        table.add_row("Endpoint", _text(request.endpoint))
        return table

    @staticmethod
    def headers_table(headers: list[tuple[str, str]]) -> Table:
        table = Table(
            Column(header="Header", width=24),
            Column(header="Value", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for name, value in headers:
            table.add_row(_text(name), _text(value))
        return table
