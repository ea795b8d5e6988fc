from pathlib import Path
from typing import Any, Callable, Dict

import click

from clawd_models import __version__
from clawd_models.bots import (
    BOT_IDS,
    ConfigResolver,
    PreferenceRepository,
    find_bot,
    list_targets,
)
from clawd_models.config import BotConfigRepository
from clawd_models.constants import (
    LOCK_ENV_VAR,
    MODEL_DEFAULTS,
    PROVIDER_DEFAULTS,
)
from clawd_models.editor import open_in_editor
from clawd_models.errors import (
    ClawdModelsError,
    ConfigFileError,
    ImportFileNotFoundError,
    OperationRefused,
    PersistError,
    ResolutionError,
    TransportError,
)
from clawd_models.logs import configure_logging
from clawd_models.operations import (
    AgentSpec,
    ModelSpec,
    ProviderSpec,
    add_agent,
    add_model,
    add_profile,
    add_provider,
    configured_profiles,
    export_document,
    gateway_summary,
    list_agents,
    list_models,
    list_providers,
    refresh_token,
    remove_agent,
    remove_model,
    remove_provider,
    set_default_model,
    supported_profiles,
)
from clawd_models.probe import HttpTransport, build_test_request
from clawd_models.service import BotConfigService, initialize_config
from clawd_models.tui import ConfigConsoleUI
from clawd_models.utils import compact_home_path, dump_json


Mutation = Callable[[dict[str, Any]], dict[str, Any]]


def _service_from_obj(obj: Dict[str, Any], ui: ConfigConsoleUI) -> BotConfigService:
    resolver = ConfigResolver()
    explicit = obj.get("bot")
    try:
        resolved = resolver.resolve(explicit)
        if explicit:
            resolver.preferences.save(resolved.bot.id)
    except (ResolutionError, PersistError) as exc:
        raise click.ClickException(str(exc))

    if explicit:
        ui.render_notice("bot", f"Default bot set to: {resolved.bot.id}")
    elif resolved.was_auto_persisted:
        ui.render_notice("bot", f"Auto-detected bot: {resolved.bot.id}")
    return BotConfigService(resolved, lock=obj.get("lock", False))


def _load(obj: Dict[str, Any], ui: ConfigConsoleUI) -> tuple[BotConfigService, dict]:
    service = _service_from_obj(obj, ui)
    try:
        return service, service.load()
    except ClawdModelsError as exc:
        raise click.ClickException(str(exc))


def _update(
    obj: Dict[str, Any],
    ui: ConfigConsoleUI,
    title: str,
    mutation: Mutation,
    message: Callable[[str], str],
) -> None:
    service = _service_from_obj(obj, ui)
    try:
        service.update(mutation)
    except OperationRefused as exc:
        ui.render_refused(exc)
        return
    except ClawdModelsError as exc:
        raise click.ClickException(str(exc))
    ui.render_saved(title, message(service.label))


def _lift_bot_options(args: list[str]) -> list[str]:
    lifted: list[str] = []
    rest: list[str] = []
    index = 0
    while index < len(args):
        arg = args[index]
        if arg == "--":
            rest.extend(args[index:])
            break
        if arg == "--clear-bot" or arg.startswith("--bot="):
            lifted.append(arg)
        elif arg == "--bot":
            lifted.extend(args[index : index + 2])
            index += 1
        else:
            rest.append(arg)
        index += 1
    return lifted + rest


class BotAwareGroup(click.Group):
    """Group that accepts ``--bot`` and ``--clear-bot`` after the subcommand too."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        return super().parse_args(ctx, _lift_bot_options(list(args)))


def _clear_bot(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    PreferenceRepository().clear()
    ConfigConsoleUI().render_saved("bot", "Default bot cleared.")
    ctx.exit(0)


@click.group(
    cls=BotAwareGroup, context_settings={"help_option_names": ["-h", "--help"]}
)
@click.option(
    "--bot",
    metavar="<bot-id>",
    help=f"Target bot: {', '.join(BOT_IDS)} (also sets as default).",
)
@click.option(
    "--clear-bot",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_clear_bot,
    help="Clear the default bot setting.",
)
@click.option(
    "--lock",
    is_flag=True,
    envvar=LOCK_ENV_VAR,
    help="Hold an advisory lock on the config file while updating it.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(__version__, prog_name="clawd-models")
@click.pass_context
def cli(ctx: click.Context, bot: str | None, lock: bool, verbose: bool) -> None:
    """CLI tool to manage OpenClaw model configurations."""
    configure_logging(verbose)
    ctx.obj = {"bot": bot, "lock": lock}


# ============ Core Commands ============


@cli.command(help="Initialize a bot configuration with defaults.")
@click.pass_obj
def init(obj: Dict[str, Any]) -> None:
    ui = ConfigConsoleUI()
    bot_id = obj.get("bot")
    if bot_id:
        bot = find_bot(bot_id)
        if bot is None:
            raise click.ClickException(
                f"Unknown bot: {bot_id}. Available: {', '.join(BOT_IDS)}"
            )
    else:
        bot = list_targets()[0]

    repository = BotConfigRepository(bot.config_path())
    try:
        created = initialize_config(repository)
    except ClawdModelsError as exc:
        raise click.ClickException(str(exc))

    path = compact_home_path(repository.config_path)
    if not created:
        ui.render_warning(
            "init",
            f"Configuration already exists at {path}\n"
            'Use "clawd-models edit" to modify it.',
        )
        return
    ui.render_saved("init", f"Initialized new configuration at {path}")


@cli.command(help="View current configuration.")
@click.pass_obj
def view(obj: Dict[str, Any]) -> None:
    ui = ConfigConsoleUI()
    service, document = _load(obj, ui)
    click.echo(dump_json(document))
    ui.render_config_location(service.label, str(service.config_path))


@cli.command(help="Edit configuration in $EDITOR.")
@click.pass_obj
def edit(obj: Dict[str, Any]) -> None:
    ui = ConfigConsoleUI()
    service = _service_from_obj(obj, ui)
    try:
        service.update(lambda document: document)
    except ConfigFileError as exc:
        if isinstance(exc, PersistError):
            raise click.ClickException(str(exc))
        ui.render_warning("edit", f"{exc}\nOpening the file as-is.")

    try:
        open_in_editor(service.config_path)
    except ClawdModelsError as exc:
        raise click.ClickException(str(exc))
    ui.render_saved(
        "edit",
        f"Configuration updated at {service.label}: "
        f"{compact_home_path(service.config_path)}",
    )


# ============ Provider Commands ============


@cli.command("providers:add", help="Add a new model provider.")
@click.option("-n", "--name", required=True, help="Provider name (e.g., qiniu).")
@click.option("-u", "--base-url", required=True, help="Base API URL.")
@click.option("-k", "--api-key", help="API key for the provider endpoint.")
@click.option(
    "--api",
    default=PROVIDER_DEFAULTS["api"],
    show_default=True,
    help="API type (e.g., openai-completions, anthropic-messages).",
)
@click.option(
    "--auth",
    default=PROVIDER_DEFAULTS["auth"],
    show_default=True,
    help="Auth method (e.g., api-key, bearer).",
)
@click.pass_obj
def providers_add(
    obj: Dict[str, Any],
    name: str,
    base_url: str,
    api_key: str | None,
    api: str,
    auth: str,
) -> None:
    spec = ProviderSpec(
        name=name, base_url=base_url, api=api, auth=auth, api_key=api_key
    )
    _update(
        obj,
        ConfigConsoleUI(),
        "providers",
        lambda document: add_provider(document, spec),
        lambda label: f'Provider "{name}" added to {label}.',
    )


@cli.command("providers:remove", help="Remove a model provider.")
@click.option("-n", "--name", required=True, help="Provider name.")
@click.pass_obj
def providers_remove(obj: Dict[str, Any], name: str) -> None:
    _update(
        obj,
        ConfigConsoleUI(),
        "providers",
        lambda document: remove_provider(document, name),
        lambda label: f'Provider "{name}" removed from {label}.',
    )


@cli.command("providers:list", help="List all configured providers.")
@click.pass_obj
def providers_list(obj: Dict[str, Any]) -> None:
    ui = ConfigConsoleUI()
    _, document = _load(obj, ui)
    ui.render_providers(list_providers(document))


# ============ Model Commands ============


@cli.command("models:add", help="Add a model to a provider.")
@click.option("-p", "--provider", required=True, help="Provider name.")
@click.option("-i", "--id", "model_id", required=True, help="Model ID.")
@click.option("--name", required=True, help="Display name.")
@click.option(
    "--api", default=MODEL_DEFAULTS["api"], show_default=True, help="API type."
)
@click.option("--reasoning", is_flag=True, help="Model has reasoning capability.")
@click.option(
    "--input",
    "input_types",
    default=MODEL_DEFAULTS["input"],
    show_default=True,
    help="Input types (comma-separated: text,image,audio,video).",
)
@click.option("--input-cost", help="Input cost per 1M tokens.")
@click.option("--output-cost", help="Output cost per 1M tokens.")
@click.option("--cache-read", help="Cache read cost per 1M tokens.")
@click.option("--cache-write", help="Cache write cost per 1M tokens.")
@click.option(
    "--context",
    help=f"Context window size [default: {MODEL_DEFAULTS['contextWindow']}].",
)
@click.option(
    "--max-tokens",
    help=f"Max output tokens [default: {MODEL_DEFAULTS['maxTokens']}].",
)
@click.pass_obj
def models_add(
    obj: Dict[str, Any],
    provider: str,
    model_id: str,
    name: str,
    api: str,
    reasoning: bool,
    input_types: str,
    input_cost: str | None,
    output_cost: str | None,
    cache_read: str | None,
    cache_write: str | None,
    context: str | None,
    max_tokens: str | None,
) -> None:
    spec = ModelSpec(
        provider=provider,
        model_id=model_id,
        name=name,
        api=api,
        reasoning=reasoning,
        input=input_types,
        input_cost=input_cost,
        output_cost=output_cost,
        cache_read=cache_read,
        cache_write=cache_write,
        context=context,
        max_tokens=max_tokens,
    )
    _update(
        obj,
        ConfigConsoleUI(),
        "models",
        lambda document: add_model(document, spec),
        lambda label: (
            f'Model "{model_id}" added to provider "{provider}" in {label}.'
        ),
    )


@cli.command("models:remove", help="Remove a model from a provider.")
@click.option("-p", "--provider", required=True, help="Provider name.")
@click.option("-i", "--id", "model_id", required=True, help="Model ID.")
@click.pass_obj
def models_remove(obj: Dict[str, Any], provider: str, model_id: str) -> None:
    _update(
        obj,
        ConfigConsoleUI(),
        "models",
        lambda document: remove_model(document, provider, model_id),
        lambda label: (
            f'Model "{model_id}" removed from provider "{provider}" in {label}.'
        ),
    )


@cli.command("models:list", help="List all configured models.")
@click.option("--provider", help="Filter by provider.")
@click.pass_obj
def models_list(obj: Dict[str, Any], provider: str | None) -> None:
    ui = ConfigConsoleUI()
    _, document = _load(obj, ui)
    try:
        listing = list_models(document, provider)
    except OperationRefused as exc:
        ui.render_refused(exc)
        return
    ui.render_models(listing, provider_name=provider)


@cli.command("models:test", help="Send a test message to the default model.")
@click.pass_obj
def models_test(obj: Dict[str, Any]) -> None:
    ui = ConfigConsoleUI()
    service, document = _load(obj, ui)
    try:
        request = build_test_request(document)
    except OperationRefused as exc:
        ui.render_refused(exc)
        return

    ui.render_probe_request(service.label, request)
    try:
        response = HttpTransport().send(request)
    except TransportError as exc:
        ui.render_transport_error(exc)
        return
    ui.render_probe_response(request.api, response)


# ============ Agent Commands ============


@cli.command("agents:add", help="Add a new agent.")
@click.option("-i", "--id", "agent_id", required=True, help="Agent ID.")
@click.option("--name", help="Display name.")
@click.option("--model", help="Default model (format: provider/model-id).")
@click.option("--workspace", help="Workspace directory.")
@click.option("--agent-dir", help="Agent directory.")
@click.pass_obj
def agents_add(
    obj: Dict[str, Any],
    agent_id: str,
    name: str | None,
    model: str | None,
    workspace: str | None,
    agent_dir: str | None,
) -> None:
    spec = AgentSpec(
        agent_id=agent_id,
        name=name,
        model=model,
        workspace=workspace,
        agent_dir=agent_dir,
    )
    _update(
        obj,
        ConfigConsoleUI(),
        "agents",
        lambda document: add_agent(document, spec),
        lambda label: f'Agent "{agent_id}" added to {label}.',
    )


@cli.command("agents:remove", help="Remove an agent.")
@click.option("-i", "--id", "agent_id", required=True, help="Agent ID.")
@click.pass_obj
def agents_remove(obj: Dict[str, Any], agent_id: str) -> None:
    _update(
        obj,
        ConfigConsoleUI(),
        "agents",
        lambda document: remove_agent(document, agent_id),
        lambda label: f'Agent "{agent_id}" removed from {label}.',
    )


@cli.command("agents:list", help="List all configured agents.")
@click.pass_obj
def agents_list(obj: Dict[str, Any]) -> None:
    ui = ConfigConsoleUI()
    _, document = _load(obj, ui)
    ui.render_agents(list_agents(document))


@cli.command("agents:set-default", help="Set the default model.")
@click.option("-a", "--agent", required=True, help="Agent type (e.g., main, code).")
@click.option("-m", "--model", required=True, help="Model ID (provider/model-id).")
@click.pass_obj
def agents_set_default(obj: Dict[str, Any], agent: str, model: str) -> None:
    _update(
        obj,
        ConfigConsoleUI(),
        "agents",
        lambda document: set_default_model(document, model, agent=agent),
        lambda label: (
            f'Default model for agent "{agent}" set to "{model}" in {label}.'
        ),
    )


# ============ Gateway Commands ============


@cli.command("gateway:view", help="View gateway configuration.")
@click.pass_obj
def gateway_view(obj: Dict[str, Any]) -> None:
    ui = ConfigConsoleUI()
    _, document = _load(obj, ui)
    ui.render_gateway(gateway_summary(document))


@cli.command("gateway:refresh-token", help="Refresh gateway auth token.")
@click.pass_obj
def gateway_refresh_token(obj: Dict[str, Any]) -> None:
    _update(
        obj,
        ConfigConsoleUI(),
        "gateway",
        refresh_token,
        lambda label: f"Gateway auth token refreshed in {label}.",
    )


# ============ Auth Profile Commands ============


@cli.command("auth:profiles", help="List configured and supported auth profiles.")
@click.pass_obj
def auth_profiles(obj: Dict[str, Any]) -> None:
    ui = ConfigConsoleUI()
    _, document = _load(obj, ui)
    ui.render_profiles(configured_profiles(document), supported_profiles(document))


@cli.command("auth:add-profile", help="Add an auth profile.")
@click.option(
    "-n", "--name", required=True, help="Profile name (e.g., qiniu:default)."
)
@click.option("-p", "--provider", required=True, help="Auth provider.")
@click.option("-m", "--mode", required=True, help="Auth mode (api_key, bearer).")
@click.pass_obj
def auth_add_profile(obj: Dict[str, Any], name: str, provider: str, mode: str) -> None:
    _update(
        obj,
        ConfigConsoleUI(),
        "auth",
        lambda document: add_profile(document, name, provider, mode),
        lambda label: f'Auth profile "{name}" added to {label}.',
    )


# ============ Import/Export ============


@cli.command("import", help="Import configuration from a JSON file.")
@click.option(
    "-f",
    "--file",
    "source",
    required=True,
    type=click.Path(path_type=Path),
    help="Path to JSON file.",
)
@click.pass_obj
def import_config(obj: Dict[str, Any], source: Path) -> None:
    ui = ConfigConsoleUI()
    service = _service_from_obj(obj, ui)
    try:
        service.import_from(source)
    except ImportFileNotFoundError as exc:
        ui.render_refused(exc)
        return
    except ClawdModelsError as exc:
        raise click.ClickException(str(exc))
    ui.render_saved(
        "import", f"Configuration imported from {source} to {service.label}."
    )


@cli.command("export", help="Export configuration to stdout.")
@click.pass_obj
def export_config(obj: Dict[str, Any]) -> None:
    ui = ConfigConsoleUI()
    _, document = _load(obj, ui)
    click.echo(export_document(document))


def main() -> int:
    try:
        cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.exceptions.Abort:
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
