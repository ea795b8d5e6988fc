from pathlib import Path
from http.client import BadStatusLine
from urllib.error import URLError

import pytest

from clawd_models.__main__ import cli
from clawd_models.bots import PreferenceRepository


API_KEY = "sk-abcdefghijklmnopqrstuvwxyz0123456789"


@pytest.fixture(autouse=True)
def preferred_openclaw(openclaw_config: Path) -> Path:
    PreferenceRepository().save("openclaw")
    return openclaw_config


# --- providers ---


def test_providers_add_and_list(cli_runner, openclaw_config: Path, read_config):
    result = cli_runner.invoke(
        cli,
        [
            "providers:add",
            "-n",
            "anthropic",
            "-u",
            "https://api.anthropic.com",
            "--api",
            "anthropic-messages",
            "--auth",
            "bearer",
            "-k",
            "sk-ant",
        ],
    )

    assert result.exit_code == 0
    assert 'Provider "anthropic" added to OpenClaw.' in result.output
    assert read_config(openclaw_config)["models"]["providers"]["anthropic"] == {
        "baseUrl": "https://api.anthropic.com",
        "api": "anthropic-messages",
        "auth": "bearer",
        "apiKey": "sk-ant",
        "models": [],
    }

    listing = cli_runner.invoke(cli, ["providers:list"])
    assert listing.exit_code == 0
    assert "anthropic" in listing.output
    assert "qiniu" in listing.output


def test_providers_add_requires_base_url(cli_runner) -> None:
    result = cli_runner.invoke(cli, ["providers:add", "-n", "x"])

    assert result.exit_code == 2
    assert "--base-url" in result.output


def test_providers_remove_missing_is_refused(
    cli_runner, openclaw_config: Path
) -> None:
    before = openclaw_config.read_text(encoding="utf-8")

    result = cli_runner.invoke(cli, ["providers:remove", "-n", "ghost"])

    assert result.exit_code == 0
    assert 'Provider "ghost" not found.' in result.output
    assert openclaw_config.read_text(encoding="utf-8") == before


def test_providers_list_empty(cli_runner, openclaw_config: Path, write_json) -> None:
    write_json(openclaw_config, {})

    result = cli_runner.invoke(cli, ["providers:list"])

    assert result.exit_code == 0
    assert "No providers configured." in result.output


# --- models ---


def test_models_add_with_defaults(
    cli_runner, openclaw_config: Path, read_config
) -> None:
    result = cli_runner.invoke(
        cli,
        ["models:add", "-p", "qiniu", "-i", "glm-4", "--name", "GLM 4", "--reasoning"],
    )

    assert result.exit_code == 0
    assert 'Model "glm-4" added to provider "qiniu"' in result.output
    model = read_config(openclaw_config)["models"]["providers"]["qiniu"]["models"][-1]
    assert model["reasoning"] is True
    assert model["contextWindow"] == 200000
    assert model["maxTokens"] == 8192


def test_models_add_duplicate_is_refused(
    cli_runner, openclaw_config: Path, read_config
) -> None:
    args = ["models:add", "-p", "qiniu", "-i", "deepseek-v3", "--name", "Dup"]

    result = cli_runner.invoke(cli, args)

    assert result.exit_code == 0
    assert "already exists" in result.output
    models = read_config(openclaw_config)["models"]["providers"]["qiniu"]["models"]
    assert [model["id"] for model in models] == ["deepseek-v3"]


def test_models_add_to_missing_provider_is_refused(cli_runner) -> None:
    result = cli_runner.invoke(
        cli, ["models:add", "-p", "ghost", "-i", "m", "--name", "M"]
    )

    assert result.exit_code == 0
    assert 'Provider "ghost" not found.' in result.output


def test_models_remove(cli_runner, openclaw_config: Path, read_config) -> None:
    result = cli_runner.invoke(
        cli, ["models:remove", "-p", "qiniu", "-i", "deepseek-v3"]
    )

    assert result.exit_code == 0
    assert read_config(openclaw_config)["models"]["providers"]["qiniu"]["models"] == []


def test_models_list_filters_by_provider(cli_runner) -> None:
    result = cli_runner.invoke(cli, ["models:list", "--provider", "qiniu"])

    assert result.exit_code == 0
    assert "deepseek-v3" in result.output

    missing = cli_runner.invoke(cli, ["models:list", "--provider", "ghost"])
    assert missing.exit_code == 0
    assert 'Provider "ghost" not found.' in missing.output


# --- models:test ---


def test_models_test_sends_request_and_masks_key(cli_runner, fake_urlopen) -> None:
    calls = fake_urlopen(status=200, body={"choices": []})

    result = cli_runner.invoke(cli, ["models:test"])

    assert result.exit_code == 0
    assert len(calls) == 1
    assert calls[0].full_url == "https://api.qnaigc.com/v1/chat/completions"
    assert calls[0].get_header("X-api-key") == API_KEY
    assert API_KEY not in result.output
    assert "Status: 200" in result.output


def test_models_test_404_shows_troubleshooting(cli_runner, fake_urlopen) -> None:
    fake_urlopen(status=404, body={"error": "not found"})

    result = cli_runner.invoke(cli, ["models:test"])

    assert result.exit_code == 0
    assert "Status: 404" in result.output
    assert "troubleshooting" in result.output


def test_models_test_network_failure_is_reported(cli_runner, fake_urlopen) -> None:
    fake_urlopen(error=URLError("connection refused"))

    result = cli_runner.invoke(cli, ["models:test"])

    assert result.exit_code == 0
    assert "connection refused" in result.output


def test_models_test_non_http_reply_is_reported(cli_runner, fake_urlopen) -> None:
    fake_urlopen(error=BadStatusLine("SSH-2.0-OpenSSH_9.0"))

    result = cli_runner.invoke(cli, ["models:test"])

    assert result.exit_code == 0
    assert result.exception is None
    assert "Request failed" in result.output


def test_models_test_without_default_model(
    cli_runner, openclaw_config: Path, write_json, fake_urlopen
) -> None:
    calls = fake_urlopen()
    write_json(openclaw_config, {"agents": {"defaults": {"model": {"primary": None}}}})

    result = cli_runner.invoke(cli, ["models:test"])

    assert result.exit_code == 0
    assert "No default model configured." in result.output
    assert calls == []


def test_models_test_warns_without_api_key(
    cli_runner, openclaw_config: Path, read_config, write_json, fake_urlopen
) -> None:
    fake_urlopen()
    document = read_config(openclaw_config)
    del document["models"]["providers"]["qiniu"]["apiKey"]
    write_json(openclaw_config, document)

    result = cli_runner.invoke(cli, ["models:test"])

    assert result.exit_code == 0
    assert "No API key configured" in result.output


# --- agents ---


def test_agents_add_list_remove(cli_runner, openclaw_config: Path, read_config):
    added = cli_runner.invoke(
        cli, ["agents:add", "-i", "review", "--name", "Reviewer", "--model", "q/m"]
    )
    assert added.exit_code == 0
    assert 'Agent "review" added to OpenClaw.' in added.output

    listing = cli_runner.invoke(cli, ["agents:list"])
    assert listing.exit_code == 0
    assert "review" in listing.output
    assert "Reviewer" in listing.output

    removed = cli_runner.invoke(cli, ["agents:remove", "-i", "review"])
    assert removed.exit_code == 0
    ids = [agent["id"] for agent in read_config(openclaw_config)["agents"]["list"]]
    assert ids == ["main", "code"]


def test_agents_remove_missing_is_refused(
    cli_runner, openclaw_config: Path, read_config
) -> None:
    result = cli_runner.invoke(cli, ["agents:remove", "-i", "ghost"])

    assert result.exit_code == 0
    assert 'Agent "ghost" not found.' in result.output
    assert len(read_config(openclaw_config)["agents"]["list"]) == 2


def test_agents_set_default(cli_runner, openclaw_config: Path, read_config) -> None:
    result = cli_runner.invoke(
        cli, ["agents:set-default", "-a", "code", "-m", "qiniu/glm-4"]
    )

    assert result.exit_code == 0
    assert 'set to "qiniu/glm-4"' in result.output
    defaults = read_config(openclaw_config)["agents"]["defaults"]
    assert defaults["model"]["primary"] == "qiniu/glm-4"


# --- gateway ---


def test_gateway_view_masks_token(cli_runner) -> None:
    result = cli_runner.invoke(cli, ["gateway:view"])

    assert result.exit_code == 0
    assert "18789" in result.output
    assert "01234567...4567" in result.output
    assert "0123456789abcdef0123456789abcdef01234567" not in result.output


def test_gateway_refresh_token(cli_runner, openclaw_config: Path, read_config):
    before = read_config(openclaw_config)["gateway"]["auth"]["token"]

    result = cli_runner.invoke(cli, ["gateway:refresh-token"])

    assert result.exit_code == 0
    after = read_config(openclaw_config)["gateway"]["auth"]["token"]
    assert after != before
    assert len(after) == 40


# --- auth profiles ---


def test_auth_add_profile_and_list(cli_runner, openclaw_config: Path, read_config):
    result = cli_runner.invoke(
        cli, ["auth:add-profile", "-n", "work", "-p", "qiniu", "-m", "bearer"]
    )

    assert result.exit_code == 0
    assert read_config(openclaw_config)["auth"]["profiles"]["work"] == {
        "provider": "qiniu",
        "mode": "bearer",
    }

    listing = cli_runner.invoke(cli, ["auth:profiles"])
    assert listing.exit_code == 0
    assert "[configured]" in listing.output
    assert "[default]" in listing.output
