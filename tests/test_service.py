import logging
import subprocess
from contextlib import nullcontext
from pathlib import Path

import pytest
from rich.logging import RichHandler

from clawd_models.bots import ConfigResolver
from clawd_models.config import BotConfigRepository
from clawd_models.editor import open_in_editor, resolve_editor
from clawd_models.errors import (
    ConfigSchemaError,
    EditorError,
    ImportFileNotFoundError,
    ProviderNotFoundError,
)
from clawd_models.locking import AdvisoryFileLock, config_lock, lock_path_for
from clawd_models.logs import configure_logging
from clawd_models.operations import remove_provider
from clawd_models.service import BotConfigService, initialize_config


@pytest.fixture
def service(openclaw_config: Path) -> BotConfigService:
    return BotConfigService(ConfigResolver().resolve("openclaw"))


# --- service ---


def test_update_applies_mutation_and_touches_meta(
    service: BotConfigService, openclaw_config: Path, read_config
) -> None:
    service.update(lambda document: remove_provider(document, "qiniu"))

    saved = read_config(openclaw_config)
    assert saved["models"]["providers"] == {}
    assert saved["meta"]["lastTouchedVersion"] != "2026.1.0"


def test_refused_update_leaves_file_untouched(
    service: BotConfigService, openclaw_config: Path
) -> None:
    before = openclaw_config.read_text(encoding="utf-8")

    with pytest.raises(ProviderNotFoundError):
        service.update(lambda document: remove_provider(document, "ghost"))

    assert openclaw_config.read_text(encoding="utf-8") == before


def test_locked_update_creates_sidecar_lock(openclaw_config: Path) -> None:
    service = BotConfigService(ConfigResolver().resolve("openclaw"), lock=True)

    service.update(lambda document: document)

    assert lock_path_for(openclaw_config).exists()


def test_import_replaces_document_with_fresh_meta(
    service: BotConfigService, tmp_path: Path, openclaw_config: Path, write_json
) -> None:
    source = tmp_path / "backup.json"
    write_json(source, {"gateway": {"port": 9000}, "meta": {"lastTouchedAt": "old"}})

    document = service.import_from(source)

    assert document["gateway"] == {"port": 9000}
    assert document["meta"]["lastTouchedAt"] != "old"
    assert BotConfigRepository(openclaw_config).load() == document


def test_import_missing_file(service: BotConfigService, tmp_path: Path) -> None:
    with pytest.raises(ImportFileNotFoundError):
        service.import_from(tmp_path / "missing.json")


def test_import_invalid_schema_keeps_target(
    service: BotConfigService, tmp_path: Path, openclaw_config: Path, write_json
) -> None:
    before = openclaw_config.read_text(encoding="utf-8")
    source = tmp_path / "bad.json"
    write_json(source, {"agents": {"list": [{"name": "no id"}]}})

    with pytest.raises(ConfigSchemaError):
        service.import_from(source)

    assert openclaw_config.read_text(encoding="utf-8") == before


def test_initialize_config_is_idempotent(openclaw_path: Path, read_config) -> None:
    repository = BotConfigRepository(openclaw_path)

    assert initialize_config(repository) is True
    first = read_config(openclaw_path)
    assert initialize_config(repository) is False
    assert read_config(openclaw_path) == first


# --- locking ---


def test_lock_path_is_sidecar(tmp_path: Path) -> None:
    assert lock_path_for(tmp_path / "openclaw.json") == tmp_path / "openclaw.json.lock"


def test_config_lock_disabled_is_noop(tmp_path: Path) -> None:
    assert isinstance(config_lock(tmp_path / "c.json", False), nullcontext)


def test_advisory_lock_can_be_reacquired(tmp_path: Path) -> None:
    lock = AdvisoryFileLock(tmp_path / "c.json")

    with lock:
        assert lock.lock_path == tmp_path / "c.json.lock"
        assert lock.lock_path.exists()
    with lock:
        pass


def test_advisory_lock_excludes_other_holders(tmp_path: Path) -> None:
    fcntl = pytest.importorskip("fcntl")
    lock = AdvisoryFileLock(tmp_path / "c.json")

    with lock:
        with lock.lock_path.open("a+") as other:
            with pytest.raises(BlockingIOError):
                fcntl.flock(other.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)

    with lock.lock_path.open("a+") as other:
        fcntl.flock(other.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        fcntl.flock(other.fileno(), fcntl.LOCK_UN)


# --- editor ---


def test_resolve_editor_prefers_env(monkeypatch) -> None:
    assert resolve_editor() == "vi"
    monkeypatch.setenv("EDITOR", "nano")
    assert resolve_editor() == "nano"


def test_open_in_editor_runs_command(tmp_path: Path, monkeypatch) -> None:
    calls = []

    def _run(command, check):
        calls.append((command, check))
        return subprocess.CompletedProcess(command, 0)

    monkeypatch.setattr("clawd_models.editor.subprocess.run", _run)

    open_in_editor(tmp_path / "c.json", editor="code --wait")

    assert calls == [(["code", "--wait", str(tmp_path / "c.json")], True)]


def test_open_in_editor_missing_binary(tmp_path: Path) -> None:
    with pytest.raises(EditorError, match="Editor not found"):
        open_in_editor(tmp_path / "c.json", editor="definitely-not-an-editor-xyz")


# --- logging ---


def test_configure_logging_installs_single_rich_handler() -> None:
    configure_logging(verbose=False)
    logger = configure_logging(verbose=True)

    handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
    assert len(handlers) == 1
    assert logger.level == logging.DEBUG
