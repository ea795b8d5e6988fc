import sys
import json
from pathlib import Path
from typing import Any, Callable

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("EDITOR", raising=False)
    monkeypatch.delenv("CLAWD_MODELS_LOCK", raising=False)
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def write_json():
    def _write(path: Path, payload: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")

    return _write


@pytest.fixture
def read_config():
    def _read(path: Path) -> Any:
        return json.loads(path.read_text(encoding="utf-8"))

    return _read


@pytest.fixture
def openclaw_path(tmp_path: Path) -> Path:
    return tmp_path / ".openclaw" / "openclaw.json"


@pytest.fixture
def clawdbot_path(tmp_path: Path) -> Path:
    return tmp_path / ".clawdbot" / "clawdbot.json"


@pytest.fixture
def moltbot_path(tmp_path: Path) -> Path:
    return tmp_path / ".moltbot" / "moltbot.json"


@pytest.fixture
def preference_path(tmp_path: Path) -> Path:
    return tmp_path / ".clawd-models" / "bot.json"


@pytest.fixture
def sample_document() -> dict[str, Any]:
    return {
        "meta": {"lastTouchedVersion": "2026.1.0", "lastTouchedAt": "x"},
        "auth": {
            "profiles": {"qiniu:default": {"provider": "qiniu", "mode": "api_key"}}
        },
        "models": {
            "providers": {
                "qiniu": {
                    "baseUrl": "https://api.qnaigc.com/v1",
                    "api": "openai-completions",
                    "auth": "api-key",
                    "apiKey": "sk-abcdefghijklmnopqrstuvwxyz0123456789",
                    "models": [{"id": "deepseek-v3", "name": "DeepSeek V3"}],
                }
            }
        },
        "agents": {
            "defaults": {
                "model": {"primary": "qiniu/deepseek-v3"},
                "workspace": "/srv/workspace",
                "maxConcurrent": 4,
                "subagents": {"maxConcurrent": 8},
            },
            "list": [{"id": "main"}, {"id": "code", "model": "qiniu/deepseek-v3"}],
        },
        "gateway": {
            "port": 18789,
            "mode": "local",
            "bind": "lan",
            "auth": {
                "mode": "token",
                "token": "0123456789abcdef0123456789abcdef01234567",
            },
        },
    }


@pytest.fixture
def openclaw_config(
    openclaw_path: Path, write_json, sample_document: dict[str, Any]
) -> Path:
    write_json(openclaw_path, sample_document)
    return openclaw_path


@pytest.fixture
def cli_runner(tmp_path: Path) -> CliRunner:
    class HomeCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            env = dict(kwargs.pop("env", {}) or {})
            env.setdefault("HOME", str(tmp_path))
            kwargs["env"] = env
            return super().invoke(cli, args=args, **kwargs)

    return HomeCliRunner()


class FakeResponse:
    def __init__(self, status: int, headers: dict[str, str], body: bytes) -> None:
        self.status = status
        self.headers = headers
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        return None


@pytest.fixture
def fake_urlopen(monkeypatch) -> Callable[..., list[Any]]:
    def _install(
        status: int = 200,
        body: Any = None,
        headers: dict[str, str] | None = None,
        error: Exception | None = None,
    ) -> list[Any]:
        calls: list[Any] = []
        payload = json.dumps(body if body is not None else {"ok": True}).encode()
        response_headers = headers or {"Content-Type": "application/json"}

        def _urlopen(request: Any, **kwargs: Any) -> FakeResponse:
            calls.append(request)
            if error is not None:
                raise error
            return FakeResponse(status, response_headers, payload)

        monkeypatch.setattr("clawd_models.probe.transport.urlopen", _urlopen)
        return calls

    return _install
