from typing import Any, Final

from clawd_models import __version__


CURRENT_VERSION: Final[str] = __version__

PREFERENCE_DIRNAME: Final[str] = ".clawd-models"
PREFERENCE_FILENAME: Final[str] = "bot.json"
PREFERENCE_KEY: Final[str] = "bot"

LOCK_ENV_VAR: Final[str] = "CLAWD_MODELS_LOCK"
LOCK_SUFFIX: Final[str] = ".lock"

DEFAULT_EDITOR: Final[str] = "vi"

API_OPENAI_COMPLETIONS: Final[str] = "openai-completions"
API_ANTHROPIC_MESSAGES: Final[str] = "anthropic-messages"
AUTH_BEARER: Final[str] = "bearer"
AUTH_API_KEY: Final[str] = "api-key"

GATEWAY_TOKEN_BYTES: Final[int] = 20

PROVIDER_DEFAULTS: Final[dict[str, str]] = {
    "api": API_OPENAI_COMPLETIONS,
    "auth": AUTH_API_KEY,
}

MODEL_DEFAULTS: Final[dict[str, Any]] = {
    "api": API_OPENAI_COMPLETIONS,
    "reasoning": False,
    "input": "text",
    "cost": 0,
    "contextWindow": 200000,
    "maxTokens": 8192,
}

MODEL_COST_FIELDS: Final[tuple[str, ...]] = (
    "input",
    "output",
    "cacheRead",
    "cacheWrite",
)

GATEWAY_DEFAULTS: Final[dict[str, Any]] = {
    "port": 18789,
    "mode": "local",
    "bind": "lan",
    "authMode": "token",
}

AGENT_DEFAULTS: Final[dict[str, int]] = {
    "maxConcurrent": 4,
    "subagentsMaxConcurrent": 8,
}

MAIN_AGENT_ID: Final[str] = "main"

TEST_PROMPT: Final[str] = "hi, there"
TEST_MAX_TOKENS: Final[int] = 10
ANTHROPIC_VERSION: Final[str] = "2023-06-01"

HEADER_MASK: Final[str] = "*" * 32
MASKED_HEADER_MARKERS: Final[tuple[str, ...]] = ("api", "authorization")

TROUBLESHOOTING_HINTS: Final[dict[str, tuple[str, ...]]] = {
    API_OPENAI_COMPLETIONS: (
        "For OpenAI-compatible APIs, ensure your base URL ends with /v1",
        "Expected format: <schema>://<hostname>[:port]/v1",
        "Example: https://api.example.com/v1",
    ),
    API_ANTHROPIC_MESSAGES: (
        "For Anthropic Messages APIs, ensure your base URL ends with /v1",
        "Expected format: <schema>://<hostname>[:port]/v1",
        "Example: https://api.anthropic.com/v1",
    ),
}
