from dataclasses import dataclass
from typing import Any

from clawd_models.constants import (
    ANTHROPIC_VERSION,
    API_ANTHROPIC_MESSAGES,
    API_OPENAI_COMPLETIONS,
    AUTH_BEARER,
    TEST_MAX_TOKENS,
    TEST_PROMPT,
)
from clawd_models.errors import (
    NoDefaultModelError,
    ProviderNotFoundError,
    UnsupportedApiError,
)
from clawd_models.operations.common import read_section
from clawd_models.operations.providers import list_providers


@dataclass(frozen=True)
class TestRequest:
    __test__ = False

    endpoint: str
    headers: dict[str, str]
    body: dict[str, Any]
    primary: str
    provider_name: str
    model_id: str
    api: str
    base_url: str
    has_api_key: bool = False


def split_primary(primary: str) -> tuple[str, str]:
    provider_name, _, model_id = primary.partition("/")
    return provider_name, model_id


def _strip_trailing_slash(base_url: str) -> str:
    return base_url[:-1] if base_url.endswith("/") else base_url


def build_test_request(document: dict[str, Any]) -> TestRequest:
    primary = read_section(document, "agents", "defaults", "model", "primary")
    if not isinstance(primary, str) or not primary:
        raise NoDefaultModelError()

    provider_name, model_id = split_primary(primary)
    provider = list_providers(document).get(provider_name)
    if provider is None:
        raise ProviderNotFoundError(provider_name)

    api = provider.get("api")
    base_url = _strip_trailing_slash(str(provider.get("baseUrl") or ""))
    if api == API_OPENAI_COMPLETIONS:
        endpoint = f"{base_url}/chat/completions"
    elif api == API_ANTHROPIC_MESSAGES:
        endpoint = f"{base_url}/v1/messages"
    else:
        raise UnsupportedApiError(api)

    headers: dict[str, str] = {}
    api_key = provider.get("apiKey")
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
        if provider.get("auth") != AUTH_BEARER:
            headers["X-API-Key"] = api_key

    headers["Content-Type"] = "application/json"
    if api == API_ANTHROPIC_MESSAGES:
        headers["anthropic-version"] = ANTHROPIC_VERSION
    body = {
        "model": model_id,
        "messages": [{"role": "user", "content": TEST_PROMPT}],
        "max_tokens": TEST_MAX_TOKENS,
    }

    return TestRequest(
        endpoint=endpoint,
        headers=headers,
        body=body,
        primary=primary,
        provider_name=provider_name,
        model_id=model_id,
        api=api,
        base_url=str(provider.get("baseUrl") or ""),
        has_api_key=bool(api_key),
    )
