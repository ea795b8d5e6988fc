import json
import logging
from dataclasses import dataclass, replace
from http.client import HTTPException
from typing import Any, Callable
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from clawd_models import __version__
from clawd_models.errors import TransportError
from clawd_models.probe.builder import TestRequest


logger = logging.getLogger(__name__)

Opener = Callable[..., Any]


@dataclass(frozen=True)
class TestResponse:
    __test__ = False

    status: int
    headers: list[tuple[str, str]]
    body: Any

    @property
    def content_type(self) -> str:
        for name, value in self.headers:
            if name.lower() == "content-type":
                return value
        return ""


def _decode_body(raw: bytes, content_type: str) -> Any:
    text = raw.decode("utf-8", errors="replace")
    if "application/json" in content_type:
        try:
            return json.loads(text)
        except ValueError:
            return text
    return text


class HttpTransport:
    def __init__(
        self, opener: Opener | None = None, timeout: float | None = None
    ) -> None:
        self._opener = opener or urlopen
        self.timeout = timeout

    def send(self, request: TestRequest) -> TestResponse:
        headers = {"User-Agent": f"clawd-models/{__version__}", **request.headers}
        http_request = Request(
            request.endpoint,
            data=json.dumps(request.body).encode("utf-8"),
            headers=headers,
            method="POST",
        )
        logger.debug("POST %s", request.endpoint)
        kwargs: dict[str, Any] = {}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        try:
            with self._opener(http_request, **kwargs) as response:
                return self._to_response(
                    response.status, response.headers, response.read()
                )
        except HTTPError as exc:
            # Non-2xx statuses still carry a body to render.
            return self._to_response(exc.code, exc.headers, exc.read())
        except (URLError, HTTPException, OSError, ValueError) as exc:
            reason = getattr(exc, "reason", exc)
            raise TransportError(request.endpoint, str(reason)) from exc

    @staticmethod
    def _to_response(status: int, headers: Any, raw: bytes) -> TestResponse:
        response = TestResponse(
            status=status,
            headers=[(str(name), str(value)) for name, value in headers.items()],
            body=None,
        )
        logger.debug("response status %s (%d bytes)", status, len(raw))
        return replace(response, body=_decode_body(raw, response.content_type))
