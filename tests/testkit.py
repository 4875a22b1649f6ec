"""Test utilities for provider and client tests.

Provides a minimal async HTTP client fake matching the shape used by
``OAuth2Client`` via `create_mcp_http_client()`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

CREATE_CLIENT_PATH = "oauth2_microsoft.client.create_mcp_http_client"


@dataclass(frozen=True)
class FakeResponse:
    status_code: int
    payload: Any
    text: str = ""
    reason_phrase: str = "OK"

    def json(self) -> Any:
        return self.payload


@dataclass(frozen=True)
class FakeResponseJsonError(FakeResponse):
    def json(self) -> Any:
        raise ValueError("invalid json")


@dataclass
class RecordedCall:
    method: str
    url: str
    kwargs: dict[str, Any] = field(default_factory=dict)

    @property
    def headers(self) -> dict[str, str]:
        return dict(self.kwargs.get("headers") or {})


class FakeAsyncHttpClient:
    """Minimal async context manager standing in for ``httpx.AsyncClient``.

    - `post()` returns `post_response`
    - `request("GET", ...)` returns `get_response`, or the result of
      `get_handler(url, headers)` when one is given
    - Every call is recorded in `calls`
    """

    def __init__(
        self,
        *,
        post_response: FakeResponse | None = None,
        get_response: FakeResponse | None = None,
        get_handler: Any = None,
    ) -> None:
        self._post_response = post_response or FakeResponse(200, {})
        self._get_response = get_response or FakeResponse(200, {})
        self._get_handler = get_handler
        self.calls: list[RecordedCall] = []

    async def __aenter__(self) -> "FakeAsyncHttpClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: Any,
    ) -> bool:
        return False

    async def post(self, url: Any, **kwargs: Any) -> FakeResponse:
        self.calls.append(RecordedCall("POST", str(url), kwargs))
        return self._post_response

    async def request(self, method: str, url: Any, **kwargs: Any) -> FakeResponse:
        call = RecordedCall(method, str(url), kwargs)
        self.calls.append(call)
        if method == "POST":
            return self._post_response
        if self._get_handler is not None:
            return await self._get_handler(call.url, call.headers)
        return self._get_response

    @property
    def last_call(self) -> RecordedCall:
        return self.calls[-1]


def patch_http_client(monkeypatch: Any, fake_client: Any) -> None:
    """Patch the client module's `create_mcp_http_client`."""

    monkeypatch.setattr(CREATE_CLIENT_PATH, lambda: fake_client)
