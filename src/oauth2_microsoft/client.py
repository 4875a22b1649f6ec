"""Generic OAuth2 authorization-code client driven by provider hooks.

The client owns the flow (authorize URL, code exchange, refresh, authenticated
requests, resource owner lookup). Everything provider-specific is read from an
``OAuth2Provider``: endpoints, scopes, header construction, response checks
and resource owner construction.

Example usage:
    from oauth2_microsoft.client import OAuth2Client
    from oauth2_microsoft.providers import MicrosoftProvider

    provider = MicrosoftProvider(config)
    client = OAuth2Client(provider, client_id=config.client_id, client_secret=config.client_secret)
    url = client.build_authorize_url(redirect_uri=client.build_callback_url(), state=state)
    token = await client.exchange_code(code=code, redirect_uri=client.build_callback_url())
    owner = await client.get_resource_owner(token)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import urlencode

from mcp.shared._httpx_utils import create_mcp_http_client

from .contracts import (
    AccessToken,
    AccessTokenType,
    HttpResponse,
    InvalidResponseShape,
    OAuth2Provider,
    ResourceOwner,
    UserInfo,
)
from .models import HttpTransportConfigModel
from .url_utils import URLBuilder

logger = logging.getLogger(__name__)


class OAuth2Client:
    """OAuth2 client composed with a provider that supplies the hooks."""

    def __init__(
        self,
        provider: OAuth2Provider,
        *,
        client_id: str,
        client_secret: str,
        callback_path: str = "/callback",
        transport_config: HttpTransportConfigModel | None = None,
        host: str | None = None,
        port: int | None = None,
    ):
        self.provider = provider
        self.client_id = client_id
        self.client_secret = client_secret
        self._callback_path = callback_path
        self.host = host
        self.port = port
        self.url_builder = URLBuilder(transport_config)

    @property
    def provider_name(self) -> str:
        return self.provider.provider_name

    @property
    def callback_path(self) -> str:
        return self._callback_path

    def build_callback_url(self) -> str:
        """Public helper to build callback URL for router registration."""
        return self.url_builder.build_callback_url(
            self._callback_path, host=self.host, port=self.port
        )

    def build_authorize_url(
        self,
        *,
        redirect_uri: str,
        state: str,
        scopes: Sequence[str] | None = None,
        extra_params: Mapping[str, str] | None = None,
    ) -> str:
        scope_list = list(scopes) if scopes else self.provider.default_scopes()
        params: list[tuple[str, str]] = [
            ("client_id", self.client_id),
            ("redirect_uri", redirect_uri),
            ("response_type", "code"),
            ("scope", self.provider.scope_separator().join(scope_list)),
            ("state", state),
        ]
        if extra_params:
            params.extend(extra_params.items())
        query_string = urlencode(params, doseq=True)
        base_url = self.provider.authorization_endpoint()
        separator = "&" if "?" in base_url else "?"
        return f"{base_url}{separator}{query_string}"

    async def exchange_code(
        self,
        *,
        code: str,
        redirect_uri: str,
        scopes: Sequence[str] | None = None,
    ) -> AccessToken:
        payload: dict[str, str] = {
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "redirect_uri": redirect_uri,
        }
        if scopes:
            payload["scope"] = self.provider.scope_separator().join(scopes)
        return await self._request_token(payload=payload, context="exchange_code")

    async def refresh_token(
        self, *, refresh_token: str, scopes: Sequence[str] | None = None
    ) -> AccessToken:
        payload: dict[str, str] = {
            "grant_type": "refresh_token",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "refresh_token": refresh_token,
        }
        if scopes:
            payload["scope"] = self.provider.scope_separator().join(scopes)

        token = await self._request_token(payload=payload, context="refresh_token")
        if token.refresh_token is None:
            token = token.model_copy(update={"refresh_token": refresh_token})
        return token

    def get_authenticated_headers(
        self,
        token: AccessToken | str | None = None,
        token_type: AccessTokenType = AccessTokenType.NONE,
    ) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if token is not None:
            headers.update(self.provider.build_authorization_headers(token, token_type))
        return headers

    async def request(
        self,
        method: str,
        url: str,
        token: AccessToken | str | None = None,
        token_type: AccessTokenType = AccessTokenType.NONE,
        **kwargs: Any,
    ) -> HttpResponse:
        """Send a request with the provider's authorization headers attached."""
        headers = self.get_authenticated_headers(token, token_type)
        headers.update(kwargs.pop("headers", None) or {})
        async with create_mcp_http_client() as client:
            resp: HttpResponse = await client.request(method, url, headers=headers, **kwargs)
        return resp

    def parse_response(
        self, response: HttpResponse, *, endpoint: str = "unknown"
    ) -> dict[str, Any]:
        """Decode a response body that must be a JSON object.

        JSON syntax errors propagate from ``response.json()`` unchanged.
        """
        data = response.json()
        if not isinstance(data, dict):
            logger.warning(
                "Provider endpoint returned non-object JSON",
                extra={
                    "provider": self.provider_name,
                    "endpoint": endpoint,
                    "status_code": response.status_code,
                },
            )
            raise InvalidResponseShape(status_code=response.status_code)
        return data

    async def fetch_resource_owner_details(self, token: AccessToken | str) -> dict[str, Any]:
        """Request resource owner details and return the checked payload."""
        url = self.provider.resource_owner_endpoint(token)
        resp = await self.request(
            "GET", url, token, token_type=self.provider.resource_owner_token_type
        )
        data = self.parse_response(resp, endpoint="resource_owner")
        self.provider.check_response(resp, data)
        return data

    async def get_resource_owner(self, token: AccessToken | str) -> ResourceOwner:
        data = await self.fetch_resource_owner_details(token)
        return self.provider.create_resource_owner(data, token)

    async def fetch_user_info(self, *, access_token: str) -> UserInfo:
        owner = await self.get_resource_owner(access_token)
        return owner.to_user_info(self.provider_name)

    # ── helpers ──────────────────────────────────────────────────────────────
    async def _request_token(self, *, payload: Mapping[str, str], context: str) -> AccessToken:
        url = self.provider.token_endpoint(payload)
        async with create_mcp_http_client() as client:
            resp: HttpResponse = await client.post(
                url,
                data=dict(payload),
                headers={
                    "Content-Type": "application/x-www-form-urlencoded",
                    "Accept": "application/json",
                },
            )

        data = self.parse_response(resp, endpoint="token")
        self.provider.check_response(resp, data)
        if not data.get("access_token"):
            logger.warning(
                "Token endpoint response missing access_token",
                extra={
                    "provider": self.provider_name,
                    "endpoint": "token",
                    "context": context,
                    "status_code": resp.status_code,
                },
            )
        return AccessToken.from_response(data)
