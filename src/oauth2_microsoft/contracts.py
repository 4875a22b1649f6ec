"""Contracts and shared types for the OAuth2 client and its providers."""

from __future__ import annotations

import time
from collections.abc import Mapping
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from pydantic import ConfigDict, ValidationError

from .models import OAuthBaseModel


class ProviderError(Exception):
    """Standardized provider error with HTTP-style status information."""

    def __init__(self, error: str, description: str | None = None, status_code: int = 400):
        super().__init__(description or error)
        self.error = error
        self.description = description
        self.status_code = status_code


class InvalidResponseShape(ProviderError):
    """The response body did not decode to a JSON object."""

    def __init__(self, status_code: int = 400):
        super().__init__(
            "invalid_response",
            "Invalid response received from Authorization Server. Expected JSON.",
            status_code=status_code,
        )


class IdentityProviderError(ProviderError):
    """An error object returned by the identity provider in a response body.

    Attributes:
        message: Provider message, or the HTTP reason phrase when none was sent.
        status_code: HTTP status of the response.
        response: The raw response, for caller inspection.
    """

    def __init__(self, message: str, status_code: int, response: Any):
        super().__init__("identity_provider_error", message, status_code=status_code)
        self.message = message
        self.response = response


class AccessTokenType(Enum):
    """How an access token is presented on authenticated requests."""

    NONE = ""
    BEARER = "Bearer"


class _TokenResponse(OAuthBaseModel):
    """Token endpoint response; unrecognized keys are kept as extras."""

    model_config = ConfigDict(extra="allow", frozen=True)

    access_token: str | None = None
    token_type: str | None = None
    refresh_token: str | None = None
    expires_in: float | None = None
    scope: str | None = None
    id_token: str | None = None


class AccessToken(OAuthBaseModel):
    """Token issued by the token endpoint."""

    access_token: str
    token_type: str | None = None
    refresh_token: str | None = None
    expires_at: float | None = None
    scope: str | None = None
    id_token: str | None = None
    values: dict[str, Any] = {}

    @classmethod
    def from_response(cls, data: Mapping[str, Any]) -> AccessToken:
        """Build a token from a decoded token endpoint response.

        Unrecognized keys are kept in ``values``.
        """
        try:
            token = _TokenResponse.model_validate(dict(data))
        except ValidationError as exc:
            raise ProviderError(
                "invalid_grant", "Invalid token response payload", status_code=400
            ) from exc

        if not token.access_token:
            raise ProviderError("invalid_grant", "No access_token in response", status_code=400)

        expires_at = time.time() + token.expires_in if token.expires_in is not None else None
        return cls(
            access_token=token.access_token,
            token_type=token.token_type,
            refresh_token=token.refresh_token,
            expires_at=expires_at,
            scope=token.scope,
            id_token=token.id_token,
            values=dict(token.model_extra or {}),
        )

    @property
    def scopes(self) -> list[str]:
        return self.scope.split() if self.scope else []

    def has_expired(self, now: float | None = None) -> bool:
        if self.expires_at is None:
            return False
        return (now if now is not None else time.time()) >= self.expires_at

    def __str__(self) -> str:
        return self.access_token


class UserInfo(OAuthBaseModel):
    """Normalized user information returned by providers."""

    provider: str
    user_id: str
    username: str
    email: str | None = None
    name: str | None = None
    raw_profile: dict[str, Any] | None = None


@runtime_checkable
class HttpResponse(Protocol):
    """The parts of an HTTP response the client relies on (``httpx.Response`` fits)."""

    status_code: int
    reason_phrase: str
    text: str

    def json(self) -> Any: ...


@runtime_checkable
class ResourceOwner(Protocol):
    """Resource owner produced by a provider from a successful details request."""

    def get_id(self) -> str | None: ...

    def to_dict(self) -> dict[str, Any]: ...

    def to_user_info(self, provider: str) -> UserInfo: ...


@runtime_checkable
class OAuth2Provider(Protocol):
    """Interface a provider must implement to drive ``OAuth2Client``."""

    provider_name: str
    resource_owner_token_type: AccessTokenType

    def authorization_endpoint(self) -> str:
        """Base URL of the authorize endpoint."""

    def token_endpoint(self, params: Mapping[str, str]) -> str:
        """Base URL of the token endpoint for a given token request."""

    def default_scopes(self) -> list[str]:
        """Scopes requested when the caller does not ask for any."""

    def scope_separator(self) -> str:
        """Separator used to join scopes into a single query parameter."""

    def resource_owner_endpoint(self, token: AccessToken | str) -> str:
        """URL of the resource owner details endpoint."""

    def build_authorization_headers(
        self, token: AccessToken | str | None, token_type: AccessTokenType = AccessTokenType.NONE
    ) -> dict[str, str]:
        """Authorization headers for a request made with ``token``."""

    def check_response(self, response: HttpResponse, data: Mapping[str, Any]) -> None:
        """Raise ``IdentityProviderError`` if ``data`` carries a provider error."""

    def create_resource_owner(
        self, data: dict[str, Any], token: AccessToken | str
    ) -> ResourceOwner:
        """Wrap a successful details response."""


__all__ = [
    "AccessToken",
    "AccessTokenType",
    "HttpResponse",
    "IdentityProviderError",
    "InvalidResponseShape",
    "OAuth2Provider",
    "ProviderError",
    "ResourceOwner",
    "UserInfo",
]
