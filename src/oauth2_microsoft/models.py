"""Pydantic models for the Microsoft OAuth provider.

This module provides the base model class plus the configuration models used
by the provider, the generic client and the config loader.

## Security-relevant configuration fields

- Provider **scopes**: affect what permissions are requested from Microsoft.
- Provider **callback_path**: controls which HTTP route receives IdP callbacks.
- Endpoint **URLs**: redirect users and tokens; they default to the public
  Microsoft identity platform and should rarely be overridden.

Example:
    >>> from oauth2_microsoft.models import MicrosoftAuthConfigModel
    >>>
    >>> config = MicrosoftAuthConfigModel(client_id="cid", client_secret="secret")
    >>> config.scopes
    ['User.Read']
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

MICROSOFT_AUTHORIZE_URL = "https://login.microsoftonline.com/common/oauth2/v2.0/authorize"
MICROSOFT_TOKEN_URL = "https://login.microsoftonline.com/common/oauth2/v2.0/token"
MICROSOFT_RESOURCE_OWNER_URL = "https://graph.microsoft.com/v1.0/me"
MICROSOFT_DEFAULT_SCOPES = ("User.Read",)


class OAuthBaseModel(BaseModel):
    """Base model for all package Pydantic models.

    - extra="forbid": Rejects any fields not defined in the model
    - frozen=True: Makes instances immutable so they can be shared across tasks
    """

    model_config = ConfigDict(extra="forbid", frozen=True)


class HttpTransportConfigModel(OAuthBaseModel):
    """HTTP transport configuration for OAuth callbacks and URL building.

    Handles scheme detection, base URLs, and proxy settings.
    """

    port: int | None = None
    host: str | None = None
    scheme: Literal["http", "https"] | None = None
    base_url: str | None = None
    trust_proxy: bool | None = None


class MicrosoftAuthConfigModel(OAuthBaseModel):
    """Microsoft identity platform provider configuration.

    Endpoint URLs are fixed at construction and default to the multi-tenant
    ``common`` authority and Microsoft Graph ``/me``.
    """

    client_id: str
    client_secret: str
    callback_path: str = "/microsoft/callback"
    scopes: list[str] = Field(default_factory=lambda: list(MICROSOFT_DEFAULT_SCOPES))
    auth_url: str = MICROSOFT_AUTHORIZE_URL
    token_url: str = MICROSOFT_TOKEN_URL
    resource_owner_url: str = MICROSOFT_RESOURCE_OWNER_URL


class MicrosoftConfigFileModel(OAuthBaseModel):
    """Top-level layout of a provider configuration file."""

    microsoft: MicrosoftAuthConfigModel
    transport: HttpTransportConfigModel | None = None


__all__ = [
    "HttpTransportConfigModel",
    "MICROSOFT_AUTHORIZE_URL",
    "MICROSOFT_DEFAULT_SCOPES",
    "MICROSOFT_RESOURCE_OWNER_URL",
    "MICROSOFT_TOKEN_URL",
    "MicrosoftAuthConfigModel",
    "MicrosoftConfigFileModel",
    "OAuthBaseModel",
]
