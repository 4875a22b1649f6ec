"""Microsoft identity platform provider for the generic OAuth2 client."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..client import OAuth2Client
from ..contracts import (
    AccessToken,
    AccessTokenType,
    HttpResponse,
    IdentityProviderError,
    ProviderError,
    UserInfo,
)
from ..models import HttpTransportConfigModel, MicrosoftAuthConfigModel

logger = logging.getLogger(__name__)


class MicrosoftResourceOwner:
    """Microsoft Graph ``/me`` payload.

    The decoded mapping is kept as-is; accessors only read from it.
    """

    def __init__(self, response: Mapping[str, Any]):
        self._response = dict(response)

    def get_id(self) -> str | None:
        return self._response.get("id")

    @property
    def id(self) -> str | None:
        return self.get_id()

    @property
    def display_name(self) -> str | None:
        return self._response.get("displayName")

    @property
    def given_name(self) -> str | None:
        return self._response.get("givenName")

    @property
    def surname(self) -> str | None:
        return self._response.get("surname")

    @property
    def mail(self) -> str | None:
        return self._response.get("mail")

    @property
    def user_principal_name(self) -> str | None:
        return self._response.get("userPrincipalName")

    @property
    def job_title(self) -> str | None:
        return self._response.get("jobTitle")

    def get(self, key: str, default: Any = None) -> Any:
        return self._response.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self._response[key]

    def __contains__(self, key: object) -> bool:
        return key in self._response

    def to_dict(self) -> dict[str, Any]:
        return dict(self._response)

    def to_user_info(self, provider: str) -> UserInfo:
        user_id = self.id
        if not user_id:
            raise ProviderError("invalid_token", "Microsoft profile missing id", status_code=400)
        user_id = str(user_id)
        return UserInfo(
            provider=provider,
            user_id=user_id,
            username=self.user_principal_name or self.mail or user_id,
            email=self.mail or self.user_principal_name,
            name=self.display_name,
            raw_profile=self.to_dict(),
        )

    def __repr__(self) -> str:
        return f"MicrosoftResourceOwner(id={self.id!r})"


class MicrosoftProvider:
    """Microsoft endpoints, scopes and response handling for ``OAuth2Client``.

    Graph requires Bearer auth on ``/me`` even though the client sends no
    authorization by default, so ``resource_owner_token_type`` is passed
    explicitly into header construction for that request.
    """

    provider_name = "microsoft"
    resource_owner_token_type = AccessTokenType.BEARER

    def __init__(
        self,
        config: MicrosoftAuthConfigModel,
        transport_config: HttpTransportConfigModel | None = None,
        *,
        host: str | None = None,
        port: int | None = None,
    ):
        self.config = config
        self.transport_config = transport_config
        self.host = host
        self.port = port

    def authorization_endpoint(self) -> str:
        return self.config.auth_url

    def token_endpoint(self, params: Mapping[str, str]) -> str:
        return self.config.token_url

    def default_scopes(self) -> list[str]:
        return list(self.config.scopes)

    def scope_separator(self) -> str:
        return " "

    def resource_owner_endpoint(self, token: AccessToken | str) -> str:
        return self.config.resource_owner_url

    def build_authorization_headers(
        self,
        token: AccessToken | str | None,
        token_type: AccessTokenType = AccessTokenType.NONE,
    ) -> dict[str, str]:
        if token_type is AccessTokenType.BEARER:
            return {"Authorization": f"Bearer {token}"}
        return {}

    def check_response(self, response: HttpResponse, data: Mapping[str, Any]) -> None:
        # A null error or message counts as absent
        error = data.get("error")
        if error is None:
            return
        nested_message = error.get("message") if isinstance(error, Mapping) else None
        if nested_message is not None:
            message = str(nested_message)
        else:
            message = response.reason_phrase
        logger.warning(
            "Microsoft returned an error payload",
            extra={
                "provider": self.provider_name,
                "status_code": response.status_code,
                "provider_error": error.get("code") if isinstance(error, Mapping) else error,
            },
        )
        raise IdentityProviderError(message, response.status_code, response)

    def create_resource_owner(
        self, data: dict[str, Any], token: AccessToken | str
    ) -> MicrosoftResourceOwner:
        return MicrosoftResourceOwner(data)

    def create_client(self) -> OAuth2Client:
        """Build an ``OAuth2Client`` bound to this provider and its credentials."""
        return OAuth2Client(
            self,
            client_id=self.config.client_id,
            client_secret=self.config.client_secret,
            callback_path=self.config.callback_path,
            transport_config=self.transport_config,
            host=self.host,
            port=self.port,
        )

    async def fetch_resource_owner(self, token: AccessToken | str) -> MicrosoftResourceOwner:
        """Fetch and validate the Graph ``/me`` payload for ``token``."""
        data = await self.create_client().fetch_resource_owner_details(token)
        return self.create_resource_owner(data, token)
