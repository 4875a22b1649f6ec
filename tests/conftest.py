"""
Global pytest configuration and fixtures.
"""

import pytest

from oauth2_microsoft.client import OAuth2Client
from oauth2_microsoft.models import MicrosoftAuthConfigModel
from oauth2_microsoft.providers.microsoft import MicrosoftProvider


@pytest.fixture
def microsoft_config() -> MicrosoftAuthConfigModel:
    return MicrosoftAuthConfigModel(
        client_id="cid",
        client_secret="secret",
        callback_path="/microsoft/callback",
    )


@pytest.fixture
def provider(microsoft_config: MicrosoftAuthConfigModel) -> MicrosoftProvider:
    return MicrosoftProvider(microsoft_config)


@pytest.fixture
def client(provider: MicrosoftProvider) -> OAuth2Client:
    return provider.create_client()
