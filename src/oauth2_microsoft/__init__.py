"""Microsoft identity platform provider for OAuth2 authorization-code flows.

## Key Components

- `MicrosoftProvider`: Microsoft endpoints, scopes, header construction and
  response checks
- `MicrosoftResourceOwner`: the Microsoft Graph `/me` payload
- `OAuth2Client`: generic authorization-code flow driven by a provider
- `load_microsoft_config()`: YAML configuration with `${ENV_VAR}` references

## Quick Example

```python
from oauth2_microsoft import MicrosoftAuthConfigModel, MicrosoftProvider

provider = MicrosoftProvider(
    MicrosoftAuthConfigModel(client_id="your-client-id", client_secret="your-secret")
)
client = provider.create_client()
url = client.build_authorize_url(redirect_uri=client.build_callback_url(), state="xyz")
token = await client.exchange_code(code=code, redirect_uri=client.build_callback_url())
owner = await client.get_resource_owner(token)
print(owner.display_name)
```
"""

from .client import OAuth2Client
from .config import load_microsoft_config
from .contracts import (
    AccessToken,
    AccessTokenType,
    HttpResponse,
    IdentityProviderError,
    InvalidResponseShape,
    OAuth2Provider,
    ProviderError,
    ResourceOwner,
    UserInfo,
)
from .models import (
    HttpTransportConfigModel,
    MicrosoftAuthConfigModel,
    MicrosoftConfigFileModel,
)
from .providers import MicrosoftProvider, MicrosoftResourceOwner

__all__ = [
    # Config
    "HttpTransportConfigModel",
    "MicrosoftAuthConfigModel",
    "MicrosoftConfigFileModel",
    "load_microsoft_config",
    # Core classes
    "MicrosoftProvider",
    "MicrosoftResourceOwner",
    "OAuth2Client",
    # Contracts
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
