"""Loading of the provider configuration file.

The file is YAML with a ``microsoft`` section and an optional ``transport``
section. String values may reference environment variables as ``${NAME}``.

Example config.yml:
    microsoft:
      client_id: ${MICROSOFT_CLIENT_ID}
      client_secret: ${MICROSOFT_CLIENT_SECRET}
      callback_path: /microsoft/callback
    transport:
      scheme: https
      host: app.example.com
      port: 443
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import MicrosoftConfigFileModel

# No logging in this module as it may run before logging is configured

CONFIG_ENV_VAR = "OAUTH2_MICROSOFT_CONFIG"
ENV_VAR_PATTERN = re.compile(r"\${([A-Za-z0-9_]+)}")

__all__ = ["CONFIG_ENV_VAR", "interpolate_env_vars", "load_microsoft_config"]


def resolve_env_var(value: str) -> str:
    """Resolve ``${ENV_VAR}`` references in a string.

    Raises:
        ValueError: If a referenced environment variable is not set
    """
    matches = ENV_VAR_PATTERN.findall(value)
    result = value
    for env_var in matches:
        if env_var not in os.environ:
            raise ValueError(f"Environment variable {env_var} is not set")
        result = result.replace(f"${{{env_var}}}", os.environ[env_var])
    return result


def interpolate_env_vars(config: Any) -> Any:
    """Recursively resolve environment variable references in a loaded config."""
    if isinstance(config, dict):
        return {key: interpolate_env_vars(value) for key, value in config.items()}
    if isinstance(config, list):
        return [interpolate_env_vars(item) for item in config]
    if isinstance(config, str):
        return resolve_env_var(config)
    return config


def load_microsoft_config(path: str | Path | None = None) -> MicrosoftConfigFileModel:
    """Load the provider configuration from ``path`` or the OAUTH2_MICROSOFT_CONFIG env var."""
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            raise FileNotFoundError(
                f"No config path given and {CONFIG_ENV_VAR} is not set"
            )
        path = env_path
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Microsoft OAuth config not found at {path}")

    with open(path) as f:
        config_data = yaml.safe_load(f) or {}

    if not isinstance(config_data, dict):
        raise ValueError("Microsoft OAuth config must be a mapping")

    config_data = interpolate_env_vars(config_data)

    try:
        return MicrosoftConfigFileModel.model_validate(config_data)
    except ValidationError as exc:
        raise ValueError(f"Invalid Microsoft OAuth config: {exc}") from exc
