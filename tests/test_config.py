from pathlib import Path

import pytest
from pytest import MonkeyPatch

from oauth2_microsoft.config import CONFIG_ENV_VAR, interpolate_env_vars, load_microsoft_config
from oauth2_microsoft.models import MICROSOFT_TOKEN_URL


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.yml"
    path.write_text(text)
    return path


def test_load_config_resolves_env_vars(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setenv("MS_CLIENT_ID", "cid-from-env")
    monkeypatch.setenv("MS_CLIENT_SECRET", "secret-from-env")
    path = _write(
        tmp_path,
        """
microsoft:
  client_id: ${MS_CLIENT_ID}
  client_secret: ${MS_CLIENT_SECRET}
  scopes: [User.Read, offline_access]
transport:
  scheme: https
  host: app.example.com
""",
    )

    config = load_microsoft_config(path)
    assert config.microsoft.client_id == "cid-from-env"
    assert config.microsoft.client_secret == "secret-from-env"
    assert config.microsoft.scopes == ["User.Read", "offline_access"]
    assert config.microsoft.token_url == MICROSOFT_TOKEN_URL
    assert config.transport is not None
    assert config.transport.scheme == "https"


def test_load_config_from_env_path(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    path = _write(tmp_path, "microsoft:\n  client_id: cid\n  client_secret: s\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    config = load_microsoft_config()
    assert config.microsoft.client_id == "cid"
    assert config.transport is None


def test_load_config_without_path(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    with pytest.raises(FileNotFoundError):
        load_microsoft_config()


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_microsoft_config(tmp_path / "missing.yml")


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="must be a mapping"):
        load_microsoft_config(_write(tmp_path, "- a\n- b\n"))


def test_load_config_rejects_unknown_fields(tmp_path: Path) -> None:
    path = _write(tmp_path, "microsoft:\n  client_id: c\n  client_secret: s\n  tenant: x\n")
    with pytest.raises(ValueError, match="Invalid Microsoft OAuth config"):
        load_microsoft_config(path)


def test_interpolate_missing_env_var(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.delenv("NOT_SET_ANYWHERE", raising=False)
    with pytest.raises(ValueError, match="NOT_SET_ANYWHERE"):
        interpolate_env_vars({"a": ["${NOT_SET_ANYWHERE}"]})


def test_interpolate_leaves_other_values(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setenv("HOST", "example.com")
    assert interpolate_env_vars({"url": "https://${HOST}/cb", "port": 443, "on": True}) == {
        "url": "https://example.com/cb",
        "port": 443,
        "on": True,
    }
