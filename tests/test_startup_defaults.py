from __future__ import annotations

import pytest

from portal.config import settings
from portal.config.settings import Settings
from portal.core.exceptions import ConfigurationError
from portal.database.supabase_client import SupabaseClient


def test_project_token_secret_falls_back_to_nextauth_secret(monkeypatch) -> None:
    monkeypatch.delenv("PROJECT_TOKEN_SECRET", raising=False)
    monkeypatch.setenv("NEXTAUTH_SECRET", "legacy-secret")
    assert Settings(_env_file=None).get_project_token_secret() == "legacy-secret"

    monkeypatch.setenv("PROJECT_TOKEN_SECRET", "primary-secret")
    assert Settings(_env_file=None).get_project_token_secret() == "primary-secret"


def test_token_defaults(monkeypatch) -> None:
    monkeypatch.delenv("PROJECT_TOKEN_SECRET", raising=False)
    monkeypatch.delenv("NEXTAUTH_SECRET", raising=False)
    config = Settings(_env_file=None)
    assert config.get_project_token_secret() is None
    assert config.project_token_issuer == "portal"
    assert config.project_token_audience == "pol-app"


def test_missing_service_role_key_is_a_configuration_error(monkeypatch) -> None:
    monkeypatch.setattr(settings, "supabase_url", "https://example.supabase.co")
    monkeypatch.setattr(settings, "supabase_service_role_key", None)
    SupabaseClient.reset_client()

    with pytest.raises(ConfigurationError):
        SupabaseClient.get_service_client()
    SupabaseClient.reset_client()
