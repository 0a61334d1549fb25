"""Tests for environment-driven settings."""

import os
from unittest.mock import patch

from src.config import DEFAULT_API_BASE, DEFAULT_TIMEOUT, Settings


class TestSettingsFromEnv:
    """Tests for Settings.from_env()."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()
        assert settings.api_token is None
        assert settings.api_base == DEFAULT_API_BASE
        assert settings.timeout == DEFAULT_TIMEOUT
        assert settings.app_env == "development"
        assert not settings.has_task_credentials
        assert not settings.is_production

    def test_reads_all_options(self):
        env = {
            "TICKTICK_API_TOKEN": "tok",
            "TICKTICK_USERNAME": "me@example.com",
            "TICKTICK_PASSWORD": "pw",
            "TICKTICK_CLIENT_ID": "cid",
            "TICKTICK_CLIENT_SECRET": "csecret",
            "TICKTICK_API_BASE": "https://tasks.example.com/api/",
            "TICKTICK_TIMEOUT": "3.5",
            "IDENTITY_SECRET": "idsecret",
            "IDENTITY_BYPASS_TOKEN": "dev",
            "APP_ENV": "Production",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()
        assert settings.api_token == "tok"
        assert settings.username == "me@example.com"
        assert settings.client_secret == "csecret"
        assert settings.api_base == "https://tasks.example.com/api"
        assert settings.timeout == 3.5
        assert settings.identity_secret == "idsecret"
        assert settings.identity_bypass_token == "dev"
        assert settings.is_production

    def test_empty_values_are_unset(self):
        with patch.dict(os.environ, {"TICKTICK_API_TOKEN": ""}, clear=True):
            assert Settings.from_env().api_token is None


class TestHasTaskCredentials:
    def test_api_token(self):
        assert Settings(api_token="tok").has_task_credentials

    def test_login_needs_both(self):
        assert not Settings(username="u").has_task_credentials
        assert Settings(username="u", password="p").has_task_credentials

    def test_oauth_needs_both(self):
        assert not Settings(client_id="id").has_task_credentials
        assert Settings(client_id="id", client_secret="s").has_task_credentials
