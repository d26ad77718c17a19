"""Tests for OAuth configuration module."""

import dataclasses
import os
from unittest import mock

import pytest

from bingo_oauth.config import PlatformOAuthConfig
from bingo_oauth.exceptions import ConfigurationError


class TestPlatformOAuthConfig:
    """Tests for PlatformOAuthConfig class."""

    @pytest.fixture
    def config(self):
        """Create test OAuth config."""
        return PlatformOAuthConfig(
            platform_host="https://h",
            client_id="test_client_id",
            client_secret="test_client_secret",
            redirect_uri="https://app.example.com/oauth/callback",
        )

    def test_token_url(self, config):
        """token_url appends the token endpoint path."""
        assert config.token_url() == "https://h/oauth2/v1/token"

    def test_profile_url(self, config):
        """profile_url puts the access token in the query string."""
        assert config.profile_url("T") == "https://h/oauth2/v1/profile?access_token=T"

    def test_wallet_url(self, config):
        """wallet_url includes the fixed qtum asset type."""
        assert (
            config.wallet_url("T")
            == "https://h/oauth2/v1/wallet?access_token=T&type=qtum"
        )

    def test_urls_percent_encode_reserved_characters(self, config):
        """Reserved characters in the token cannot break the query string."""
        assert (
            config.profile_url("a+b/c&d=e")
            == "https://h/oauth2/v1/profile?access_token=a%2Bb%2Fc%26d%3De"
        )
        assert config.wallet_url("x y").endswith("access_token=x%20y&type=qtum")

    def test_urls_keep_unreserved_token_characters(self, config):
        """Typical token characters pass through unchanged."""
        token = "abc-DEF_123.xyz~"
        assert config.profile_url(token).endswith(f"access_token={token}")

    def test_empty_host_is_not_validated(self):
        """An empty host still builds a URL; validation is the caller's job."""
        config = PlatformOAuthConfig(
            platform_host="", client_id="", client_secret="", redirect_uri=""
        )

        assert config.token_url() == "/oauth2/v1/token"
        assert config.wallet_url("T") == "/oauth2/v1/wallet?access_token=T&type=qtum"

    def test_config_is_immutable(self, config):
        """Config cannot be mutated after construction."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.platform_host = "https://other"

    def test_to_dict(self, config):
        """to_dict exposes the config-file keys."""
        assert config.to_dict() == {
            "platform_host": "https://h",
            "client_id": "test_client_id",
            "client_secret": "test_client_secret",
            "redirect_uri": "https://app.example.com/oauth/callback",
        }

    def test_from_dict(self, config):
        """from_dict rebuilds an equal config."""
        assert PlatformOAuthConfig.from_dict(config.to_dict()) == config

    def test_from_dict_reports_missing_keys(self):
        """from_dict names every missing key."""
        with pytest.raises(ConfigurationError, match="client_secret, redirect_uri"):
            PlatformOAuthConfig.from_dict(
                {"platform_host": "https://h", "client_id": "id"}
            )

    def test_from_env(self):
        """Config can be loaded from environment variables."""
        env = {
            "BINGO_PLATFORM_HOST": "https://777bingo.example",
            "BINGO_CLIENT_ID": "env_client_id",
            "BINGO_CLIENT_SECRET": "env_client_secret",
            "BINGO_REDIRECT_URI": "https://app.example.com/cb",
        }

        with mock.patch.dict(os.environ, env, clear=True):
            config = PlatformOAuthConfig.from_env()

        assert config.platform_host == "https://777bingo.example"
        assert config.client_id == "env_client_id"
        assert config.client_secret == "env_client_secret"
        assert config.redirect_uri == "https://app.example.com/cb"

    def test_from_env_custom_prefix(self):
        """from_env honors a custom variable prefix."""
        env = {
            "APP_PLATFORM_HOST": "https://h",
            "APP_CLIENT_ID": "id",
            "APP_CLIENT_SECRET": "secret",
            "APP_REDIRECT_URI": "",
        }

        with mock.patch.dict(os.environ, env, clear=True):
            config = PlatformOAuthConfig.from_env(prefix="APP_")

        assert config.client_id == "id"
        assert config.redirect_uri == ""

    def test_from_env_missing_variables(self):
        """from_env raises ConfigurationError listing missing variables."""
        with mock.patch.dict(
            os.environ, {"BINGO_PLATFORM_HOST": "https://h"}, clear=True
        ):
            with pytest.raises(ConfigurationError) as exc_info:
                PlatformOAuthConfig.from_env()

        message = str(exc_info.value)
        assert "BINGO_CLIENT_ID" in message
        assert "BINGO_CLIENT_SECRET" in message
        assert "BINGO_REDIRECT_URI" in message
        assert "BINGO_PLATFORM_HOST" not in message
