"""Tests for environment-driven configuration."""

import pytest

from guildbot.config import API_BASE, SANDBOX_API_BASE, ClientConfig


class TestClientConfig:
    """Test ClientConfig.from_env."""

    def test_defaults(self):
        config = ClientConfig.from_env({})

        assert config.api_base == API_BASE
        assert config.token is None
        assert config.gateway_url is None
        assert config.timeout == 30.0

    @pytest.mark.parametrize("value", ["1", "true", "TRUE", "yes"])
    def test_sandbox(self, value):
        config = ClientConfig.from_env({"GUILDBOT_SANDBOX": value})

        assert config.api_base == SANDBOX_API_BASE

    def test_sandbox_off(self):
        config = ClientConfig.from_env({"GUILDBOT_SANDBOX": "0"})

        assert config.api_base == API_BASE

    def test_explicit_base_wins_over_sandbox(self):
        config = ClientConfig.from_env(
            {"GUILDBOT_API_BASE": "https://proxy.example.invalid/", "GUILDBOT_SANDBOX": "1"}
        )

        assert config.api_base == "https://proxy.example.invalid"

    def test_all_values(self):
        config = ClientConfig.from_env(
            {
                "GUILDBOT_TOKEN": "QQBot xyz",
                "GUILDBOT_GATEWAY_URL": "wss://gw.example.invalid",
                "GUILDBOT_TIMEOUT": "2.5",
            }
        )

        assert config.token == "QQBot xyz"
        assert config.gateway_url == "wss://gw.example.invalid"
        assert config.timeout == 2.5

    @pytest.mark.parametrize("value", ["soon", "0", "-1"])
    def test_invalid_timeout(self, value):
        with pytest.raises(ValueError, match="GUILDBOT_TIMEOUT"):
            ClientConfig.from_env({"GUILDBOT_TIMEOUT": value})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("GUILDBOT_GATEWAY_URL", "wss://env.example.invalid")

        assert ClientConfig.from_env().gateway_url == "wss://env.example.invalid"
