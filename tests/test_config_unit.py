"""Unit tests for configuration management."""

import os
from unittest.mock import patch

import pytest

from bsky_rss.config import ApiConfig, Config, FeedOptions


class TestConfigUnit:
    """Unit tests for Config class."""

    def test_defaults_without_environment(self):
        with patch.dict(os.environ, {}, clear=True):
            config = Config()
            api_config = config.get_api_config()

        assert api_config == ApiConfig()
        assert api_config.base_url == "https://public.api.bsky.app/xrpc"
        assert api_config.max_pages == 5
        assert config.log_level == "INFO"

    def test_environment_overrides(self):
        env = {
            "BSKY_API_BASE": "https://bsky.example/xrpc/",
            "BSKY_HTTP_TIMEOUT": "7.5",
            "BSKY_USER_AGENT": "test-agent/2.0",
            "LOG_LEVEL": "DEBUG",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config()
            api_config = config.get_api_config()

        assert api_config.base_url == "https://bsky.example/xrpc"
        assert api_config.timeout == 7.5
        assert api_config.user_agent == "test-agent/2.0"
        assert config.log_level == "DEBUG"

    @pytest.mark.parametrize("value", ["soon", "0", "-1"])
    def test_invalid_timeout(self, value):
        with patch.dict(os.environ, {"BSKY_HTTP_TIMEOUT": value}, clear=True):
            with pytest.raises(ValueError, match="BSKY_HTTP_TIMEOUT"):
                Config()

    def test_feed_options_defaults(self):
        options = FeedOptions()

        assert options.handle == "oblachek.eu"
        assert options.out == "rss/bluesky.xml"
        assert options.limit == 20
        assert options.include_replies is False
        assert options.include_reposts is False
        assert options.site_url == ""
