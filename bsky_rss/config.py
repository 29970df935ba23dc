"""Configuration management for the Bluesky RSS generator."""

import os
from dataclasses import dataclass

DEFAULT_HANDLE = "oblachek.eu"
DEFAULT_OUTPUT = "rss/bluesky.xml"
DEFAULT_LIMIT = 20


@dataclass
class FeedOptions:
    """Options controlling a single feed generation run."""

    handle: str = DEFAULT_HANDLE
    out: str = DEFAULT_OUTPUT
    limit: int = DEFAULT_LIMIT
    include_replies: bool = False
    include_reposts: bool = False
    site_url: str = ""


@dataclass
class ApiConfig:
    """Configuration for the public Bluesky XRPC API."""

    base_url: str = "https://public.api.bsky.app/xrpc"
    timeout: float = 30.0
    user_agent: str = "oblachek-eu-site-bsky-rss/1.0"
    max_pages: int = 5
    min_page_size: int = 50
    max_page_size: int = 100


class Config:
    """Main configuration manager."""

    def __init__(self):
        """Initialize configuration from environment variables."""
        defaults = ApiConfig()
        self.api_base = os.getenv("BSKY_API_BASE", defaults.base_url).rstrip("/")
        self.user_agent = os.getenv("BSKY_USER_AGENT", defaults.user_agent)
        self.timeout = self._get_float("BSKY_HTTP_TIMEOUT", defaults.timeout)
        self.log_level = os.getenv("LOG_LEVEL", "INFO")

    @staticmethod
    def _get_float(name: str, default: float) -> float:
        value = os.getenv(name)
        if value is None or not value.strip():
            return default
        try:
            timeout = float(value)
        except ValueError:
            raise ValueError(f"{name} must be a number, got {value!r}")
        if timeout <= 0:
            raise ValueError(f"{name} must be positive, got {value!r}")
        return timeout

    def get_api_config(self) -> ApiConfig:
        """Get Bluesky API configuration."""
        return ApiConfig(
            base_url=self.api_base,
            timeout=self.timeout,
            user_agent=self.user_agent,
        )
