"""Bluesky public API client: handle resolution, profile and author feed."""

from typing import Any

import requests

from .classify import is_repost
from .config import ApiConfig
from .decode import decode_feed_item, decode_profile
from .errors import FetchError
from .logging_config import create_execution_logger
from .models import FeedItem, Profile

RESOLVE_HANDLE = "com.atproto.identity.resolveHandle"
GET_PROFILE = "app.bsky.actor.getProfile"
GET_AUTHOR_FEED = "app.bsky.feed.getAuthorFeed"


class BlueskyClient:
    """Handles unauthenticated reads from the Bluesky XRPC API."""

    def __init__(self, config: ApiConfig | None = None, execution_id: str | None = None):
        """Initialize BlueskyClient with configuration.

        Args:
            config: API configuration (base URL, timeout, paging bounds)
            execution_id: Execution ID for logging context
        """
        self.config = config or ApiConfig()
        self.logger = create_execution_logger("bluesky_client", execution_id)
        self.session = requests.Session()
        self.session.headers.update(
            {
                "User-Agent": self.config.user_agent,
                "Accept": "application/json",
            }
        )

        self.logger.info(
            "BlueskyClient initialized",
            endpoint=self.config.base_url,
            timeout=self.config.timeout,
        )

    def fetch_json(self, endpoint: str, params: dict[str, Any]) -> dict:
        """Call an XRPC method and return its decoded JSON body.

        Args:
            endpoint: XRPC method name, e.g. ``app.bsky.actor.getProfile``
            params: Query parameters; None and empty values are dropped

        Returns:
            Parsed JSON response

        Raises:
            FetchError: On network failure or a non-2xx response
        """
        url = f"{self.config.base_url}/{endpoint}"
        query = {
            key: str(value)
            for key, value in params.items()
            if value is not None and value != ""
        }

        self.logger.debug("Calling Bluesky API", endpoint=endpoint, params=query)
        try:
            response = self.session.get(url, params=query, timeout=self.config.timeout)
        except requests.RequestException as e:
            self.logger.error(
                f"Request to {endpoint} failed: {e}", endpoint=endpoint, error=str(e)
            )
            raise FetchError(endpoint, None, str(e)) from e

        if not 200 <= response.status_code < 300:
            self.logger.error(
                f"Bluesky API returned status {response.status_code}",
                endpoint=endpoint,
                status_code=response.status_code,
            )
            raise FetchError(
                endpoint, response.status_code, response.text, response.reason or ""
            )

        try:
            return response.json()
        except ValueError as e:
            raise FetchError(
                endpoint, response.status_code, f"Invalid JSON response: {e}"
            ) from e

    def resolve_did(self, handle_or_did: str) -> str:
        """Resolve a handle to a DID; a DID is returned unchanged."""
        if handle_or_did.startswith("did:"):
            return handle_or_did

        data = self.fetch_json(RESOLVE_HANDLE, {"handle": handle_or_did})
        did = data.get("did") if isinstance(data, dict) else None
        if not did:
            raise FetchError(RESOLVE_HANDLE, None, f"No DID returned for {handle_or_did}")

        self.logger.info("Resolved handle", handle=handle_or_did, actor=did)
        return did

    def get_profile(self, actor: str) -> Profile:
        data = self.fetch_json(GET_PROFILE, {"actor": actor})
        return decode_profile(data)

    def page_size(self, limit: int) -> int:
        """Page size requested from the feed: twice the limit, within bounds."""
        return min(self.config.max_page_size, max(limit * 2, self.config.min_page_size))

    def fetch_feed_items(
        self,
        actor: str,
        limit: int,
        include_replies: bool = False,
        include_reposts: bool = False,
    ) -> list[FeedItem]:
        """Fetch up to ``limit`` items of an author feed, newest first.

        Paging stops once enough items were collected, when the feed has no
        further cursor, or after ``max_pages`` requests.

        Args:
            actor: DID (or handle) of the feed's author
            limit: Maximum number of items to return
            include_replies: Ask the server to include replies
            include_reposts: Keep reposts instead of dropping them locally

        Returns:
            List of decoded FeedItem objects in feed order
        """
        collected: list[FeedItem] = []
        cursor = None
        pages = 0
        request_limit = self.page_size(limit)

        self.logger.info("Fetching author feed", actor=actor, limit=limit)

        while len(collected) < limit and pages < self.config.max_pages:
            pages += 1
            page = self.fetch_json(
                GET_AUTHOR_FEED,
                {
                    "actor": actor,
                    "filter": "posts_with_replies" if include_replies else "posts_no_replies",
                    "limit": request_limit,
                    "cursor": cursor,
                },
            )

            raw_items = page.get("feed") if isinstance(page, dict) else None
            if not isinstance(raw_items, list):
                raw_items = []
            self.logger.log_page_fetch(actor, pages, len(raw_items))

            for raw_item in raw_items:
                item = decode_feed_item(raw_item)
                if not include_reposts and is_repost(item):
                    continue
                collected.append(item)
                if len(collected) >= limit:
                    break

            cursor = page.get("cursor") if isinstance(page, dict) else None
            if not cursor:
                break

        self.logger.info(
            f"Fetched {len(collected)} feed items in {pages} pages",
            actor=actor,
            pages=pages,
            items_count=len(collected),
        )
        return collected[:limit]
