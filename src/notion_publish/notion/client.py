# ABOUTME: Wrapper around the official Notion Python SDK.
# ABOUTME: Rate-limits requests and retries when Notion answers 429.

import functools
import logging
import time

from notion_client import Client
from notion_client.errors import APIResponseError
from notion_client.helpers import collect_paginated_api

logger = logging.getLogger(__name__)


def retry_on_rate_limit(max_retries: int = 3):
    """Decorator to retry on 429 responses using Retry-After header.

    Args:
        max_retries: Maximum number of retry attempts.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            for attempt in range(max_retries):
                try:
                    return func(*args, **kwargs)
                except APIResponseError as e:
                    if e.status == 429 and attempt < max_retries - 1:
                        retry_after = 1
                        if getattr(e, "headers", None):
                            retry_after = int(e.headers.get("Retry-After", 1))
                        logger.warning(
                            f"Rate limited, retrying in {retry_after}s "
                            f"(attempt {attempt + 1}/{max_retries})"
                        )
                        time.sleep(retry_after)
                        continue
                    raise
            return None  # Unreachable but satisfies type checker
        return wrapper
    return decorator


class RateLimiter:
    """Spaces out requests to stay under a calls-per-second budget."""

    def __init__(self, calls_per_second: float = 2.5):
        """Initialize rate limiter.

        Args:
            calls_per_second: Maximum requests per second. Default 2.5 leaves
                headroom below Notion's 3/sec limit.
        """
        self._min_interval = 1.0 / calls_per_second
        self._last_call = 0.0

    def acquire(self) -> None:
        """Sleep until the next request is allowed."""
        wait_time = self._last_call + self._min_interval - time.monotonic()
        if wait_time > 0:
            time.sleep(wait_time)
        self._last_call = time.monotonic()


class NotionClient:
    """The subset of the Notion API the exporter needs."""

    def __init__(self, token: str, rate_limiter: RateLimiter | None = None, client: Client | None = None):
        """Initialize the client.

        Args:
            token: Notion integration token.
            rate_limiter: Throttle shared by all calls (a default one if omitted).
            client: Pre-built SDK client, mainly for tests.
        """
        self._client = client or Client(auth=token)
        self._rate_limiter = rate_limiter or RateLimiter()

    @retry_on_rate_limit()
    def get_database(self, database_id: str) -> dict:
        """Retrieve database schema by ID."""
        self._rate_limiter.acquire()
        return self._client.databases.retrieve(database_id=database_id)

    @retry_on_rate_limit()
    def query_database(self, database_id: str, filter: dict | None = None) -> list[dict]:
        """Query all pages of a database matching ``filter``."""
        self._rate_limiter.acquire()
        kwargs = {"database_id": database_id, "page_size": 100}
        if filter is not None:
            kwargs["filter"] = filter
        return collect_paginated_api(self._client.databases.query, **kwargs)

    @retry_on_rate_limit()
    def get_blocks(self, block_id: str) -> list[dict]:
        """Retrieve all child blocks of a block/page."""
        self._rate_limiter.acquire()
        return collect_paginated_api(
            self._client.blocks.children.list,
            block_id=block_id,
        )
