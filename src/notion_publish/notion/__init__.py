# ABOUTME: Notion API integration package.
# ABOUTME: Exports the client and entry fetching functions.

from .client import NotionClient, RateLimiter
from .entries import EXPORT_FILTER, entry_from_page, fetch_blocks, get_database_title, list_entries

__all__ = [
    "NotionClient",
    "RateLimiter",
    "EXPORT_FILTER",
    "entry_from_page",
    "fetch_blocks",
    "get_database_title",
    "list_entries",
]
