# ABOUTME: Turns Notion database pages into Entry records.
# ABOUTME: Lists publishable entries and fetches their content blocks.

import logging
from datetime import datetime

from ..markdown.models import Block, Category, Entry, parse_block
from .client import NotionClient

logger = logging.getLogger(__name__)

# Entries marked done but not yet published
EXPORT_FILTER = {
    "and": [
        {"property": "published", "checkbox": {"does_not_equal": True}},
        {"property": "done", "checkbox": {"equals": True}},
    ]
}

# Property names consulted in order; "titile" is a known typo in one database
TITLE_PROPERTIES = ("title", "Title", "Name", "titile")
ID_PROPERTIES = ("ID", "id")
TAG_PROPERTIES = ("tags", "Tags")


def _plain_text(rich_text: list[dict]) -> str:
    return "".join(segment.get("plain_text", "") for segment in rich_text or [])


def _checkbox(props: dict, name: str) -> bool:
    prop = props.get(name) or {}
    return bool(prop.get("checkbox", False))


def is_exportable(page: dict) -> bool:
    """Client-side equivalent of EXPORT_FILTER."""
    props = page.get("properties", {})
    return _checkbox(props, "done") and not _checkbox(props, "published")


def parse_timestamp(value: str) -> datetime:
    """Parse a Notion ISO-8601 timestamp such as ``2023-01-01T09:30:00.000Z``."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def get_text_property(prop: dict | None) -> str:
    """Extract text from a title, rich_text, select or formula property."""
    if not prop:
        return ""
    prop_type = prop.get("type")

    if prop_type in ("title", "rich_text"):
        return _plain_text(prop.get(prop_type, []))
    if prop_type == "select":
        select = prop.get("select")
        return select.get("name", "") if select else ""
    if prop_type == "formula":
        formula = prop.get("formula", {})
        value = formula.get(formula.get("type"))
        return "" if value is None else str(value)

    return ""


def get_page_title(page: dict) -> str:
    """Resolve the page title, trying each alias in TITLE_PROPERTIES in order."""
    props = page.get("properties", {})
    for name in TITLE_PROPERTIES:
        title = get_text_property(props.get(name))
        if title:
            return title
    return ""


def get_entry_id(page: dict) -> str:
    """Use the database's ID column when present, else the page ID."""
    props = page.get("properties", {})
    for name in ID_PROPERTIES:
        prop = props.get(name)
        if not prop:
            continue
        prop_type = prop.get("type")

        if prop_type == "unique_id":
            unique_id = prop.get("unique_id") or {}
            number = unique_id.get("number")
            if number is None:
                continue
            prefix = unique_id.get("prefix")
            return f"{prefix}-{number}" if prefix else str(number)
        if prop_type == "number" and prop.get("number") is not None:
            number = prop["number"]
            return str(int(number)) if float(number).is_integer() else str(number)

        text = get_text_property(prop)
        if text:
            return text

    return page.get("id", "")


def get_tags(page: dict) -> tuple[str, ...]:
    props = page.get("properties", {})
    for name in TAG_PROPERTIES:
        prop = props.get(name)
        if prop and prop.get("type") == "multi_select":
            names = [option.get("name", "") for option in prop.get("multi_select", [])]
            return tuple(dict.fromkeys(name for name in names if name))
    return ()


def _get_date(props: dict, name: str) -> datetime | None:
    prop = props.get(name) or {}
    if prop.get("type") != "date" or not prop.get("date"):
        return None
    start = prop["date"].get("start")
    return parse_timestamp(start) if start else None


def entry_from_page(page: dict, category: Category) -> Entry | None:
    """Build an Entry from a database page.

    Returns:
        The entry, or None if the page has no usable title.
    """
    title = get_page_title(page)
    if not title:
        return None

    props = page.get("properties", {})
    return Entry(
        id=get_entry_id(page),
        page_id=page["id"],
        title=title,
        created_at=parse_timestamp(page["created_time"]),
        category=category,
        tags=get_tags(page),
        description=get_text_property(props.get("description")) or None,
        weather=get_text_property(props.get("weather")) or None,
        published_at=_get_date(props, "publishedAt"),
        draft=_checkbox(props, "draft"),
    )


def get_database_title(database: dict) -> str:
    return _plain_text(database.get("title", [])) or "Untitled"


def list_entries(
    client: NotionClient,
    database_id: str,
    category: Category,
    log: logging.Logger | None = None,
) -> list[Entry]:
    """Fetch the entries of a database that are done but not yet published.

    Pages without a title are skipped with a warning.
    """
    log = log or logger
    pages = client.query_database(database_id, filter=EXPORT_FILTER)

    entries = []
    for page in pages:
        if not is_exportable(page):
            continue
        entry = entry_from_page(page, category)
        if entry is None:
            log.warning(f"Skipping page {page.get('id')}: no title found")
            continue
        entries.append(entry)

    return entries


def fetch_blocks(client: NotionClient, page_id: str) -> list[Block]:
    """Fetch the top-level content blocks of a page in order."""
    return [parse_block(block) for block in client.get_blocks(page_id)]
