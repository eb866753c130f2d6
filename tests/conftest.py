"""Shared factories for Notion API payloads."""

import pytest


def rich_text(text, href=None):
    """A single Notion rich_text segment."""
    return {"type": "text", "plain_text": text, "href": href}


def text_block(block_type, *segments, **extra):
    """A Notion block dict whose payload holds rich_text."""
    payload = {"rich_text": list(segments)}
    payload.update(extra)
    return {"object": "block", "id": f"{block_type}-id", "type": block_type, block_type: payload}


def page(
    page_id="page-1",
    title="First Post",
    title_key="title",
    created_time="2023-01-01T09:30:00.000Z",
    published=False,
    done=True,
    **properties,
):
    """A Notion database page dict with the checkbox properties the exporter filters on."""
    props = {
        "published": {"type": "checkbox", "checkbox": published},
        "done": {"type": "checkbox", "checkbox": done},
    }
    if title is not None:
        props[title_key] = {"type": "title", "title": [rich_text(title)] if title else []}
    props.update(properties)
    return {"object": "page", "id": page_id, "created_time": created_time, "properties": props}


class FakeNotionClient:
    """In-memory stand-in for NotionClient."""

    def __init__(self, pages=None, blocks=None, database=None):
        self.pages = pages or []
        self.blocks = blocks or {}
        self.database = database or {"title": [rich_text("Blog")]}
        self.queries = []

    def get_database(self, database_id):
        return self.database

    def query_database(self, database_id, filter=None):
        self.queries.append((database_id, filter))
        return list(self.pages)

    def get_blocks(self, block_id):
        result = self.blocks.get(block_id, [])
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def fake_client():
    return FakeNotionClient()
