# ABOUTME: Typed records for Notion content: rich text spans, blocks and entries.
# ABOUTME: Parses raw Notion API block dicts into immutable Block values.

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class BlockType(str, Enum):
    """Notion block types the renderer knows about."""
    PARAGRAPH = "paragraph"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    TO_DO = "to_do"
    CODE = "code"
    QUOTE = "quote"
    DIVIDER = "divider"
    IMAGE = "image"
    UNSUPPORTED = "unsupported"


class Category(str, Enum):
    """Content category; selects the source database and output rules."""
    BLOG = "blog"
    DIARY = "diary"


@dataclass(frozen=True)
class RichTextSpan:
    """A run of plain text, optionally hyperlinked."""
    plain_text: str
    href: str | None = None


@dataclass(frozen=True)
class Block:
    """A single content block of a page.

    Only the fields relevant to ``type`` are populated: ``checked`` for
    to-do items, ``language`` for code blocks, ``image_url`` for images.
    """
    type: BlockType
    spans: tuple[RichTextSpan, ...] = ()
    checked: bool = False
    language: str = ""
    image_url: str = ""


@dataclass(frozen=True)
class Entry:
    """One exportable record from a blog or diary database."""
    id: str
    page_id: str
    title: str
    created_at: datetime
    category: Category
    tags: tuple[str, ...] = ()
    description: str | None = None
    weather: str | None = None
    published_at: datetime | None = None
    draft: bool = False


@dataclass(frozen=True)
class RenderedDocument:
    """Final output of assembling one entry."""
    frontmatter_text: str
    body: str
    content: str = field(repr=False)


def parse_rich_text(rich_text: list[dict]) -> tuple[RichTextSpan, ...]:
    """Convert a Notion ``rich_text`` array into spans."""
    return tuple(
        RichTextSpan(plain_text=segment.get("plain_text", ""), href=segment.get("href") or None)
        for segment in rich_text or []
    )


def parse_block(block: dict) -> Block:
    """Convert a raw Notion block dict into a Block.

    Unknown block types map to ``BlockType.UNSUPPORTED`` rather than failing.
    """
    raw_type = block.get("type", "")
    try:
        block_type = BlockType(raw_type)
    except ValueError:
        return Block(type=BlockType.UNSUPPORTED)
    if block_type is BlockType.UNSUPPORTED:
        return Block(type=BlockType.UNSUPPORTED)

    block_data = block.get(raw_type) or {}

    if block_type is BlockType.DIVIDER:
        return Block(type=block_type)

    if block_type is BlockType.IMAGE:
        # Images are either external links or files hosted by Notion
        url = ""
        if "external" in block_data:
            url = block_data["external"].get("url", "")
        elif "file" in block_data:
            url = block_data["file"].get("url", "")
        return Block(type=block_type, image_url=url)

    spans = parse_rich_text(block_data.get("rich_text", []))

    if block_type is BlockType.TO_DO:
        return Block(type=block_type, spans=spans, checked=bool(block_data.get("checked", False)))

    if block_type is BlockType.CODE:
        return Block(type=block_type, spans=spans, language=block_data.get("language") or "")

    return Block(type=block_type, spans=spans)
