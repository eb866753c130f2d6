# ABOUTME: Builds the final Markdown document for one entry.
# ABOUTME: Renders the body, derives the description and prepends frontmatter.

import logging
from typing import Iterable

from .converter import ImageResolver, blocks_to_markdown
from .frontmatter import Frontmatter, serialize_frontmatter
from .models import Block, Category, Entry, RenderedDocument
from .text import collapse_empty_lines, normalize_whitespace, strip_markdown_links, truncate_chars

logger = logging.getLogger(__name__)

DESCRIPTION_LENGTH = 70
DESCRIPTION_SUFFIX = "..."

PLACEHOLDER_BODY = "This content was imported from Notion, but the content could not be retrieved."

DATE_FORMAT = "%Y-%m-%d"


def derive_description(body: str, limit: int = DESCRIPTION_LENGTH) -> str:
    """Summarize a Markdown body as plain text of at most ``limit`` characters.

    Links are reduced to their text and whitespace is collapsed; ``...`` is
    appended when the text was cut.
    """
    text = strip_markdown_links(body)
    description = truncate_chars(text, limit)
    if len(normalize_whitespace(text)) > limit:
        description += DESCRIPTION_SUFFIX
    return description


def build_frontmatter(entry: Entry, body: str, log: logging.Logger) -> Frontmatter:
    """Collect the frontmatter fields for an entry."""
    frontmatter = Frontmatter(
        id=entry.id,
        title=entry.title,
        date=entry.created_at.strftime(DATE_FORMAT),
        tags=list(entry.tags),
        draft=entry.draft,
    )

    if entry.category is Category.DIARY:
        frontmatter.weather = entry.weather

    if entry.published_at is not None:
        frontmatter.published_at = entry.published_at.strftime(DATE_FORMAT)

    if entry.description:
        frontmatter.description = strip_markdown_links(entry.description)
    elif entry.category is Category.BLOG:
        if body.strip():
            frontmatter.description = derive_description(body)
        else:
            log.info(f"Not setting description for blog entry: {entry.title} (empty content)")

    return frontmatter


def assemble_document(
    entry: Entry,
    blocks: Iterable[Block] | None,
    image_resolver: ImageResolver | None = None,
    log: logging.Logger | None = None,
) -> RenderedDocument:
    """Convert an entry and its blocks into the file content to write.

    Args:
        entry: The entry being exported.
        blocks: The entry's content blocks in page order, or None if they
            could not be fetched (a placeholder body is used instead).
        image_resolver: Passed through to the block renderer.
        log: Logger for notices and recoverable problems.

    Returns:
        RenderedDocument whose ``content`` is the complete file text.

    Raises:
        FrontmatterError: If the entry cannot be given frontmatter.
    """
    log = log or logger

    if blocks is None:
        body = PLACEHOLDER_BODY
    else:
        body = blocks_to_markdown(blocks, image_resolver, log)

    frontmatter_text = serialize_frontmatter(build_frontmatter(entry, body, log))

    # Collapsing must see the closing delimiter to keep the separator line
    content = collapse_empty_lines(f"---\n{frontmatter_text}---\n\n{body}")

    return RenderedDocument(frontmatter_text=frontmatter_text, body=body, content=content)
