# ABOUTME: Converts Notion blocks to Markdown fragments.
# ABOUTME: Emits two-space hard breaks and resolves images through a callback.

import logging
from typing import Callable, Iterable

from ..images import ImageDownloadError
from .models import Block, BlockType, RichTextSpan

logger = logging.getLogger(__name__)

ImageResolver = Callable[[str], str]

# Two trailing spaces force a Markdown line break
HARD_BREAK = "  \n"

HEADING_PREFIXES = {
    BlockType.HEADING_1: "#",
    BlockType.HEADING_2: "##",
    BlockType.HEADING_3: "###",
}


def get_rich_text(spans: Iterable[RichTextSpan]) -> str:
    """Render rich text spans as inline Markdown, keeping links."""
    result = []
    for span in spans:
        if span.href:
            result.append(f"[{span.plain_text}]({span.href})")
        else:
            result.append(span.plain_text)

    return "".join(result)


def _image_to_markdown(
    url: str,
    image_resolver: ImageResolver | None,
    log: logging.Logger,
) -> str:
    if not url:
        return ""

    target = url
    if image_resolver is not None:
        try:
            target = image_resolver(url)
        except (ImageDownloadError, OSError) as e:
            # Keep the remote URL so the page still renders
            log.warning(f"Failed to download image: {e}")
            target = url

    return f"![Image]({target}){HARD_BREAK}\n"


def block_to_markdown(
    block: Block,
    image_resolver: ImageResolver | None = None,
    log: logging.Logger | None = None,
) -> str:
    """Convert a single block to Markdown.

    Args:
        block: Parsed block.
        image_resolver: Maps a remote image URL to the path the site serves
            a local copy from. Without one, images keep their remote URL.
        log: Logger for recoverable problems (defaults to the module logger).

    Returns:
        Markdown fragment; empty for unsupported blocks.
    """
    log = log or logger
    block_type = block.type

    if block_type is BlockType.PARAGRAPH:
        return f"{get_rich_text(block.spans)}{HARD_BREAK}\n"

    if block_type in HEADING_PREFIXES:
        return f"{HEADING_PREFIXES[block_type]} {get_rich_text(block.spans)}{HARD_BREAK}\n"

    if block_type is BlockType.BULLETED_LIST_ITEM:
        return f"- {get_rich_text(block.spans)}{HARD_BREAK}"

    # Always "1." so no counter is shared between items or entries
    if block_type is BlockType.NUMBERED_LIST_ITEM:
        return f"1. {get_rich_text(block.spans)}{HARD_BREAK}"

    if block_type is BlockType.TO_DO:
        checkbox = "[x]" if block.checked else "[ ]"
        return f"- {checkbox} {get_rich_text(block.spans)}{HARD_BREAK}"

    if block_type is BlockType.CODE:
        text = get_rich_text(block.spans)
        return f"```{block.language}{HARD_BREAK}{text}{HARD_BREAK}```{HARD_BREAK}\n"

    if block_type is BlockType.QUOTE:
        return f"> {get_rich_text(block.spans)}{HARD_BREAK}\n"

    if block_type is BlockType.DIVIDER:
        return f"---{HARD_BREAK}\n"

    if block_type is BlockType.IMAGE:
        return _image_to_markdown(block.image_url, image_resolver, log)

    return ""


def blocks_to_markdown(
    blocks: Iterable[Block],
    image_resolver: ImageResolver | None = None,
    log: logging.Logger | None = None,
) -> str:
    """Convert blocks to one Markdown body, preserving their order."""
    return "".join(block_to_markdown(block, image_resolver, log) for block in blocks)
