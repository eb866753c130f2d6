# ABOUTME: Markdown conversion package.
# ABOUTME: Exports block rendering, document assembly and file writing.

from .assembler import assemble_document, derive_description
from .converter import block_to_markdown, blocks_to_markdown, get_rich_text
from .frontmatter import Frontmatter, FrontmatterError, serialize_frontmatter
from .models import Block, BlockType, Category, Entry, RenderedDocument, RichTextSpan, parse_block
from .text import collapse_empty_lines, strip_markdown_links, truncate_chars
from .writer import MarkdownWriter, entry_filename

__all__ = [
    "assemble_document",
    "derive_description",
    "block_to_markdown",
    "blocks_to_markdown",
    "get_rich_text",
    "Frontmatter",
    "FrontmatterError",
    "serialize_frontmatter",
    "Block",
    "BlockType",
    "Category",
    "Entry",
    "RenderedDocument",
    "RichTextSpan",
    "parse_block",
    "collapse_empty_lines",
    "strip_markdown_links",
    "truncate_chars",
    "MarkdownWriter",
    "entry_filename",
]
