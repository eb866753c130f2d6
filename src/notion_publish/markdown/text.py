# ABOUTME: Plain string transforms applied to rendered Markdown.
# ABOUTME: Empty-line collapsing, link stripping and code-point truncation.

import re

FRONTMATTER_DELIMITER = "---"

MARKDOWN_LINK_RE = re.compile(r"\[([^\]]*)\]\([^)]*\)")
WHITESPACE_RE = re.compile(r"\s+")


def collapse_empty_lines(text: str) -> str:
    """Drop single blank lines and collapse runs of blank lines to one.

    A single blank line directly after a ``---`` line is kept, since it
    separates the frontmatter from the body. Blank means whitespace-only;
    kept lines are emitted verbatim.

    Args:
        text: Markdown document.

    Returns:
        The document with blank lines normalized.
    """
    lines = text.split("\n")
    result = []
    empty_count = 0

    for i, line in enumerate(lines):
        if line.strip():
            result.append(line)
            empty_count = 0
            continue

        empty_count += 1
        if empty_count == 1:
            if i > 0 and lines[i - 1].strip() == FRONTMATTER_DELIMITER:
                result.append(line)
        elif empty_count == 2:
            result.append(line)

    return "\n".join(result)


def strip_markdown_links(text: str) -> str:
    """Replace every ``[text](url)`` with ``text``."""
    return MARKDOWN_LINK_RE.sub(r"\1", text)


def normalize_whitespace(text: str) -> str:
    """Collapse all whitespace runs, newlines included, to single spaces and trim."""
    return WHITESPACE_RE.sub(" ", text).strip()


def truncate_chars(text: str, limit: int) -> str:
    """Normalize whitespace and keep at most ``limit`` characters.

    Python strings index by code point, so multi-byte scripts count one
    unit per character. No ellipsis is appended.
    """
    return normalize_whitespace(text)[:limit]
