# ABOUTME: Fixed-shape frontmatter for exported entries.
# ABOUTME: Serializes fields in a stable order, omitting empty ones.

from dataclasses import dataclass, field, fields


class FrontmatterError(Exception):
    """Raised when frontmatter cannot be generated for an entry."""
    pass


@dataclass
class Frontmatter:
    """Frontmatter fields in output order.

    Field names map to keys through ``metadata["key"]``; the declaration
    order here is the order of lines in the output.
    """
    id: str = field(default="", metadata={"key": "id"})
    title: str = field(default="", metadata={"key": "title"})
    description: str | None = field(default=None, metadata={"key": "description"})
    published_at: str | None = field(default=None, metadata={"key": "publishedAt"})
    date: str | None = field(default=None, metadata={"key": "date"})
    tags: list[str] = field(default_factory=list, metadata={"key": "tags"})
    draft: bool = field(default=False, metadata={"key": "draft"})
    weather: str | None = field(default=None, metadata={"key": "weather"})


def _format_tags(tags: list[str]) -> str:
    return "[" + ", ".join(f'"{tag}"' for tag in tags) + "]"


def serialize_frontmatter(frontmatter: Frontmatter) -> str:
    """Render frontmatter lines, without the ``---`` delimiters.

    Values are written as-is; titles containing YAML syntax are not escaped.

    Raises:
        FrontmatterError: If the title is empty.
    """
    if not frontmatter.title:
        raise FrontmatterError(f"entry {frontmatter.id or '<unknown>'} has no title")

    lines = []
    for f in fields(frontmatter):
        value = getattr(frontmatter, f.name)
        key = f.metadata["key"]

        if isinstance(value, bool):
            if value:
                lines.append(f"{key}: true\n")
        elif isinstance(value, list):
            if value:
                lines.append(f"{key}: {_format_tags(value)}\n")
        elif value:
            lines.append(f"{key}: {value}\n")

    return "".join(lines)
