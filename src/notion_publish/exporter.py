# ABOUTME: Batch export of blog and diary databases to Markdown files.
# ABOUTME: Processes entries one by one; per-entry failures never stop the batch.

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

import httpx
from notion_client.errors import HTTPResponseError, RequestTimeoutError

from .config import Config
from .images import ImageDownloader
from .markdown import FrontmatterError, MarkdownWriter, assemble_document, entry_filename
from .markdown.assembler import DATE_FORMAT
from .markdown.models import Category, Entry
from .notion import NotionClient, RateLimiter, fetch_blocks, get_database_title, list_entries

logger = logging.getLogger(__name__)

# Errors that mean the page content could not be fetched
FETCH_ERRORS = (HTTPResponseError, RequestTimeoutError, httpx.HTTPError)


class ExportError(Exception):
    """Raised when a whole database cannot be exported."""
    pass


@dataclass
class ExportSummary:
    """Outcome of exporting one database."""

    category: Category
    found: int = 0
    written: int = 0
    errors: list[dict] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def skipped(self) -> int:
        return len(self.errors)

    @property
    def status(self) -> Literal["completed", "completed_with_warnings"]:
        return "completed_with_warnings" if self.errors else "completed"


def export_entry(
    client: NotionClient,
    entry: Entry,
    writer: MarkdownWriter,
    images: ImageDownloader | None = None,
    log: logging.Logger | None = None,
) -> Path:
    """Fetch, render and write a single entry.

    Content that cannot be fetched is replaced by a placeholder body.

    Returns:
        Path of the written file.
    """
    log = log or logger

    try:
        blocks = fetch_blocks(client, entry.page_id)
    except FETCH_ERRORS as e:
        log.warning(f"Failed to retrieve content for page {entry.page_id}: {e}")
        blocks = None

    resolver = images.resolver(entry.page_id) if images is not None else None
    document = assemble_document(entry, blocks, resolver, log)

    filename = entry_filename(entry.title, entry.category, entry.created_at.strftime(DATE_FORMAT))
    return writer.write(filename, document)


def export_database(
    client: NotionClient,
    category: Category,
    database_id: str,
    writer: MarkdownWriter,
    images: ImageDownloader | None = None,
    log: logging.Logger | None = None,
) -> ExportSummary:
    """Export every done-but-unpublished entry of one database.

    Raises:
        ExportError: If the database itself cannot be retrieved or queried.
    """
    log = log or logger
    start = time.monotonic()
    summary = ExportSummary(category=category)

    log.info(f"Processing {category.value} database...")
    try:
        database = client.get_database(database_id)
        log.info(f"Found database: {get_database_title(database)}")
        entries = list_entries(client, database_id, category, log)
    except FETCH_ERRORS as e:
        raise ExportError(f"Failed to query {category.value} database {database_id}: {e}") from e

    summary.found = len(entries)
    log.info(f"Found {len(entries)} articles in Notion database")

    for entry in entries:
        try:
            path = export_entry(client, entry, writer, images, log)
        except FrontmatterError as e:
            log.warning(f"Failed to generate frontmatter for page {entry.page_id}: {e}")
            summary.errors.append({"type": "frontmatter", "id": entry.page_id, "error": str(e)})
        except OSError as e:
            log.warning(f"Failed to write article '{entry.title}' ({entry.page_id}): {e}")
            summary.errors.append({"type": "write", "id": entry.page_id, "error": str(e)})
        except Exception as e:
            log.warning(f"Failed to convert article '{entry.title}' ({entry.page_id}): {e}")
            summary.errors.append({"type": "entry", "id": entry.page_id, "error": str(e)})
        else:
            summary.written += 1
            log.info(f"Successfully converted article: {path}")

    summary.duration_seconds = round(time.monotonic() - start, 2)
    return summary


def selected_categories(selection: str) -> list[Category]:
    """Map the CLI selection to categories, blog first."""
    if selection == "all":
        return [Category.BLOG, Category.DIARY]
    return [Category(selection)]


def run_export(
    config: Config,
    selection: str,
    client: NotionClient | None = None,
    images: ImageDownloader | None = None,
) -> list[ExportSummary]:
    """Export the selected databases.

    Args:
        config: Validated configuration.
        selection: "blog", "diary" or "all".
        client: Notion client (built from the config token if omitted).
        images: Image downloader (built from the config if omitted).

    Returns:
        One summary per exported database.
    """
    if client is None:
        client = NotionClient(config.token, RateLimiter(calls_per_second=2.5))
    if images is None:
        images = ImageDownloader(config.images_dir, config.images_url_prefix)

    targets = {
        Category.BLOG: (config.blog_database_id, config.blog_output_dir),
        Category.DIARY: (config.diary_database_id, config.diary_output_dir),
    }

    summaries = []
    for category in selected_categories(selection):
        database_id, output_dir = targets[category]
        summary = export_database(client, category, database_id, MarkdownWriter(output_dir), images)
        logger.info(
            f"Export of {category.value} complete: {summary.written}/{summary.found} written, "
            f"{summary.skipped} skipped [{summary.status}] ({summary.duration_seconds:.1f}s)"
        )
        summaries.append(summary)

    return summaries
