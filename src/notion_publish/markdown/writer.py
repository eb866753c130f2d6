# ABOUTME: Writes rendered entries to Markdown files.
# ABOUTME: Handles filename generation and whole-file writes.

import logging
import os
import re
import tempfile
from pathlib import Path

from .models import Category, RenderedDocument

logger = logging.getLogger(__name__)

# Characters invalid in most file systems: / \ : * ? " < > |
INVALID_FILENAME_CHARS = re.compile(r'[/\\:*?"<>|]')


def sanitize_filename(name: str) -> str:
    """Replace characters that are invalid in filenames with ``_``.

    Everything else, including spaces and non-Latin scripts, is kept.
    """
    return INVALID_FILENAME_CHARS.sub("_", name)


def entry_filename(title: str, category: Category, date: str | None = None) -> str:
    """Build the output filename for an entry.

    Args:
        title: Entry title.
        category: Entry category; diary files are prefixed with their date.
        date: Creation date as YYYY-MM-DD.

    Returns:
        Filename ending in ``.md``.
    """
    stem = sanitize_filename(title)
    if category is Category.DIARY and date:
        stem = f"{date}_{stem}"
    return f"{stem}.md"


class MarkdownWriter:
    """Writes rendered documents into one output directory."""

    def __init__(self, output_dir: Path):
        self.output_dir = output_dir

    def write(self, filename: str, document: RenderedDocument) -> Path:
        """Write a document, replacing any existing file of the same name.

        The content goes to a temporary file first, so a failed write never
        leaves a truncated file at the destination.

        Returns:
            Path to the written file.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        file_path = self.output_dir / filename

        fd, tmp_name = tempfile.mkstemp(dir=self.output_dir, prefix=".", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(document.content)
            os.replace(tmp_name, file_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug(f"Wrote markdown: {file_path}")
        return file_path
