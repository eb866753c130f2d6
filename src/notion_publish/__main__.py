# ABOUTME: CLI entry point for notion-publish.
# ABOUTME: Exports the blog and/or diary database to Markdown files.

import argparse
import logging
from logging.handlers import RotatingFileHandler
import sys
from pathlib import Path

from .config import ConfigError, SELECTIONS, load_config
from .exporter import ExportError, run_export


def setup_logging(log_path: Path | None = None, verbose: bool = False) -> None:
    """Configure logging for the application.

    Args:
        log_path: Optional path for log file. If provided, enables rotating file logging.
        verbose: Log debug messages too.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Console handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(log_format, date_format))
    root_logger.addHandler(console_handler)

    # File handler with rotation (if log_path provided)
    if log_path:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(log_format, date_format))
        root_logger.addHandler(file_handler)

    # Suppress noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notion-publish",
        description="Export Notion blog and diary databases to Markdown for a static site",
    )
    parser.add_argument(
        "--type", "-t",
        dest="selection",
        choices=SELECTIONS,
        default="all",
        help="Database type to process: 'blog', 'diary', or 'all' (default)",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Optional YAML config file; environment variables take precedence",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write logs to this file (rotated at 10 MB)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = load_config(args.config)
        config.validate(args.selection)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    try:
        if args.selection in ("blog", "all"):
            config.blog_output_dir.mkdir(parents=True, exist_ok=True)
        if args.selection in ("diary", "all"):
            config.diary_output_dir.mkdir(parents=True, exist_ok=True)
        config.images_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Failed to create output directories: {e}")
        return 1

    if args.selection == "all":
        logger.info("Processing all database types...")

    try:
        run_export(config, args.selection)
    except ExportError as e:
        logger.error(str(e))
        return 1

    logger.info("Conversion completed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
