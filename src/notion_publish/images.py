# ABOUTME: Downloads images referenced by pages into the site's image directory.
# ABOUTME: Maps remote image URLs to the public path of the local copy.

import hashlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Callable
from urllib.parse import urlparse

import requests

logger = logging.getLogger(__name__)

# Timeout for image downloads (seconds)
DOWNLOAD_TIMEOUT = 30

# Max attempts for a single image
MAX_RETRIES = 3

DEFAULT_EXTENSION = "jpg"


class ImageDownloadError(Exception):
    """Raised when an image cannot be downloaded or saved."""
    pass


def image_extension(url: str) -> str:
    """Guess the file extension from the URL path, ignoring the query string."""
    name = Path(urlparse(url).path).name
    if "." not in name:
        return DEFAULT_EXTENSION
    ext = name.rsplit(".", 1)[1].lower()
    return ext or DEFAULT_EXTENSION


def generate_filename(url: str, page_id: str) -> str:
    """Generate a stable filename for an image.

    Args:
        url: The image URL.
        page_id: The page the image belongs to.

    Returns:
        Filename in format: {page_id}_{hash}.{ext}
    """
    short_hash = hashlib.sha256(url.encode()).hexdigest()[:16]
    return f"{page_id}_{short_hash}.{image_extension(url)}"


class ImageDownloader:
    """Stores images locally and hands out their public paths."""

    def __init__(self, images_dir: Path, url_prefix: str = "/images", session: requests.Session | None = None):
        """Initialize the downloader.

        Args:
            images_dir: Directory images are saved into.
            url_prefix: Public URL path the site serves ``images_dir`` under.
            session: Optional requests session (a new one is created if omitted).
        """
        self.images_dir = images_dir
        self.url_prefix = url_prefix.rstrip("/")
        self._session = session or requests.Session()

    def download(self, url: str, destination: Path) -> int:
        """Download an image to destination.

        Returns:
            Size in bytes.

        Raises:
            ImageDownloadError: If every attempt failed.
        """
        last_error: Exception | None = None
        for attempt in range(MAX_RETRIES):
            try:
                response = self._session.get(url, timeout=DOWNLOAD_TIMEOUT, stream=True)
                response.raise_for_status()
            except requests.RequestException as e:
                last_error = e
                logger.debug(f"Image download attempt {attempt + 1}/{MAX_RETRIES} failed: {e}")
                continue

            content_type = response.headers.get("Content-Type", "")
            if not content_type.startswith("image/"):
                raise ImageDownloadError(f"{url} is not an image (Content-Type: {content_type or 'missing'})")

            return self._save(response, destination)

        raise ImageDownloadError(f"failed to download {url}: {last_error}")

    def _save(self, response: requests.Response, destination: Path) -> int:
        # Stream into a temp file so an interrupted download never lands at destination
        fd, tmp_name = tempfile.mkstemp(dir=destination.parent, prefix=".", suffix=".part")
        try:
            size = 0
            with os.fdopen(fd, "wb") as f:
                for chunk in response.iter_content(chunk_size=8192):
                    f.write(chunk)
                    size += len(chunk)
            os.replace(tmp_name, destination)
        except (requests.RequestException, OSError) as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise ImageDownloadError(f"failed to save image to {destination}: {e}") from e

        return size

    def resolve(self, url: str, page_id: str) -> str:
        """Return the public path of the local copy of ``url``, downloading it if needed."""
        filename = generate_filename(url, page_id)
        destination = self.images_dir / filename

        if destination.exists():
            logger.debug(f"Image already present: {filename}")
        else:
            self.images_dir.mkdir(parents=True, exist_ok=True)
            size = self.download(url, destination)
            logger.debug(f"Downloaded image {filename} ({size} bytes)")

        return f"{self.url_prefix}/{filename}"

    def resolver(self, page_id: str) -> Callable[[str], str]:
        """Bind the downloader to one page, for use by the block renderer."""
        return lambda url: self.resolve(url, page_id)
