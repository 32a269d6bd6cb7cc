"""Storage abstraction for wiki pages."""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

from plainwiki.core.models import Page

logger = logging.getLogger(__name__)


class Storage(ABC):
    """Abstract base class for page storage."""

    @abstractmethod
    async def load_page(self, title: str) -> Page:
        """Load a page by title. Raises OSError if it cannot be read."""
        ...

    @abstractmethod
    async def save_page(self, page: Page) -> None:
        """Save a page, replacing any previous content."""
        ...

    @abstractmethod
    async def list_titles(self) -> list[str]:
        """List all page titles."""
        ...


class FileStorage(Storage):
    """File-based storage implementation.

    Each page is one file holding the raw body bytes, no metadata.
    File naming: Title.txt
    """

    def __init__(self, base_path: Path, suffix: str = ".txt", file_mode: int = 0o600):
        self.base_path = base_path
        self.suffix = suffix
        self.file_mode = file_mode
        self.base_path.mkdir(parents=True, exist_ok=True)

    def title_to_filename(self, title: str) -> str:
        """Convert page title to filename."""
        return title + self.suffix

    def filename_to_title(self, filename: str) -> str:
        """Convert filename to page title."""
        return filename.removesuffix(self.suffix)

    def _get_path(self, title: str) -> Path:
        """Get full path for a page."""
        return self.base_path / self.title_to_filename(title)

    async def load_page(self, title: str) -> Page:
        """Load a page by title."""
        body = self._get_path(title).read_bytes()
        return Page(title=title, body=body)

    async def save_page(self, page: Page) -> None:
        """Save a page.

        The file mode only applies when the file is created; an existing
        file is truncated and keeps its permissions.
        """
        path = self._get_path(page.title)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, self.file_mode)
        with os.fdopen(fd, "wb") as f:
            f.write(page.body)
        logger.info("Saved page %s (%d bytes)", page.title, len(page.body))

    async def list_titles(self) -> list[str]:
        """List all page titles in directory order."""
        titles = []
        with os.scandir(self.base_path) as entries:
            for entry in entries:
                if entry.is_file() and entry.name.endswith(self.suffix):
                    titles.append(self.filename_to_title(entry.name))
        return titles
