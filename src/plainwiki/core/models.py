"""Data models for PlainWiki."""

from pydantic import BaseModel, Field

TITLE_PATTERN = r"^[a-zA-Z0-9]+$"


class Page(BaseModel):
    """Represents a wiki page."""

    title: str = Field(pattern=TITLE_PATTERN)
    body: bytes = b""

    @property
    def text(self) -> str:
        """Body decoded for display."""
        return self.body.decode("utf-8", errors="replace")
