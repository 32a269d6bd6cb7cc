"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_TEMPLATES = Path(__file__).parent / "templates"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    page_dir: Path = Path("data")
    template_dir: Path = PACKAGE_TEMPLATES
    page_suffix: str = ".txt"
    front_page: str = "FrontPage"
    sort_front_page: bool = False
    host: str = "0.0.0.0"
    port: int = 8080
    debug: bool = False
    app_title: str = "PlainWiki"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="PLAINWIKI_",
        env_file=".env",
        env_file_encoding="utf-8",
    )
