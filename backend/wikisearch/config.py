"""Runtime configuration read from the environment."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from wikisearch.search.client import DEFAULT_TIMEOUT, WIKIPEDIA_API_URL

VERSION = "0.1.0"

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Process settings. Field names map to upper-case env vars (PORT, LOG_LEVEL, ...)."""

    model_config = SettingsConfigDict(extra="ignore", case_sensitive=False)

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    app_env: str = "production"

    # Logging
    log_level: str = "info"
    log_file: Path = Path("wikipedia-demo.log")
    log_max_size_mb: int = Field(default=5, ge=1)
    log_max_backups: int = Field(default=10, ge=0)
    log_max_age_days: int = Field(default=14, ge=0)
    log_compress: bool = True
    git_revision: str = ""

    # Upstream search API
    wikipedia_api_url: str = WIKIPEDIA_API_URL
    request_timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    # Presentation
    template_dir: Path = PACKAGE_DIR / "templates"
    assets_dir: Path = PACKAGE_DIR / "assets"

    @property
    def is_development(self) -> bool:
        return self.app_env.strip().lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
