"""Application configuration."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Load environment variables
load_dotenv()


class Settings(BaseSettings):
    """Application settings."""

    # App settings
    app_name: str = "Hoopcast Fantasy Basketball API"
    debug: bool = os.getenv("DEBUG", "False").lower() == "true"

    # Server settings
    frontend_url: str = os.getenv("FRONTEND_URL", "http://localhost:5173")

    # Cache settings (shared with the CLI through HOOPCAST_CACHE_DIR)
    cache_dir: Path = Path(os.getenv("HOOPCAST_CACHE_DIR", "~/.hoopcast")).expanduser()

    # Season to project, e.g. "2025-26" (defaults to the current season)
    season: Optional[str] = os.getenv("HOOPCAST_SEASON") or None

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
