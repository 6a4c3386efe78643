"""Engine configuration resolved from the environment."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from hoopcast.utils.dates import current_season

load_dotenv()

DEFAULT_CACHE_DIR = "~/.hoopcast"


def get_cache_root() -> Path:
    """Return the root cache directory (``HOOPCAST_CACHE_DIR``, default ~/.hoopcast)."""
    root = Path(os.environ.get("HOOPCAST_CACHE_DIR", DEFAULT_CACHE_DIR)).expanduser()
    root.mkdir(parents=True, exist_ok=True)
    return root


def get_season() -> str:
    """Return the configured season (``HOOPCAST_SEASON``) or the current one."""
    configured = os.environ.get("HOOPCAST_SEASON", "").split("#", 1)[0].strip()
    return configured or current_season()
